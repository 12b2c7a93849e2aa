"""HR payroll package.

Organized by feature modules (rate_schedules, salary_templates, payroll, ...)
with a thin Flask controller layer over service/repository layers.
"""
