"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_BASIC_DUTY = 30
BASIC_DUTY_FIELD_KEY = "basicDuty"

PF_RATE = Decimal("0.12")
ESIC_RATE = Decimal("0.0075")
LWF_AMOUNT = Decimal("10")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Day of month used when looking up a statutory rate for a payroll month.
RATE_LOOKUP_DAY = 15
