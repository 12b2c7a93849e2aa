from __future__ import annotations

from typing import Optional, Protocol

from .model import SalaryTemplate


class SalaryTemplateRepository(Protocol):
    def get_latest_for_company(self, company_id: str) -> Optional[SalaryTemplate]:
        """The company's template with the newest ``created_at``."""

        raise NotImplementedError
