from __future__ import annotations

from typing import Optional

from ..common.validators import parse_page
from ..core.constants import DEFAULT_PAGE_SIZE
from .repository import CompanyRepository


class CompanyService:
    """Read-only company lookups for payroll screens."""

    def __init__(self, companies: CompanyRepository, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._companies = companies
        self._page_size = page_size

    def list(
        self,
        *,
        name: Optional[str] = None,
        status: Optional[str] = None,
        page: object = None,
        limit: object = None,
    ) -> dict:
        page_i, limit_i = parse_page(page, limit, default_limit=self._page_size)
        items, total = self._companies.find_all(
            name=name or None,
            status=status.upper() if status else None,
            skip=(page_i - 1) * limit_i,
            take=limit_i,
        )
        return {
            "data": [c.to_dict() for c in items],
            "total": total,
            "page": page_i,
            "limit": limit_i,
            "hasNextPage": page_i * limit_i < total,
            "hasPrevPage": page_i > 1,
        }
