from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Company


class CompanyRepository(Protocol):
    def find_by_id(self, company_id: str) -> Optional[Company]:
        raise NotImplementedError

    def find_all(
        self,
        *,
        name: Optional[str] = None,
        status: Optional[str] = None,
        skip: int = 0,
        take: int = 10,
    ) -> tuple[Sequence[Company], int]:
        """Filtered page of companies plus the total match count."""

        raise NotImplementedError
