from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Company:
    """Client company that guards are deployed to."""

    company_id: str
    name: str
    status: str = "ACTIVE"
    address: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.company_id, "name": self.name, "status": self.status, "address": self.address}
