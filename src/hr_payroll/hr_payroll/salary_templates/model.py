from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..core.enums import CalculationType, SalaryFieldPurpose, SalaryFieldType


@dataclass(frozen=True)
class SalaryRules:
    default_value: Any = None
    calculation_type: Optional[CalculationType] = None
    percentage: Optional[Decimal] = None
    based_on: Optional[str] = None
    amount: Optional[Decimal] = None

    @property
    def has_default(self) -> bool:
        return self.default_value is not None


@dataclass(frozen=True)
class SalaryField:
    """One configurable column of a company's payroll sheet."""

    key: str
    label: str
    type: SalaryFieldType
    purpose: SalaryFieldPurpose
    category: Optional[str] = None
    enabled: bool = True
    rules: Optional[SalaryRules] = None
    requires_admin_input: bool = False


@dataclass(frozen=True)
class SalaryTemplate:
    """Stored template row; field lists are kept as raw JSON until parsed."""

    template_id: int
    company_id: str
    mandatory_fields: Any
    optional_fields: Any
    custom_fields: Any
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ParsedTemplate:
    """Enabled fields in evaluation order (mandatory, optional, custom), plus per-purpose views."""

    fields: tuple[SalaryField, ...]
    custom_fields: tuple[SalaryField, ...] = ()
    allowance_fields: tuple[SalaryField, ...] = ()
    deduction_fields: tuple[SalaryField, ...] = ()
    information_fields: tuple[SalaryField, ...] = ()
    calculation_fields: tuple[SalaryField, ...] = ()

    @property
    def admin_input_fields(self) -> tuple[SalaryField, ...]:
        return tuple(f for f in self.custom_fields if f.requires_admin_input)

    def find_calculation_field(self, key: str) -> Optional[SalaryField]:
        return next((f for f in self.calculation_fields if f.key == key), None)
