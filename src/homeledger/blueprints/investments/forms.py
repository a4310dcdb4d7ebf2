"""Investment form definitions."""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import Field, field_validator

from ...models.investment import InvestmentType
from ..forms import PayloadForm, Tags, UtcDatetime

Symbol = Annotated[str, Field(min_length=1, max_length=32)]
InvestmentName = Annotated[str, Field(min_length=1, max_length=128)]


class InvestmentUpdateForm(PayloadForm):
    """Position fields a client may change; unsent fields are left alone."""

    type: InvestmentType = None
    symbol: Symbol = None
    name: InvestmentName = None
    quantity: float = Field(default=None, ge=0)
    purchase_price: float = Field(default=None, ge=0)
    current_price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)
    tags: Tags = Field(default_factory=list)

    @field_validator("symbol")
    @classmethod
    def upper_symbol(cls, value: str) -> str:
        return value.upper()


class InvestmentForm(InvestmentUpdateForm):
    type: InvestmentType
    symbol: Symbol
    name: InvestmentName
    quantity: float = Field(ge=0)
    purchase_price: float = Field(ge=0)
    purchase_date: Optional[UtcDatetime] = None


__all__ = ["InvestmentForm", "InvestmentUpdateForm"]
