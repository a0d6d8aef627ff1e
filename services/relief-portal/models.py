"""Pydantic models for extracted totals and the /api/gfm wire format."""

import math
from datetime import datetime

from pydantic import BaseModel, Field


class ExtractedToken(BaseModel):
    currency_symbol: str
    raw_text: str
    numeric_value: float


class TotalsResult(BaseModel):
    success: bool
    goal: float | None = None
    raised: float | None = None
    currency_symbol: str | None = None
    error_message: str | None = None

    def to_response(self) -> "TotalsResponse":
        return TotalsResponse(
            ok=self.success,
            goal=self.goal,
            raised=self.raised,
            currencySymbol=self.currency_symbol,
            error=self.error_message,
        )


class TotalsResponse(BaseModel):
    """Body returned by GET /api/gfm. Unset fields are dropped on the wire."""

    ok: bool
    goal: float | None = None
    raised: float | None = None
    currencySymbol: str | None = None
    error: str | None = None


class TotalsSnapshot(BaseModel):
    goal: float
    raised: float
    currencySymbol: str
    live: bool
    percent: int = Field(ge=0, le=100)
    updatedAt: datetime | None = None


def progress_percent(raised: float, goal: float) -> int:
    """Share of the goal reached, rounded and clamped to 0..100."""
    if not goal or goal <= 0:
        return 0
    # Half-up rounding, same as the browser-side script
    return max(0, min(100, math.floor(raised / goal * 100 + 0.5)))
