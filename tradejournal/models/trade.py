"""Trade data model."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

IMAGE_PREFIXES = ("data:image", "http")


class Trade(BaseModel):
    """Represents one logged trade and its outcome."""

    id: Optional[int] = Field(default=None, description="Database ID")
    journal_id: Optional[int] = Field(default=None, description="Owning journal ID")
    date: datetime = Field(..., description="Trade date (naive values are local time)")
    result: float = Field(..., allow_inf_nan=False, description="Signed P&L (positive = win)")
    reason: Optional[str] = Field(default=None, description="Trade rationale")
    direction: Optional[str] = Field(default=None, description="Trade direction (Buy/Sell)")
    quality: Optional[str] = Field(default=None, description="Setup grade (A+, A, B, C)")
    session: Optional[str] = Field(default=None, description="Trading session label")
    pair: Optional[str] = Field(default=None, description="Traded instrument")
    before_image_url: Optional[str] = Field(default=None, description="Screenshot before entry")
    after_image_url: Optional[str] = Field(default=None, description="Screenshot after exit")

    model_config = {"frozen": True}

    @field_validator("before_image_url", "after_image_url")
    @classmethod
    def _keep_valid_image(cls, value: Optional[str]) -> Optional[str]:
        """Keep only inline data images or http(s) URLs."""
        if not value or not value.strip():
            return None
        if value.startswith(IMAGE_PREFIXES):
            return value
        return None

    @classmethod
    def from_entry(cls, amount: float, outcome: str, **fields) -> "Trade":
        """Build a trade from an unsigned amount and a win/loss outcome.

        Args:
            amount: Trade amount; the sign is ignored.
            outcome: "loss" makes the result negative, anything else positive.
            **fields: Remaining Trade fields (date, pair, reason, ...).

        Returns:
            Trade with a correctly signed result.
        """
        magnitude = abs(float(amount))
        result = -magnitude if outcome.lower() == "loss" else magnitude
        return cls(result=result, **fields)

    @property
    def is_win(self) -> bool:
        return self.result > 0

    @property
    def is_loss(self) -> bool:
        return self.result < 0
