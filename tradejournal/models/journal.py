"""Journal data model."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Journal(BaseModel):
    """Represents a named trading journal (one per account or strategy)."""

    id: Optional[int] = Field(default=None, description="Database ID")
    name: str = Field(..., min_length=1, description="Journal name")
    created_at: datetime = Field(..., description="Creation timestamp")
    trade_count: int = Field(default=0, ge=0, description="Number of trades logged")

    model_config = {"frozen": True}
