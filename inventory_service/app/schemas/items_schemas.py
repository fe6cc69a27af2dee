from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Optional
from datetime import datetime

from shared.core.schemas import DB_INT_MAX


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=128)

    @field_validator("name", "category", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ItemCreate(ItemBase):
    stock: int = Field(0, ge=0, le=DB_INT_MAX)
    # falls back to the global alert level when omitted
    min_stock: Optional[int] = Field(None, ge=0, le=DB_INT_MAX)


class ItemUpdate(BaseModel):
    """Stock is deliberately absent: it only moves through transactions."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[str] = Field(None, min_length=1, max_length=128)
    min_stock: Optional[int] = Field(None, ge=0, le=DB_INT_MAX)

    model_config = {"extra": "forbid"}


class ItemOut(ItemBase):
    id: int
    stock: int
    min_stock: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock


class ItemQueryParams(BaseModel):
    search: Optional[str] = None
    low_stock_only: bool = False
