from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from shared.core.schemas import DB_INT_MAX
from ..enum.inventory_enum import TransactionType
from .items_schemas import ItemOut


class TransactionCreate(BaseModel):
    item_id: int = Field(..., le=DB_INT_MAX)
    quantity: int = Field(..., ge=1, le=DB_INT_MAX)
    type: TransactionType
    ticket_number: Optional[str] = Field(None, max_length=64)
    requester_name: Optional[str] = Field(None, max_length=200)
    department: Optional[str] = Field(None, max_length=128)

    @field_validator("ticket_number", "requester_name", "department", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class TransactionOut(BaseModel):
    id: int
    item_id: Optional[int] = None
    quantity: int
    type: TransactionType
    ticket_number: Optional[str] = None
    requester_name: Optional[str] = None
    department: Optional[str] = None
    item_name: Optional[str] = None
    item_category: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TransactionWithItemOut(TransactionOut):
    item: Optional[ItemOut] = None


def to_transaction_with_item(transaction, item) -> TransactionWithItemOut:
    data = TransactionOut.model_validate(transaction).model_dump()
    data["item"] = ItemOut.model_validate(item) if item is not None else None
    return TransactionWithItemOut(**data)
