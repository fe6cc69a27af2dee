from pydantic import BaseModel
from typing import List

from .items_schemas import ItemOut
from .transactions_schemas import TransactionWithItemOut


class DashboardSummary(BaseModel):
    total_items: int
    low_stock_items: int
    total_in: int
    total_out: int
    top_stock: List[ItemOut]
    recent_transactions: List[TransactionWithItemOut]
