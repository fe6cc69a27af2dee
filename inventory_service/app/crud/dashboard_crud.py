from sqlalchemy import func
from sqlalchemy.orm import Session

from ..enum.inventory_enum import TransactionType
from ..models.items import Item
from ..models.transactions import Transaction
from ..schemas.dashboard_schemas import DashboardSummary
from ..schemas.items_schemas import ItemOut
from .transactions_crud import list_transactions
from ..schemas.transactions_schemas import to_transaction_with_item

TOP_STOCK_LIMIT = 7
RECENT_TRANSACTIONS_LIMIT = 5


def _total_quantity(db: Session, tx_type: TransactionType) -> int:
    return db.query(func.coalesce(func.sum(Transaction.quantity), 0)).filter(
        Transaction.type == tx_type.value).scalar() or 0


def get_dashboard_summary(db: Session) -> DashboardSummary:
    total_items = db.query(func.count(Item.id)).scalar() or 0
    low_stock_items = db.query(func.count(Item.id)).filter(
        Item.stock <= Item.min_stock).scalar() or 0

    top_stock = (
        db.query(Item)
        .order_by(Item.stock.desc(), Item.id)
        .limit(TOP_STOCK_LIMIT)
        .all()
    )
    recent = list_transactions(db, limit=RECENT_TRANSACTIONS_LIMIT)

    return DashboardSummary(
        total_items=total_items,
        low_stock_items=low_stock_items,
        total_in=_total_quantity(db, TransactionType.IN),
        total_out=_total_quantity(db, TransactionType.OUT),
        top_stock=[ItemOut.model_validate(item) for item in top_stock],
        recent_transactions=[to_transaction_with_item(t, i) for t, i in recent],
    )
