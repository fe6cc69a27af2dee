from collections import defaultdict
from typing import Dict, List

from sqlalchemy.orm import Session

from shared.core.schemas import ExportResponse
from shared.exporthelper import export_rows
from ..enum.inventory_enum import StockStatus, TransactionType
from ..models.items import Item
from ..models.transactions import Transaction

STOCK_COLUMNS = {
    "name": "Name",
    "category": "Category",
    "stock": "Current Stock",
    "min_stock": "Minimum Stock",
    "status": "Status",
    "holders": "Users",
}

TRANSACTION_COLUMNS = {
    "created_at": "Date",
    "item_name": "Item",
    "type": "Type",
    "quantity": "Quantity",
    "ticket_number": "Ticket",
    "requester_name": "Requester",
    "department": "Department",
}


def _holders_by_item(db: Session) -> Dict[int, List[str]]:
    holders = defaultdict(list)
    outbound = (
        db.query(Transaction)
        .filter(Transaction.type == TransactionType.OUT.value,
                Transaction.item_id.isnot(None),
                Transaction.requester_name.isnot(None))
        .order_by(Transaction.created_at, Transaction.id)
        .all()
    )
    for tx in outbound:
        holders[tx.item_id].append(
            f"{tx.requester_name} ({tx.department or 'N/A'})")
    return holders


def export_stock(db: Session) -> ExportResponse:
    holders = _holders_by_item(db)
    rows = []
    for item in db.query(Item).order_by(Item.name).all():
        status = StockStatus.LOW if item.stock <= item.min_stock else StockStatus.NORMAL
        rows.append({
            "name": item.name,
            "category": item.category,
            "stock": item.stock,
            "min_stock": item.min_stock,
            "status": status.value,
            "holders": " | ".join(holders.get(item.id, [])),
        })
    return export_rows(rows, filename="stock.csv", column_map=STOCK_COLUMNS)


def export_transactions(db: Session) -> ExportResponse:
    rows = []
    query = db.query(Transaction).order_by(
        Transaction.created_at.desc(), Transaction.id.desc())
    for tx in query.all():
        rows.append({
            "created_at": tx.created_at.isoformat() if tx.created_at else None,
            "item_name": tx.item_name,
            "type": tx.type,
            "quantity": tx.quantity,
            "ticket_number": tx.ticket_number,
            "requester_name": tx.requester_name,
            "department": tx.department,
        })
    return export_rows(rows, filename="transactions.csv", column_map=TRANSACTION_COLUMNS)
