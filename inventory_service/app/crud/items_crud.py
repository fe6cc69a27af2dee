# app/crud/items_crud.py
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.exceptions import ConflictError, NotFoundError
from ..enum.inventory_enum import ItemDeletePolicy
from ..models.items import Item
from ..models.transactions import Transaction
from ..schemas.items_schemas import ItemCreate, ItemQueryParams, ItemUpdate


def get_items(db: Session, params: Optional[ItemQueryParams] = None) -> List[Item]:
    query = db.query(Item)

    if params and params.search:
        search_term = f"%{params.search.strip()}%"
        query = query.filter(or_(
            Item.name.ilike(search_term),
            Item.category.ilike(search_term)
        ))

    if params and params.low_stock_only:
        query = query.filter(Item.stock <= Item.min_stock)

    return query.order_by(Item.created_at.desc(), Item.id.desc()).all()


def get_item_by_id(db: Session, item_id: int) -> Optional[Item]:
    return db.get(Item, item_id)


def create_item(db: Session, item: ItemCreate, default_min_stock: int) -> Item:
    item_data = item.model_dump()
    if item_data.get("min_stock") is None:
        item_data["min_stock"] = default_min_stock
    db_item = Item(**item_data)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def update_item(db: Session, item_id: int, item: ItemUpdate) -> Item:
    db_item = get_item_by_id(db, item_id)
    if not db_item:
        raise NotFoundError("Item not found")

    # Update only the fields that are provided
    for k, v in item.model_dump(exclude_unset=True).items():
        if v is None:
            continue  # name/category/min_stock are not nullable
        setattr(db_item, k, v)

    db.commit()
    db.refresh(db_item)
    return db_item


def count_item_transactions(db: Session, item_id: int) -> int:
    return db.query(func.count(Transaction.id)).filter(
        Transaction.item_id == item_id).scalar() or 0


# ----------------- Delete Item -----------------
def delete_item(db: Session, item_id: int, policy: Optional[ItemDeletePolicy] = None) -> bool:
    """
    Delete an item.
    forbid: refuse while transactions reference it.
    allow: detach the history first, transactions keep their name/category snapshot.
    """
    policy = policy or ItemDeletePolicy(settings.ITEM_DELETE_POLICY.lower())

    db_item = get_item_by_id(db, item_id)
    if not db_item:
        raise NotFoundError("Item not found")

    history = count_item_transactions(db, item_id)
    if history and policy == ItemDeletePolicy.FORBID:
        raise ConflictError(
            f"Cannot delete item. It has {history} transaction(s) in its history.")

    if history:
        db.query(Transaction).filter(Transaction.item_id == item_id).update(
            {"item_id": None}, synchronize_session=False)

    db.delete(db_item)
    db.commit()
    return True
