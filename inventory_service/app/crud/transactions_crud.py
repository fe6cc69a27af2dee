# app/crud/transactions_crud.py
"""Stock-transaction ledger.

Every movement is recorded and applied to its item's stock counter in one
database transaction. The counter is changed by a single conditional UPDATE
(add the signed delta, clamp at zero) so two concurrent movements on the same
item never lose an update. A low-stock alert is raised after commit and is
best-effort: it can never undo or fail the movement.
"""
import logging
from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel
from sqlalchemy import case, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.exceptions import (
    InsufficientStockError, InternalError, NotFoundError, ValidationError)
from shared.core.schemas import DB_INT_MAX
from shared.helpers.notification_helper import NotificationEvent
from ..enum.inventory_enum import MissingItemPolicy, OversellPolicy, TransactionType
from ..models.items import Item
from ..models.transactions import Transaction
from ..schemas.settings_schemas import SettingsSnapshot
from ..schemas.transactions_schemas import TransactionCreate

logger = logging.getLogger(__name__)

Notify = Callable[[NotificationEvent], object]


class LedgerPolicy(BaseModel):
    oversell: OversellPolicy = OversellPolicy.CLAMP
    missing_item: MissingItemPolicy = MissingItemPolicy.REJECT

    @classmethod
    def from_settings(cls) -> "LedgerPolicy":
        return cls(
            oversell=settings.OVERSELL_POLICY.lower(),
            missing_item=settings.MISSING_ITEM_POLICY.lower(),
        )


def signed_delta(tx_type: TransactionType, quantity: int) -> int:
    return quantity if tx_type == TransactionType.IN else -quantity


def _validate_request(request: TransactionCreate) -> TransactionType:
    if request.quantity is None or request.quantity < 1:
        raise ValidationError("Quantity must be at least 1", field="quantity")
    if request.quantity > DB_INT_MAX:
        raise ValidationError(
            f"Quantity must be at most {DB_INT_MAX}", field="quantity")
    try:
        return TransactionType(request.type)
    except ValueError:
        raise ValidationError(
            f"Unknown transaction type '{request.type}'", field="type")


def apply_stock_delta(db: Session, item_id: int, delta: int, required: Optional[int] = None) -> bool:
    """Add delta to the item's stock in one statement, clamping at zero.

    With `required`, the row only matches while stock >= required. A
    positive delta only matches while the result still fits the column.
    Returns False when no row matched.
    """
    stmt = (
        update(Item)
        .where(Item.id == item_id)
        .values(stock=case((Item.stock + delta < 0, 0), else_=Item.stock + delta))
        .execution_options(synchronize_session=False)
    )
    if required is not None:
        stmt = stmt.where(Item.stock >= required)
    if delta > 0:
        stmt = stmt.where(Item.stock <= DB_INT_MAX - delta)
    result = db.execute(stmt)
    return result.rowcount > 0


def _current_levels(db: Session, item_id: int):
    return db.query(Item.stock, Item.min_stock, Item.name).filter(
        Item.id == item_id).first()


def apply_transaction(
    db: Session,
    request: TransactionCreate,
    settings_snapshot: SettingsSnapshot,
    notify: Optional[Notify] = None,
    policy: Optional[LedgerPolicy] = None,
) -> Transaction:
    policy = policy or LedgerPolicy.from_settings()
    tx_type = _validate_request(request)

    # ids past the column range cannot exist
    item = db.get(Item, request.item_id) if request.item_id <= DB_INT_MAX else None
    if item is None:
        raise NotFoundError(
            f"Item {request.item_id} not found", field="item_id")

    delta = signed_delta(tx_type, request.quantity)
    required = None
    if tx_type == TransactionType.OUT and policy.oversell == OversellPolicy.REJECT:
        required = request.quantity

    levels = None
    try:
        transaction = Transaction(
            item_id=item.id,
            quantity=request.quantity,
            type=tx_type.value,
            ticket_number=request.ticket_number,
            requester_name=request.requester_name,
            department=request.department,
            item_name=item.name,
            item_category=item.category,
        )
        db.add(transaction)
        db.flush()

        applied = apply_stock_delta(db, item.id, delta, required)
        levels = _current_levels(db, item.id)

        if not applied:
            if levels is not None:
                # row exists, so only a stock guard could have failed
                db.rollback()
                if tx_type == TransactionType.IN:
                    raise ValidationError(
                        f"Stock of item {request.item_id} cannot exceed {DB_INT_MAX}",
                        field="quantity")
                raise InsufficientStockError(levels.stock, request.quantity)

            if policy.missing_item == MissingItemPolicy.REJECT:
                db.rollback()
                raise NotFoundError(
                    f"Item {request.item_id} no longer exists", field="item_id")

            logger.warning(
                "Item %s vanished before its stock was adjusted, keeping transaction as history only",
                request.item_id)
            transaction.item_id = None

        db.commit()
        db.refresh(transaction)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to persist %s transaction for item %s",
                         tx_type.value, request.item_id)
        raise InternalError()

    if levels is None:
        return transaction

    logger.info(
        "Applied %s of %s on item %s, stock now %s",
        tx_type.value, request.quantity, request.item_id, levels.stock)

    if tx_type == TransactionType.OUT and levels.stock <= levels.min_stock:
        event = NotificationEvent(
            item_id=request.item_id,
            item_name=levels.name,
            stock=levels.stock,
            min_stock=levels.min_stock,
            alert_email=settings_snapshot.alert_email,
            webhook_teams=settings_snapshot.webhook_teams,
            webhook_slack=settings_snapshot.webhook_slack,
        )
        logger.warning("Low stock on '%s': %s left (minimum %s)",
                       levels.name, levels.stock, levels.min_stock)
        _dispatch(notify, event)

    return transaction


def _dispatch(notify: Optional[Notify], event: NotificationEvent):
    if notify is None:
        return
    try:
        notify(event)
    except Exception:
        logger.exception(
            "Low stock notification for item %s could not be dispatched", event.item_id)


def list_transactions(db: Session, limit: Optional[int] = None) -> List[Tuple[Transaction, Optional[Item]]]:
    """Newest first, ties broken by id; item is None once it was deleted."""
    query = (
        db.query(Transaction, Item)
        .outerjoin(Item, Transaction.item_id == Item.id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    if limit:
        query = query.limit(limit)
    return [(transaction, item) for transaction, item in query.all()]
