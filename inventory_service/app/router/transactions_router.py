# app/router/transactions_router.py
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
from shared.core.database import get_db
from shared.core.auth import validate_current_token
from shared.helpers.notification_helper import LowStockNotifier, build_low_stock_notifier
from ..schemas.settings_schemas import SettingsSnapshot
from ..schemas.transactions_schemas import (
    TransactionCreate, TransactionOut, TransactionWithItemOut, to_transaction_with_item)
from ..crud import transactions_crud as crud
from ..crud.settings_crud import get_settings_snapshot

router = APIRouter(prefix="/api/transactions",
                   tags=["transactions"], dependencies=[Depends(validate_current_token)])


# FastAPI caches this per request, the settings row is read once
def get_request_settings(db: Session = Depends(get_db)) -> SettingsSnapshot:
    return get_settings_snapshot(db)


def get_low_stock_notifier(
    snapshot: SettingsSnapshot = Depends(get_request_settings)
) -> LowStockNotifier:
    return build_low_stock_notifier(
        smtp_host=snapshot.smtp_host,
        smtp_port=snapshot.smtp_port,
        smtp_user=snapshot.smtp_user,
        smtp_pass=snapshot.smtp_pass,
    )


@router.get("", response_model=List[TransactionWithItemOut])
def read_transactions(db: Session = Depends(get_db)):
    return [to_transaction_with_item(t, i) for t, i in crud.list_transactions(db)]


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction: TransactionCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    snapshot: SettingsSnapshot = Depends(get_request_settings),
    notifier: LowStockNotifier = Depends(get_low_stock_notifier)
):
    # alerts go out after the response, never inside the request
    def schedule(event):
        background_tasks.add_task(notifier.notify, event)

    return crud.apply_transaction(db, transaction, snapshot, notify=schedule)
