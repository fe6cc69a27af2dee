# app/router/items_router.py
from typing import List
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session
from shared.core.database import get_db
from shared.core.auth import validate_current_token
from shared.core.exceptions import NotFoundError
from shared.core.schemas import DB_INT_MAX
from ..schemas.items_schemas import ItemCreate, ItemOut, ItemQueryParams, ItemUpdate
from ..crud import items_crud as crud
from ..crud.settings_crud import get_settings_snapshot

router = APIRouter(prefix="/api/items",
                   tags=["items"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=List[ItemOut])
def read_items(
    params: ItemQueryParams = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_items(db, params)


@router.get("/{item_id}", response_model=ItemOut)
def read_item(item_id: int = Path(..., le=DB_INT_MAX), db: Session = Depends(get_db)):
    db_item = crud.get_item_by_id(db, item_id)
    if not db_item:
        raise NotFoundError("Item not found")
    return db_item


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def create_item(item: ItemCreate, db: Session = Depends(get_db)):
    snapshot = get_settings_snapshot(db)
    return crud.create_item(db, item, default_min_stock=snapshot.alert_stock_level)


@router.patch("/{item_id}", response_model=ItemOut)
def update_item(
    item: ItemUpdate,
    item_id: int = Path(..., le=DB_INT_MAX),
    db: Session = Depends(get_db)
):
    return crud.update_item(db, item_id, item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int = Path(..., le=DB_INT_MAX), db: Session = Depends(get_db)):
    crud.delete_item(db, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
