# app/router/settings_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud import settings_crud as crud
from ..schemas.settings_schemas import SettingsOut, SettingsUpdate
from shared.core.database import get_db
from shared.core.auth import validate_current_token

router = APIRouter(
    prefix="/api/settings",
    tags=["settings"],
)


# Public: the login page needs the branding before anyone signs in
@router.get("", response_model=SettingsOut)
def read_settings(db: Session = Depends(get_db)):
    return crud.get_settings(db)


@router.patch("", response_model=SettingsOut, dependencies=[Depends(validate_current_token)])
def update_settings(update_data: SettingsUpdate, db: Session = Depends(get_db)):
    return crud.update_settings(db, update_data)
