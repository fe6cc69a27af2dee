from sqlalchemy.orm import Session
from ..models.settings import AppSetting, DEFAULT_ALERT_STOCK_LEVEL
from ..schemas.settings_schemas import SettingsSnapshot, SettingsUpdate


def get_settings(db: Session) -> AppSetting:
    """Return the single settings row, creating the defaults on first read."""
    setting = db.query(AppSetting).order_by(AppSetting.id).first()

    if not setting:
        setting = AppSetting()
        db.add(setting)
        db.commit()
        db.refresh(setting)

    return setting


def update_settings(db: Session, update_data: SettingsUpdate) -> AppSetting:
    setting = get_settings(db)

    for field, value in update_data.model_dump(exclude_unset=True).items():
        setattr(setting, field, value)

    db.commit()
    db.refresh(setting)
    return setting


def get_settings_snapshot(db: Session) -> SettingsSnapshot:
    setting = get_settings(db)
    snapshot = SettingsSnapshot.model_validate(setting)
    if snapshot.alert_stock_level is None:
        snapshot = snapshot.model_copy(
            update={"alert_stock_level": DEFAULT_ALERT_STOCK_LEVEL})
    return snapshot
