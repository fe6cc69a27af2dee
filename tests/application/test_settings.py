"""Tests for the single settings row and its snapshot."""

from inventory_service.app.crud import settings_crud
from inventory_service.app.models.settings import (
    DEFAULT_ALERT_STOCK_LEVEL, DEFAULT_PRIMARY_COLOR, AppSetting)
from inventory_service.app.schemas.settings_schemas import SettingsOut, SettingsUpdate


class TestGetSettings:
    def test_defaults_created_on_first_read(self, db):
        setting = settings_crud.get_settings(db)
        assert setting.id is not None
        assert setting.primary_color == DEFAULT_PRIMARY_COLOR
        assert setting.alert_stock_level == DEFAULT_ALERT_STOCK_LEVEL

    def test_single_row(self, db):
        first = settings_crud.get_settings(db)
        second = settings_crud.get_settings(db)
        assert first.id == second.id
        assert db.query(AppSetting).count() == 1


class TestUpdateSettings:
    def test_partial_update(self, db):
        settings_crud.update_settings(db, SettingsUpdate(alert_email="ops@example.com"))
        setting = settings_crud.update_settings(db, SettingsUpdate(alert_stock_level=2))

        assert setting.alert_email == "ops@example.com"
        assert setting.alert_stock_level == 2

    def test_public_view_hides_smtp_password(self, db):
        setting = settings_crud.update_settings(db, SettingsUpdate(smtp_pass="hunter2"))
        assert "smtp_pass" not in SettingsOut.model_validate(setting).model_dump()


class TestSnapshot:
    def test_snapshot_carries_alert_targets(self, db):
        settings_crud.update_settings(db, SettingsUpdate(
            alert_email="ops@example.com",
            webhook_slack="https://hooks.slack.example.com/x",
            smtp_pass="hunter2"))

        snapshot = settings_crud.get_settings_snapshot(db)

        assert snapshot.alert_email == "ops@example.com"
        assert snapshot.webhook_slack == "https://hooks.slack.example.com/x"
        assert snapshot.smtp_pass == "hunter2"

    def test_missing_alert_level_falls_back(self, db):
        setting = settings_crud.get_settings(db)
        setting.alert_stock_level = None
        db.commit()

        assert settings_crud.get_settings_snapshot(db).alert_stock_level == DEFAULT_ALERT_STOCK_LEVEL
