from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from shared.core.schemas import DB_INT_MAX

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class SettingsOut(BaseModel):
    """Public view, the SMTP password never leaves the server."""
    id: int
    app_name: Optional[str] = None
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None
    alert_email: Optional[str] = None
    alert_stock_level: Optional[int] = None
    smtp_host: Optional[str] = None
    smtp_port: Optional[int] = None
    smtp_user: Optional[str] = None
    webhook_teams: Optional[str] = None
    webhook_slack: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SettingsUpdate(BaseModel):
    app_name: Optional[str] = Field(None, min_length=1, max_length=100)
    logo_url: Optional[str] = Field(None, max_length=500)
    primary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    alert_email: Optional[str] = Field(None, max_length=200)
    alert_stock_level: Optional[int] = Field(None, ge=0, le=DB_INT_MAX)
    smtp_host: Optional[str] = Field(None, max_length=200)
    smtp_port: Optional[int] = Field(None, ge=1, le=65535)
    smtp_user: Optional[str] = Field(None, max_length=200)
    smtp_pass: Optional[str] = Field(None, max_length=200)
    webhook_teams: Optional[str] = Field(None, max_length=500)
    webhook_slack: Optional[str] = Field(None, max_length=500)

    model_config = {"extra": "forbid"}


class SettingsSnapshot(BaseModel):
    """Read-only copy of the settings handed to the ledger."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    alert_email: Optional[str] = None
    alert_stock_level: Optional[int] = None
    smtp_host: Optional[str] = None
    smtp_port: Optional[int] = None
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None
    webhook_teams: Optional[str] = None
    webhook_slack: Optional[str] = None
