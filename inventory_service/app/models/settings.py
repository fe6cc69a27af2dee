from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func
from shared.core.database import Base

DEFAULT_APP_NAME = "TI Inventory"
DEFAULT_PRIMARY_COLOR = "#0ea5e9"
DEFAULT_ALERT_STOCK_LEVEL = 5
DEFAULT_SMTP_PORT = 587


class AppSetting(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # ---------- Branding ----------
    app_name = Column(String(100), default=DEFAULT_APP_NAME)
    logo_url = Column(String(500))
    primary_color = Column(String(7), default=DEFAULT_PRIMARY_COLOR)

    # ---------- Alerts ----------
    alert_email = Column(String(200))
    alert_stock_level = Column(Integer, default=DEFAULT_ALERT_STOCK_LEVEL)

    # ---------- SMTP ----------
    smtp_host = Column(String(200))
    smtp_port = Column(Integer, default=DEFAULT_SMTP_PORT)
    smtp_user = Column(String(200))
    smtp_pass = Column(String(200))

    # ---------- Webhooks ----------
    webhook_teams = Column(String(500))
    webhook_slack = Column(String(500))

    # ---------- Meta ----------
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
