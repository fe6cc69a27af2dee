import logging

from sqlalchemy.orm import Session

from shared.core.database import SessionLocal
from shared.models.users import Users
from inventory_service.app.crud.settings_crud import get_settings
from inventory_service.app.models.items import Item

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin"

DEMO_ITEMS = [
    {"name": "Logitech Wireless Mouse", "category": "Peripherals", "stock": 12, "min_stock": 5},
    {"name": "Redragon Mechanical Keyboard", "category": "Peripherals", "stock": 4, "min_stock": 5},
    {"name": "Dell 24 Monitor", "category": "Monitors", "stock": 8, "min_stock": 3},
]


def seed_database(db: Session, with_demo_items: bool = True):
    """Idempotent: only fills what is missing."""
    admin = db.query(Users).filter(
        Users.username == DEFAULT_ADMIN_USERNAME).first()
    if not admin:
        admin = Users(username=DEFAULT_ADMIN_USERNAME, status="active")
        admin.set_password(DEFAULT_ADMIN_PASSWORD)
        db.add(admin)
        db.commit()
        logger.info("Default admin user created")

    get_settings(db)

    if with_demo_items and db.query(Item).count() == 0:
        db.add_all([Item(**data) for data in DEMO_ITEMS])
        db.commit()
        logger.info("Demo items created")


def run_seed():
    db = SessionLocal()
    try:
        seed_database(db)
    except Exception:
        db.rollback()
        logger.exception("Error seeding database")
        raise
    finally:
        db.close()
