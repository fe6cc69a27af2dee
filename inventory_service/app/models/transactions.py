# app/models/transactions.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shared.core.database import Base


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_transactions_quantity_positive"),
        CheckConstraint("type IN ('in', 'out')", name="ck_transactions_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(
        Integer,
        ForeignKey("items.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    quantity = Column(Integer, nullable=False)
    type = Column(String(8), nullable=False)  # 'in' or 'out'
    ticket_number = Column(String(64))
    requester_name = Column(String(200))
    department = Column(String(128))

    # Item snapshot taken at creation, keeps history readable after a delete
    item_name = Column(String(200))
    item_category = Column(String(128))

    created_at = Column(DateTime(timezone=True),
                        server_default=func.now(), index=True)

    item = relationship("Item", back_populates="transactions")
