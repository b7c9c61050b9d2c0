from sqlalchemy import Column, Index, Integer, Numeric, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from cardledger.db.base import Base


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_source_card_created_at", "source_card_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    source_card_id = Column(Integer, ForeignKey("cards.id"), nullable=False)
    dest_card_id = Column(Integer, ForeignKey("cards.id"), nullable=False)
    # amount requested plus the flat transfer fee
    amount = Column(Numeric(18, 0), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    source_card = relationship("Card", foreign_keys=[source_card_id], back_populates="transactions_from")
    dest_card = relationship("Card", foreign_keys=[dest_card_id])
