from sqlalchemy import CheckConstraint, Column, Integer, String, ForeignKey, Numeric, DateTime, func
from sqlalchemy.orm import relationship
from cardledger.db.base import Base


class Card(Base):
    __tablename__ = "cards"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_cards_balance_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    card_number = Column(String(16), unique=True, nullable=False, index=True)
    balance = Column(Numeric(18, 0), default=0, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    account = relationship("Account", back_populates="cards")
    transactions_from = relationship(
        "Transaction",
        foreign_keys="[Transaction.source_card_id]",
        back_populates="source_card",
    )

    def __repr__(self):
        return f"<Card(number={self.card_number}, balance={self.balance})>"
