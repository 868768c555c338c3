from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.transaction import Transaction, TransactionType


class TransactionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, transaction_id: int) -> Optional[Transaction]:
        return self.db.query(Transaction).filter(Transaction.id == transaction_id).first()

    def list(self, limit: int = 50) -> List[Transaction]:
        return (
            self.db.query(Transaction)
            .order_by(Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
            .all()
        )

    def add(
        self,
        description: str,
        amount: int,
        type: TransactionType,
        category: str,
        on: date,
    ) -> Transaction:
        t = Transaction(
            description=description, amount=amount, type=type, category=category, date=on
        )
        self.db.add(t)
        self.db.flush()
        return t

    def delete(self, transaction: Transaction):
        self.db.delete(transaction)
        self.db.flush()

    def in_range(self, start: Optional[date] = None, end: Optional[date] = None) -> List[Transaction]:
        query = self.db.query(Transaction)
        if start:
            query = query.filter(Transaction.date >= start)
        if end:
            query = query.filter(Transaction.date <= end)
        return query.all()
