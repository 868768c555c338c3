from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.transaction import TransactionType
from storefront.repositories.gateway import NotFound, PersistenceGateway, ValidationError
from storefront.repositories.transaction_repo import TransactionRepository
from storefront.schemas.transaction_schema import TransactionIn, TransactionOut, TransactionUpdate


class FinanceService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TransactionRepository(db)
        self.gateway = PersistenceGateway(db)

    def list(self, limit: int = 50) -> List[TransactionOut]:
        return [TransactionOut.model_validate(t) for t in self.repo.list(limit=limit)]

    def create(self, entry: TransactionIn) -> TransactionOut:
        return self.gateway.create_transaction(entry)

    def update(self, transaction_id: int, changes: TransactionUpdate) -> TransactionOut:
        t = self.repo.get(transaction_id)
        if t is None:
            raise NotFound(f"Transaction {transaction_id} not found")
        data = changes.model_dump(exclude_unset=True)
        if "description" in data:
            data["description"] = (data["description"] or "").strip()
            if not data["description"]:
                raise ValidationError("La descripción es obligatoria")
        if "amount" in data and (data["amount"] is None or data["amount"] <= 0):
            raise ValidationError("El monto debe ser mayor a 0")
        for k, v in data.items():
            if v is not None:
                setattr(t, k, v)
        self.db.commit()
        return TransactionOut.model_validate(t)

    def delete(self, transaction_id: int):
        t = self.repo.get(transaction_id)
        if t is None:
            raise NotFound(f"Transaction {transaction_id} not found")
        self.repo.delete(t)
        self.db.commit()

    def balance(self, start: Optional[date] = None, end: Optional[date] = None) -> dict:
        rows = self.repo.in_range(start, end)
        income = sum(t.amount for t in rows if t.type == TransactionType.INCOME)
        expense = sum(t.amount for t in rows if t.type == TransactionType.EXPENSE)
        return {"income": income, "expense": expense, "balance": income - expense}
