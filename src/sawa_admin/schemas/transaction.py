"""Transaction schemas."""

from typing import Literal

from sawa_admin.schemas.common import Entity, Form

TransactionStatus = Literal["pending", "completed", "failed", "cancelled"]


class Transaction(Entity):
    user_id: int | None = None
    amount: float | None = None
    currency: str | None = None
    type: str | None = None
    status: str | None = None
    method: str | None = None
    description: str | None = None
    transactionable_id: int | None = None
    transactionable_type: str | None = None


class TransactionStatusForm(Form):
    status: TransactionStatus
