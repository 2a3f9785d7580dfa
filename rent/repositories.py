"""
Payment repository - Data access layer for the rent ledger.
"""
from core.constants import StorageKey
from core.dto import PaymentDTO
from core.exceptions import ValidationError
from core.repositories import CollectionRepository, EntityStore


class PaymentRepository(CollectionRepository[PaymentDTO]):
    """Append-only payment transactions"""

    def __init__(self, store: EntityStore):
        super().__init__(store, StorageKey.PAYMENTS, PaymentDTO)

    def update(self, id: str, **changes):
        raise ValidationError(message="Recorded payments cannot be modified", code="PAYMENT_IMMUTABLE")

    def delete(self, id: str):
        raise ValidationError(message="Recorded payments cannot be deleted", code="PAYMENT_IMMUTABLE")
