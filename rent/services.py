"""
Rent ledger service - Business logic for recording collections.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.utils import timezone

from core.access import can_add_payments, filter_visible_payments
from core.constants import PaymentStatus
from core.dto import PaymentDTO
from core.exceptions import NotFoundError
from core.repositories import EntityStore
from core.services import BaseService
from core.signals import payment_recorded
from core.validators import PaymentValidator, serializer_error
from rooms.repositories import RoomRepository
from .incentives import IncentiveEngine
from .repositories import PaymentRepository
from .serializers import PaymentSerializer


class LedgerService(BaseService):
    """
    Service for the payment ledger.

    A room's current_balance is a running figure: each payment debits it
    by exactly the amount paid, with no floor. Payments are never edited.
    """

    def __init__(self, store: EntityStore, incentives: Optional[IncentiveEngine] = None):
        super().__init__(store)
        self.payment_repo = PaymentRepository(store)
        self.room_repo = RoomRepository(store)
        self.incentives = incentives or IncentiveEngine(store)

    def get_payments(self, user) -> List[PaymentDTO]:
        """Payments visible to the user, in recorded order"""
        return filter_visible_payments(user, self.payment_repo.all())

    def add_payment(self, actor, fields: Dict[str, Any]) -> PaymentDTO:
        """
        Record a payment from raw input ``{room_id, amount, status}``.

        Checks run in order: session, permission, amount, room.

        Returns:
            The stored PaymentDTO

        Raises:
            UnauthorizedError: No session or missing can_add_payments
            ValidationError: Amount not numeric, not positive or above the cap
            NotFoundError: Room doesn't exist
        """
        self.require_user(actor)
        if not can_add_payments(actor):
            self.deny(actor, "record payments")

        serializer = PaymentSerializer(data=fields)
        if not serializer.is_valid():
            raise serializer_error(serializer, "INVALID_PAYMENT")
        data = serializer.validated_data
        amount = PaymentValidator.validate_payment_amount(data['amount'])

        room = self.room_repo.get_by_id(data['room_id'])
        if room is None:
            raise NotFoundError(resource_type="Room", resource_id=data['room_id'])

        return self._record(actor, room, amount, data['status'])

    def record_payment(self, actor, room_id: str, amount, status: str = PaymentStatus.PAID) -> PaymentDTO:
        return self.add_payment(actor, {'room_id': room_id, 'amount': amount, 'status': status})

    def _record(self, actor, room, amount: Decimal, status: str) -> PaymentDTO:
        room = self.room_repo.update(room.id, current_balance=room.current_balance - amount)

        payment = self.payment_repo.add(PaymentDTO(
            room_id=room.id,
            room_number=room.room_number,
            amount=amount,
            date=timezone.now().isoformat(),
            status=status,
            recorded_by=actor.full_name,
            recorded_by_id=actor.id,
        ))

        self.incentives.accrue(actor, amount)
        payment_recorded.send(sender=self.store, user=actor, payment=payment, room=room)

        self.log_info(
            f"Payment recorded: {amount} for room {room.room_number}",
            payment_id=payment.id, room_id=room.id, balance=str(room.current_balance),
        )
        return payment
