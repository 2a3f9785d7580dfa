"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
from decimal import Decimal, InvalidOperation

from core.constants import DefaultLimits, RoomStatus
from core.exceptions import ValidationError as AppValidationError

MAX_AMOUNT = Decimal(DefaultLimits.MAX_MONTHLY_AMOUNT)


def serializer_error(serializer, code: str, message: str = "Validation failed"):
    """Translate DRF serializer errors into an application ValidationError"""
    errors = {name: [str(item) for item in items] for name, items in serializer.errors.items()}
    first = next(iter(errors.values()), [message])
    return AppValidationError(
        message=first[0] if first else message,
        code=code,
        details=errors,
    )


class RentValidator:
    """Validates rent-related operations"""

    @staticmethod
    def validate_rent_amount(amount):
        """Validate monthly rent"""
        if amount is None:
            return
        if amount < 0:
            raise AppValidationError(
                message="Rent amount cannot be negative",
                code="INVALID_RENT_AMOUNT"
            )
        if amount > MAX_AMOUNT:
            raise AppValidationError(
                message=f"Max rent limit is {DefaultLimits.MAX_MONTHLY_AMOUNT:,}",
                code="RENT_AMOUNT_TOO_LARGE",
                details={"max": DefaultLimits.MAX_MONTHLY_AMOUNT, "value": str(amount)}
            )


class PaymentValidator:
    """Validates payment amounts"""

    @staticmethod
    def validate_payment_amount(amount) -> Decimal:
        """Return the amount as Decimal; must be numeric, positive and within the cap"""
        if isinstance(amount, bool) or amount is None:
            raise AppValidationError(message="Enter a valid collection amount", code="INVALID_PAYMENT_AMOUNT")
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            raise AppValidationError(message="Enter a valid collection amount", code="INVALID_PAYMENT_AMOUNT")
        if not value.is_finite() or value <= 0:
            raise AppValidationError(message="Enter a valid collection amount", code="INVALID_PAYMENT_AMOUNT")
        if value > MAX_AMOUNT:
            raise AppValidationError(
                message=f"Max payment limit is {DefaultLimits.MAX_MONTHLY_AMOUNT:,}",
                code="PAYMENT_AMOUNT_TOO_LARGE",
                details={"max": DefaultLimits.MAX_MONTHLY_AMOUNT, "value": str(value)}
            )
        return value


class OccupancyValidator:
    """Validates room occupancy transitions"""

    @staticmethod
    def validate_occupancy_start(status, occupancy_start_date):
        """An occupied room must carry an occupancy start date"""
        if status == RoomStatus.OCCUPIED and not occupancy_start_date:
            raise AppValidationError(
                message="Occupancy date is required",
                code="MISSING_OCCUPANCY_DATE"
            )

    @staticmethod
    def validate_dates(start_date, end_date=None):
        """Validate occupancy or reservation dates (ISO strings compare chronologically)"""
        if start_date and end_date and end_date < start_date:
            raise AppValidationError(
                message="End date cannot be before start date",
                code="INVALID_END_DATE"
            )
