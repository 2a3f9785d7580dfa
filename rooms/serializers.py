from datetime import date
from decimal import Decimal

from rest_framework import serializers

from core.constants import RoomStatus, RoomType
from core.exceptions import ValidationError as AppValidationError
from core.validators import OccupancyValidator

DATE_FIELDS = (
    'last_maintained', 'maintenance_end_date',
    'occupancy_start_date', 'occupancy_end_date',
    'reservation_start_date', 'reservation_end_date',
)


def money_field(**kwargs):
    return serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, **kwargs)


class RoomSerializer(serializers.Serializer):
    """
    Input for creating or editing a room.

    Pass the stored RoomDTO as ``instance`` on partial updates so the
    occupancy check sees the existing dates. Set ``skip_occupancy_check`` in
    the context for bulk edits, where dates are per room.
    current_balance is not accepted; only recorded payments change it.
    """
    room_number = serializers.CharField(max_length=50, trim_whitespace=True)
    type = serializers.ChoiceField(choices=RoomType.CHOICES, default=RoomType.SINGLE)
    status = serializers.ChoiceField(choices=RoomStatus.CHOICES, default=RoomStatus.AVAILABLE)
    floor = serializers.CharField(max_length=50, allow_blank=True, default='')
    building = serializers.CharField(max_length=255, allow_blank=True, default='')
    monthly_rent = money_field()
    monthly_expenses = money_field(default=Decimal(0))
    target_collection = money_field(default=Decimal(0))
    min_collection = money_field(default=Decimal(0))
    maintenance_cost = money_field(required=False, allow_null=True)
    last_maintained = serializers.DateField(required=False, allow_null=True)
    maintenance_end_date = serializers.DateField(required=False, allow_null=True)
    occupancy_start_date = serializers.DateField(required=False, allow_null=True)
    occupancy_end_date = serializers.DateField(required=False, allow_null=True)
    reservation_start_date = serializers.DateField(required=False, allow_null=True)
    reservation_end_date = serializers.DateField(required=False, allow_null=True)
    is_open_ended = serializers.BooleanField(default=False)

    def _current(self, attrs, name):
        """Submitted value, falling back to the stored room on partial updates"""
        if name in attrs:
            return attrs[name]
        return getattr(self.instance, name, None)

    def validate(self, attrs):
        # Stored as ISO strings
        for name in DATE_FIELDS:
            if isinstance(attrs.get(name), date):
                attrs[name] = attrs[name].isoformat()

        try:
            if not self.context.get('skip_occupancy_check') and 'status' in attrs:
                OccupancyValidator.validate_occupancy_start(
                    attrs['status'], self._current(attrs, 'occupancy_start_date')
                )
            OccupancyValidator.validate_dates(
                self._current(attrs, 'occupancy_start_date'),
                self._current(attrs, 'occupancy_end_date'),
            )
            OccupancyValidator.validate_dates(
                self._current(attrs, 'reservation_start_date'),
                self._current(attrs, 'reservation_end_date'),
            )
        except AppValidationError as e:
            raise serializers.ValidationError(e.message, code=e.code)

        return attrs
