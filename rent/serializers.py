from rest_framework import serializers

from core.constants import PaymentStatus


class PaymentSerializer(serializers.Serializer):
    """
    Input for recording a payment.
    Only numeric form is checked here; PaymentValidator applies the range.
    """
    room_id = serializers.CharField(max_length=64)
    amount = serializers.DecimalField(max_digits=None, decimal_places=None)
    status = serializers.ChoiceField(choices=PaymentStatus.CHOICES, default=PaymentStatus.PAID)
