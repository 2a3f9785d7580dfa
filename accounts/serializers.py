from rest_framework import serializers


class PermissionsSerializer(serializers.Serializer):
    """Serializer for the per-user permission flags"""
    can_move_tenants = serializers.BooleanField(required=False)
    can_view_payments = serializers.BooleanField(required=False)
    can_add_payments = serializers.BooleanField(required=False)
    can_edit_payments = serializers.BooleanField(required=False)


class EmployeeSerializer(serializers.Serializer):
    """Input for registering a new employee"""
    full_name = serializers.CharField(max_length=255, trim_whitespace=True)
    username = serializers.CharField(max_length=150, trim_whitespace=True)
    password = serializers.CharField(max_length=128, trim_whitespace=False)
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    permissions = PermissionsSerializer(required=False)


class EmployeeUpdateSerializer(serializers.Serializer):
    """Partial update of credentials, targets, coins and permissions"""
    full_name = serializers.CharField(max_length=255, required=False)
    username = serializers.CharField(max_length=150, required=False)
    password = serializers.CharField(max_length=128, required=False, trim_whitespace=False)
    email = serializers.EmailField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)
    coins = serializers.IntegerField(required=False, min_value=0)
    target_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    min_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    daily_target = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    permissions = PermissionsSerializer(required=False)
