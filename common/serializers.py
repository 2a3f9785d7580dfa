from rest_framework import serializers


class SettingsSerializer(serializers.Serializer):
    """Site-wide console settings"""
    show_leaderboard = serializers.BooleanField(required=False)
