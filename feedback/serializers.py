from rest_framework import serializers

from core.constants import FeedbackType


class FeedbackSerializer(serializers.Serializer):
    """Feedback or feature request submitted by a user"""
    type = serializers.ChoiceField(choices=FeedbackType.CHOICES, default=FeedbackType.FEEDBACK)
    content = serializers.CharField(max_length=5000, trim_whitespace=True)
