"""
Activity log app configuration
"""

from django.apps import AppConfig


class AuditConfig(AppConfig):
    name = 'audit'
    verbose_name = 'Activity Log'

    def ready(self):
        """Connect the session and payment receivers"""
        import audit.signals  # noqa: F401
