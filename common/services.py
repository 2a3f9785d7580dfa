"""
Site settings service.
"""
from typing import Any, Dict

from audit.helpers import log_action
from core.access import is_admin
from core.constants import LogAction
from core.dto import SettingsDTO
from core.repositories import EntityStore, SettingsRepository
from core.services import BaseService
from core.validators import serializer_error
from .serializers import SettingsSerializer


class SettingsService(BaseService):
    """Read and update the stored settings record"""

    def __init__(self, store: EntityStore):
        super().__init__(store)
        self.settings_repo = SettingsRepository(store)

    def get_settings(self) -> SettingsDTO:
        """Stored settings, or the defaults before the first update"""
        return self.settings_repo.get()

    def update_settings(self, actor, fields: Dict[str, Any]) -> SettingsDTO:
        """Merge ``fields`` into the settings (ADMIN only)"""
        self.require_user(actor)
        if not is_admin(actor):
            self.deny(actor, "update settings")

        serializer = SettingsSerializer(data=fields, partial=True)
        if not serializer.is_valid():
            raise serializer_error(serializer, "INVALID_SETTINGS")
        changes = dict(serializer.validated_data)

        updated = self.settings_repo.update(**changes)

        details = ", ".join(f"{name}={value}" for name, value in sorted(changes.items())) or "no changes"
        log_action(self.store, actor, LogAction.SETTINGS_UPDATED, f"Settings updated: {details}.")
        self.log_info("Settings updated", **changes)
        return updated
