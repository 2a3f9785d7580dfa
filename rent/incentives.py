"""
Collection incentive engine.

Tracks how much each collector has taken in today and over their lifetime,
and adjusts their coin balance against their daily target after every
payment they record.

Rules (applied once per successful payment, actor as subject):
1. A stored day other than today resets daily_collected to 0
2. The amount is added to total_collected and daily_collected
3. With a daily target set: reaching it earns COIN_REWARD coins, falling
   short costs COIN_PENALTY coins (never below 0). No target, no change.

RMS_INCENTIVE_POLICY decides how often the reward is paid:
- per_payment: every payment at or over target earns the reward
- once_per_day: the reward is paid at most once per calendar day
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from django.conf import settings
from django.utils import timezone

from accounts.repositories import UserRepository
from core.constants import DefaultLimits, IncentivePolicy
from core.dto import ZERO, UserDTO
from core.exceptions import ValidationError
from core.repositories import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class CollectorProgress:
    """Where a collector stands against their targets"""
    user_id: str
    coins: int
    daily_collected: Decimal
    daily_target: Decimal
    daily_percentage: int
    total_collected: Decimal
    target_amount: Decimal
    min_amount: Decimal


class IncentiveEngine:
    """Applies the incentive rules to the user record in the store"""

    def __init__(self, store: EntityStore, policy: Optional[str] = None,
                 today: Optional[Callable[[], date]] = None):
        self.store = store
        self.user_repo = UserRepository(store)
        self.policy = policy or getattr(settings, 'RMS_INCENTIVE_POLICY', IncentivePolicy.PER_PAYMENT)
        if self.policy not in dict(IncentivePolicy.CHOICES):
            raise ValidationError(
                message=f"Unknown incentive policy: {self.policy}",
                code="INVALID_INCENTIVE_POLICY",
            )
        self.today = today or timezone.localdate

    def accrue(self, user: UserDTO, amount: Decimal) -> UserDTO:
        """
        Apply one collected amount to the user's counters.

        Args:
            user: Collector who recorded the payment
            amount: Validated payment amount

        Returns:
            The updated user record
        """
        today = self.today().isoformat()
        current = self.user_repo.get_by_id(user.id) or user

        daily = current.daily_collected
        if current.last_collection_date != today:
            daily = ZERO
        daily += amount

        changes = {
            'last_collection_date': today,
            'daily_collected': daily,
            'total_collected': current.total_collected + amount,
        }
        changes.update(self._coin_changes(current, daily, today))

        updated = self.user_repo.update(current.id, **changes)
        if updated is None:
            # Collector is not a stored user; nothing to persist
            logger.warning(f"Incentive skipped for unknown user {current.id}")
            return current.merged(changes)

        if updated.coins != current.coins:
            logger.info(f"Coins for {updated.username}: {current.coins} -> {updated.coins}")
        return updated

    def _coin_changes(self, user: UserDTO, daily: Decimal, today: str) -> dict:
        """Coin balance (and reward_date when a reward is paid) after this payment"""
        target = user.daily_target or ZERO
        if target <= 0:
            return {}

        if daily >= target:
            if self.policy == IncentivePolicy.ONCE_PER_DAY and user.reward_date == today:
                return {}
            return {'coins': user.coins + DefaultLimits.COIN_REWARD, 'reward_date': today}

        return {'coins': max(0, user.coins - DefaultLimits.COIN_PENALTY)}

    def collector_progress(self, user: UserDTO) -> CollectorProgress:
        """
        Progress towards the daily and monthly targets.
        A stale collection day counts as nothing collected today.
        """
        today = self.today().isoformat()
        daily = user.daily_collected if user.last_collection_date == today else ZERO
        target = user.daily_target or ZERO
        percentage = 0
        if target > 0:
            percentage = min(100, int(daily * 100 / target))

        return CollectorProgress(
            user_id=user.id,
            coins=user.coins,
            daily_collected=daily,
            daily_target=target,
            daily_percentage=percentage,
            total_collected=user.total_collected,
            target_amount=user.target_amount,
            min_amount=user.min_amount,
        )
