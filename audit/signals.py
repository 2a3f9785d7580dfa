"""
Audit Logging Signals

Automatically log session and payment events using Django signals.
The sending EntityStore is the signal sender, so entries land in that store.
"""

from django.dispatch import receiver

from core.signals import payment_recorded, user_logged_in, user_logged_out
from audit.helpers import log_login, log_logout, log_rent_payment


# ============================================================================
# AUTH SIGNALS
# ============================================================================

@receiver(user_logged_in)
def log_user_login(sender, user, **kwargs):
    """Log successful login"""
    log_login(sender, user)


@receiver(user_logged_out)
def log_user_logout(sender, user, **kwargs):
    """Log logout"""
    if user:
        log_logout(sender, user)


# ============================================================================
# PAYMENT SIGNALS
# ============================================================================

@receiver(payment_recorded)
def log_payment(sender, user, payment, **kwargs):
    """Log recorded payment"""
    log_rent_payment(sender, user, payment)
