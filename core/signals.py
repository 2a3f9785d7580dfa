"""
Domain signals.

All signals are sent with the owning EntityStore as ``sender`` so receivers
can scope themselves to a single store.
"""
from django.dispatch import Signal

# Fired after every write to the store. kwargs: key
store_changed = Signal()

# kwargs: user
user_logged_in = Signal()
user_logged_out = Signal()

# kwargs: user, payment, room
payment_recorded = Signal()
