"""
Logging configuration with session user support
"""
import logging
import threading

_context = threading.local()


def set_session_user(user):
    """Stamp subsequent log records from this thread with the user's id"""
    _context.user_id = getattr(user, 'id', None)


def clear_session_user():
    try:
        del _context.user_id
    except AttributeError:
        pass


class SessionUserFilter(logging.Filter):
    """
    Logging filter to add the acting user's id to log records
    """
    def filter(self, record):
        user_id = getattr(record, 'user_id', None) or getattr(_context, 'user_id', None)
        record.user_id = user_id or 'N/A'
        return True
