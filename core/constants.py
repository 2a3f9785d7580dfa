"""
Application-wide constants.
Centralized constants following DRY principle.
"""

# User Roles
class UserRole:
    ADMIN = 'ADMIN'
    EMPLOYEE = 'EMPLOYEE'

    CHOICES = [
        (ADMIN, 'Admin'),
        (EMPLOYEE, 'Employee'),
    ]


# Room Types
class RoomType:
    SINGLE = 'SINGLE'
    DOUBLE = 'DOUBLE'
    FAMILY = 'FAMILY'
    DORM = 'DORM'
    CUSTOM = 'CUSTOM'

    CHOICES = [
        (SINGLE, 'Single'),
        (DOUBLE, 'Double'),
        (FAMILY, 'Family'),
        (DORM, 'Dorm'),
        (CUSTOM, 'Custom'),
    ]


# Room Status
class RoomStatus:
    AVAILABLE = 'AVAILABLE'
    OCCUPIED = 'OCCUPIED'
    MAINTENANCE = 'MAINTENANCE'
    RESERVED = 'RESERVED'

    CHOICES = [
        (AVAILABLE, 'Available'),
        (OCCUPIED, 'Occupied'),
        (MAINTENANCE, 'Maintenance'),
        (RESERVED, 'Reserved'),
    ]


# Payment Status
class PaymentStatus:
    PAID = 'PAID'
    PENDING = 'PENDING'

    CHOICES = [
        (PAID, 'Paid'),
        (PENDING, 'Pending'),
    ]


# Feedback
class FeedbackType:
    FEEDBACK = 'FEEDBACK'
    FEATURE_REQUEST = 'FEATURE_REQUEST'

    CHOICES = [
        (FEEDBACK, 'Feedback'),
        (FEATURE_REQUEST, 'Feature Request'),
    ]


class FeedbackStatus:
    PENDING = 'PENDING'
    REVIEWED = 'REVIEWED'

    CHOICES = [
        (PENDING, 'Pending'),
        (REVIEWED, 'Reviewed'),
    ]


# Activity log actions
class LogAction:
    LOGIN = 'Login'
    LOGOUT = 'Logout'
    ROOM_CREATED = 'Room Created'
    ROOM_UPDATED = 'Room Updated'
    BULK_ROOM_UPDATE = 'Bulk Room Update'
    PAYMENT_RECORDED = 'Payment Recorded'
    EMPLOYEE_ADDED = 'Employee Added'
    EMPLOYEE_UPDATED = 'Employee Updated'
    EMPLOYEE_REMOVED = 'Employee Removed'
    ACCESS_TOGGLED = 'Access Toggled'
    SETTINGS_UPDATED = 'Settings Updated'
    FEEDBACK_SUBMITTED = 'Feedback Submitted'
    FEEDBACK_REVIEWED = 'Feedback Reviewed'


# Storage keys (flat namespace)
class StorageKey:
    USERS = 'rms_users'
    ROOMS = 'rms_rooms'
    ASSIGNMENTS = 'rms_assignments'
    LOGS = 'rms_logs'
    SESSION = 'rms_session'
    PAYMENTS = 'rms_payments'
    FEEDBACK = 'rms_feedback'
    SETTINGS = 'rms_settings'


# Incentive accrual policies
class IncentivePolicy:
    PER_PAYMENT = 'per_payment'
    ONCE_PER_DAY = 'once_per_day'

    CHOICES = [
        (PER_PAYMENT, 'Re-evaluate on every payment'),
        (ONCE_PER_DAY, 'Reward at most once per day'),
    ]


# Default Limits
class DefaultLimits:
    MAX_MONTHLY_AMOUNT = 9999
    LOG_RETENTION = 500
    SEARCH_RESULTS_PER_CATEGORY = 5
    COIN_REWARD = 5
    COIN_PENALTY = 1
