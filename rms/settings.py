"""
Django settings for the rms project.
"""

from pathlib import Path
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get('RMS_SECRET_KEY', 'django-insecure-change-this-in-production-12345')

DEBUG = os.environ.get('RMS_DEBUG', 'False') == 'True'

ALLOWED_HOSTS = []


# Application definition

INSTALLED_APPS = [
    'rest_framework',
    'core',  # Store, access policy, validators
    'common',  # Site settings and logging helpers
    'accounts',  # Login and staff management
    'rooms',  # Rooms and room assignments
    'rent',  # Payment ledger and incentives
    'feedback',  # Feedback and feature requests
    'dashboard',  # Metrics, reports and search
    'audit',  # Audit Logging
]

# No relational data; the console keeps its collections in the cache store
DATABASES = {}


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'Asia/Dubai'

USE_I18N = False
USE_TZ = True


# Cache Configuration
# 'rms' holds the console collections; entries never expire
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'rms-default',
    },
    'rms': {
        'BACKEND': os.environ.get(
            'RMS_STORE_BACKEND', 'django.core.cache.backends.filebased.FileBasedCache'
        ),
        'LOCATION': os.environ.get('RMS_STORE_LOCATION', str(BASE_DIR / 'var' / 'store')),
        'TIMEOUT': None,
        'OPTIONS': {
            'MAX_ENTRIES': 100000,
        }
    },
}


# Console settings
RMS_STORE_CACHE = 'rms'

# 'per_payment' or 'once_per_day' (see rent.incentives)
RMS_INCENTIVE_POLICY = os.environ.get('RMS_INCENTIVE_POLICY', 'per_payment')

RMS_CURRENCY = 'AED'

RMS_LOG_RETENTION = 500


# Logging Configuration with session user support
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'filters': {
        'session_user': {
            '()': 'common.logging_config.SessionUserFilter',
        },
    },
    'formatters': {
        'verbose': {
            'format': '[{user_id}] {levelname} {asctime} {module} {message}',
            'style': '{',
        },
        'simple': {
            'format': '[{user_id}] {levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
            'filters': ['session_user'],
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',  # Only warnings and errors
            'propagate': False,
        },
        'audit': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
}
