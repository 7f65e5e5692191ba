# config/settings/test.py

from .base import *

# === TESTES ===

DEBUG = False

SECRET_KEY = 'taskpro-test-secret-key'

ALLOWED_HOSTS = ['testserver', 'localhost']

# SQLite em arquivo: as threads do teste de concorrência abrem conexões
# próprias. BEGIN IMMEDIATE faz a segunda transação esperar a primeira,
# como o select_for_update faz no PostgreSQL.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': str(BASE_DIR / 'taskpro.sqlite3'),
        'TEST': {
            'NAME': str(BASE_DIR / '.taskpro_test.sqlite3'),
        },
        'OPTIONS': {
            'transaction_mode': 'IMMEDIATE',
            'timeout': 20,
        },
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'taskpro-test-cache',
    }
}

# Hash rápido - só para testes
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.InMemoryStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

TASKPRO_BASE_URL = 'http://testserver'
TASKPRO_TOKEN_TTL = 3600
TASKPRO_AVATAR_SIZE = 250

# Desabilitar logs em testes
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {'class': 'logging.NullHandler'},
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
    'loggers': {
        'apps': {
            'handlers': ['null'],
            'level': 'DEBUG',
            'propagate': True,
        },
    },
}
