"""
Settings used by the test suite.

Environment defaults are applied before the main settings module reads
them, so tests run without a .env file, Redis or S3.
"""

import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DEBUG", "False")
os.environ.setdefault("ALLOWED_HOSTS", "testserver,localhost")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")
os.environ.setdefault("CACHE_BACKEND", "locmem")
os.environ.setdefault("CHANNEL_LAYER_BACKEND", "memory")
os.environ.setdefault("STORAGE_PUBLIC_BASE_URL", "http://testserver/media/")
os.environ["ENV_FILE"] = os.devnull

from config.settings import *  # noqa: E402,F401,F403

SECURE_SSL_REDIRECT = False

# Fast hashing; PBKDF2 dominates test time otherwise
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

MEDIA_ROOT = tempfile.mkdtemp(prefix="campus-test-media-")

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"
