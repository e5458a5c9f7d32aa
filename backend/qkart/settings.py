import os
import sys
from datetime import timedelta
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
# Root project .env (one directory above backend/) wins over backend/.env
root_env = BASE_DIR.parent / ".env"
local_env = BASE_DIR / ".env"
if root_env.exists():
    load_dotenv(root_env)
elif local_env.exists():
    load_dotenv(local_env)

# ---------------------------------------------------------------------------
# SECRET KEY HANDLING
# DJANGO_SECRET_KEY first, SECRET_KEY as fallback. Production (DEBUG=False)
# refuses to start with the development default.
# ---------------------------------------------------------------------------
_candidate_key = os.getenv("DJANGO_SECRET_KEY") or os.getenv("SECRET_KEY") or ""
SECRET_KEY = _candidate_key or "dev-secret-key"
DEBUG = os.getenv("DEBUG", "True") == "True"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "*").split(",")

if SECRET_KEY == "dev-secret-key" and not DEBUG:
    raise ImproperlyConfigured(
        "SECRET_KEY is missing or using insecure default. Set DJANGO_SECRET_KEY or SECRET_KEY env var."
    )

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "apps.common",
    "apps.catalog",
    "apps.users",
    "apps.carts",
    "apps.auth.apps.AuthConfig",
]

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "apps.api.exceptions.global_exception_handler",
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(
        minutes=int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", "1440"))
    ),
    "AUTH_HEADER_TYPES": ("Bearer",),
    "SIGNING_KEY": SECRET_KEY,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "QKart API",
    "DESCRIPTION": "QKart storefront backend: products, search, JWT auth and per-user carts.",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": r"/api/v1",
    "SERVE_PERMISSIONS": [],
}

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "qkart.urls"
# The storefront client speaks to paths without trailing slashes
APPEND_SLASH = False

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "qkart.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("POSTGRES_DB", "qkart"),
        "USER": os.getenv("POSTGRES_USER", "qkart"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", "qkart"),
        "HOST": os.getenv("POSTGRES_HOST", "db"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
    }
}

# Product listings are cached in Redis. Cache outages degrade to misses
# (IGNORE_EXCEPTIONS) rather than failing the request.
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/1")
CACHE_TTL = int(os.getenv("CACHE_TTL", "300"))  # seconds

CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": REDIS_URL,
        "OPTIONS": {
            "CLIENT_CLASS": "django_redis.client.DefaultClient",
            "IGNORE_EXCEPTIONS": True,
        },
        "KEY_PREFIX": os.getenv("CACHE_KEY_PREFIX", "qkart"),
        "TIMEOUT": CACHE_TTL,
    }
}

USING_PYTEST = (
    os.getenv("PYTEST_CURRENT_TEST") is not None
    or "pytest" in sys.modules
    or any(os.path.basename(arg).startswith("pytest") for arg in sys.argv)
)

if "test" in sys.argv or USING_PYTEST:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "qkart-test-cache",
            "TIMEOUT": 60,
        }
    }

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "apps": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
}

# Password strength is enforced by apps.users.validators on registration
AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = os.getenv("STATIC_ROOT", str(BASE_DIR / "staticfiles"))
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_USER_MODEL = "users.User"

# ---------------------------------------------------------------------------
# QKart domain defaults
# ---------------------------------------------------------------------------
QKART_DEFAULT_WALLET_MONEY = int(os.getenv("QKART_DEFAULT_WALLET_MONEY", "5000"))
QKART_DEFAULT_ADDRESS = os.getenv("QKART_DEFAULT_ADDRESS", "ADDRESS_NOT_SET")

# Storefront client
QKART_API_ENDPOINT = os.getenv("QKART_API_ENDPOINT", "http://localhost:8000/api/v1")
QKART_SEARCH_DEBOUNCE_MS = int(os.getenv("QKART_SEARCH_DEBOUNCE_MS", "500"))
QKART_HTTP_TIMEOUT = float(os.getenv("QKART_HTTP_TIMEOUT", "10"))
