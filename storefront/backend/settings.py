"""Django settings for the storefront project.

Values come from ``storefront.utils.config.settings`` (environment / .env).
"""

from pathlib import Path

from storefront.utils.config import settings as pydantic_settings

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = pydantic_settings.SECRET_KEY
DEBUG = pydantic_settings.DEBUG
ALLOWED_HOSTS = pydantic_settings.ALLOWED_HOSTS

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "storefront.shopcore",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "storefront.backend.urls"
APPEND_SLASH = False

WSGI_APPLICATION = "storefront.backend.wsgi.application"
ASGI_APPLICATION = "storefront.backend.asgi.application"

DATABASES = {
    "default": pydantic_settings.database_config(),
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "storefront.api_gateway.errors.exception_handler",
    "COERCE_DECIMAL_TO_STRING": False,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}
