"""
ASGI config for the occhealth project.

HTTP only; configure settings before importing any Django-dependent module.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "occhealth.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()
