import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core_backend.settings")

# HTTP only; the availability API has no websocket consumers.
application = get_asgi_application()
