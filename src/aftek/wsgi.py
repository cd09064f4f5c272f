"""WSGI config for the Aftek website."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "aftek.settings.prod")

application = get_wsgi_application()
