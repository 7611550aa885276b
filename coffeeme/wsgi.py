"""
WSGI config for the Coffee Me POS backend.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'coffeeme.settings')

application = get_wsgi_application()
