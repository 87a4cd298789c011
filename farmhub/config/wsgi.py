"""
WSGI config for the farmhub project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'farmhub.config.settings')

application = get_wsgi_application()
