"""
WSGI config for Studio Ledger project.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# Marks this process as a request-serving host for the lifecycle scheduler
os.environ.setdefault('LIFECYCLE_WSGI_HOST', 'true')

application = get_wsgi_application()
