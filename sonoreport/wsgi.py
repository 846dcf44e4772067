"""
WSGI config for the sonoreport project.

It exposes the WSGI callable as a module-level variable named ``application``.
The user profile cache lives in each worker process, so every worker
keeps its own copy for up to ``USER_CACHE_TTL`` seconds.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

# Set the default settings module for the 'django' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'sonoreport.settings')

application = get_wsgi_application()
