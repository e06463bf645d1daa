"""
ASGI config for stallplass project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'stallplass.settings')

application = get_asgi_application()
