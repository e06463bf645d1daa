"""
WSGI config for stallplass project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'stallplass.settings')

application = get_wsgi_application()
app = application
