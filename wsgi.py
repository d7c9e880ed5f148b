"""
WSGI entry point for production deployment.

Room state lives in process memory, so run exactly one worker, e.g.:
    gunicorn --worker-class gthread --threads 50 -w 1 wsgi:application
"""

import os

os.environ.setdefault('FLASK_CONFIG', 'production')

from bidroom import create_app  # noqa: E402

application = create_app(os.environ.get('FLASK_CONFIG', 'production'))
