"""
WSGI entry point for deployment (Gunicorn).
    gunicorn -c gunicorn.conf.py wsgi:server
"""
from khakhra_dashboard.app import server  # noqa: F401  (Flask server for gunicorn)
