# api/badge.py

from http.server import BaseHTTPRequestHandler

from gitwrapped.config import configure_logging
from gitwrapped.handlers import respond_badge

configure_logging()


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        respond_badge(self)
