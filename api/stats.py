# api/stats.py

from http.server import BaseHTTPRequestHandler

from gitwrapped.config import configure_logging
from gitwrapped.handlers import respond_stats

configure_logging()


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        respond_stats(self)
