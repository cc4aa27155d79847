# api/card.py

from http.server import BaseHTTPRequestHandler

from gitwrapped.config import configure_logging
from gitwrapped.handlers import respond_card

configure_logging()


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        respond_card(self)
