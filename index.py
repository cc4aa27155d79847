# index.py

from http.server import BaseHTTPRequestHandler


class handler(BaseHTTPRequestHandler):
    """Send visitors of the bare domain to the endpoint docs."""

    def do_GET(self):
        self.send_response(302)
        self.send_header("Location", "/api/")
        self.send_header("Cache-Control", "public, max-age=86400")
        self.end_headers()
