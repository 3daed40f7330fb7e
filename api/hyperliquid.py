"""Hyperliquid dashboard endpoint for Vercel serverless."""
from http.server import BaseHTTPRequestHandler
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hlproxy.aggregator import ProxyHandler, ProxySettings
from hlproxy.utils import config


def build_proxy():
    """Fresh handler per invocation so no request state leaks across calls."""
    return ProxyHandler(ProxySettings.from_config(config))


class handler(BaseHTTPRequestHandler):
    def _respond(self, method):
        result = build_proxy().handle(method)
        body = result.encoded_body()

        self.send_response(result.status)
        for name, value in result.headers.items():
            self.send_header(name, value)
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        if body:
            self.wfile.write(body)

    def do_OPTIONS(self):
        self._respond('OPTIONS')

    def do_GET(self):
        self._respond('GET')

    def do_POST(self):
        self._respond('POST')
