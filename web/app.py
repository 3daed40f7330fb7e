"""
Hyperliquid Dashboard Proxy
Local development server for the serverless endpoint
"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, Response, jsonify, request

from hlproxy import __version__
from hlproxy.aggregator import ProxyHandler, ProxySettings
from hlproxy.utils import config, get_logger

logger = get_logger("web")


def create_app(settings: ProxySettings = None, proxy_factory=None) -> Flask:
    """Build the Flask app; `proxy_factory` returns a ProxyHandler per request."""
    app = Flask(__name__)
    settings = settings or ProxySettings.from_config(config)
    proxy_factory = proxy_factory or (lambda: ProxyHandler(settings))

    @app.route('/api/hyperliquid', methods=['GET', 'POST', 'OPTIONS'])
    def hyperliquid():
        """Markets and open positions for the dashboard."""
        result = proxy_factory().handle(request.method)
        return Response(
            result.encoded_body(),
            status=result.status,
            headers=result.headers,
        )

    @app.route('/api/health')
    def health():
        """Report the active strategies."""
        return jsonify({
            'status': 'ok',
            'version': __version__,
            'price_strategy': settings.price_strategy.value,
            'position_source': settings.position_source.value,
            'failure_policy': settings.failure_policy.value,
        })

    return app


if __name__ == '__main__':
    app = create_app()
    logger.info("Starting Hyperliquid proxy dev server on http://localhost:5000")
    app.run(host='0.0.0.0', port=5000, debug=True)
