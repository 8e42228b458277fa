"""Flask glue between the HTTP transport and the InteractionDispatcher."""
import asyncio

from flask import Flask, Request, request
from werkzeug.exceptions import HTTPException

from .config import Config
from .correlation import with_correlation
from .dispatcher import InteractionDispatcher


def handle_interactions_request(req: Request, dispatcher: InteractionDispatcher) -> tuple:
    """Run one interaction request through the dispatcher.

    The body is read raw, before any JSON parsing, so the signature is checked
    against the exact bytes received.

    Returns:
        Tuple of (response_dict, status_code)
    """
    body = req.get_data()
    correlation_id = getattr(req, 'correlation_id', req.headers.get('X-Correlation-ID'))
    return asyncio.run(dispatcher.handle_request(req.headers, body, correlation_id=correlation_id))


def health_payload(dispatcher: InteractionDispatcher, service_name: str) -> dict:
    return {
        'status': 'healthy',
        'service': service_name,
        'commands': dispatcher.registry.keys()
    }


def route_request(req: Request, dispatcher: InteractionDispatcher, config: Config) -> tuple:
    """Route a request by path and method (Functions Framework entry points)."""
    if req.path == config.interactions_path and req.method == 'POST':
        return handle_interactions_request(req, dispatcher)

    if req.path == '/health' and req.method == 'GET':
        return health_payload(dispatcher, config.service_name), 200

    return {'error': 'Not found'}, 404


def create_app(dispatcher: InteractionDispatcher, config: Config = None, logger=None, tracing=None) -> Flask:
    """Build a Flask app serving the interactions endpoint and a health check.

    Args:
        dispatcher: Dispatcher handling interaction requests
        config: Service configuration (defaults apply when omitted)
        logger: StructuredLogger for request correlation logging (optional)
        tracing: TracingManager instrumenting the app with OpenTelemetry (optional)

    Returns:
        Flask app
    """
    config = config or Config()
    app = Flask(__name__)

    if tracing:
        tracing.instrument_flask(app)

    def interactions():
        return handle_interactions_request(request, dispatcher)

    def health():
        return health_payload(dispatcher, config.service_name), 200

    if logger:
        interactions = with_correlation(logger)(interactions)
        health = with_correlation(logger)(health)

    app.add_url_rule(config.interactions_path, 'interactions', interactions, methods=['POST'])
    app.add_url_rule('/health', 'health', health, methods=['GET'])

    @app.errorhandler(Exception)
    def handle_exception(error):
        if isinstance(error, HTTPException):
            return {'error': error.name}, error.code
        if logger:
            logger.error(
                "Unhandled exception",
                error=error,
                correlation_id=getattr(request, 'correlation_id', None),
                method=request.method,
                path=request.path
            )
        return {'error': 'Internal server error'}, 500

    return app
