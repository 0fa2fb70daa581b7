"""
Routes package for the Stock Ledger API
"""

from stock_ledger import csrf
from stock_ledger.logger import get_logger
from stock_ledger.presentation.responses import error_response

logger = get_logger("stock_ledger.routes")


def init_app(app):
    """Register the API blueprints and JSON error handlers with the Flask app"""
    logger.debug("Initializing route blueprints")

    from . import auth, dashboard_api

    # The SPA posts JSON with a token, not forms; CSRF tokens do not apply
    csrf.exempt(auth.bp)
    csrf.exempt(dashboard_api.bp)

    app.register_blueprint(auth.bp, url_prefix='/api')
    app.register_blueprint(dashboard_api.bp, url_prefix='/api')

    @app.errorhandler(404)
    def not_found(error):
        return error_response("Resource not found.", 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response("Method not allowed.", 405)

    @app.errorhandler(429)
    def too_many_requests(error):
        return error_response("Too many requests, try again later.", 429)

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled server error: {error}", exc_info=True)
        return error_response("Internal server error.", 500)

    logger.debug("Route blueprints registered")
