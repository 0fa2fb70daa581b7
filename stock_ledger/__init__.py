from collections.abc import Mapping

from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from stock_ledger.logger import setup_logging, get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(key_func=get_remote_address)


def create_app(config_object=None, credential_provider=None):
    """
    Application factory.

    Args:
        config_object: Config class, import string or mapping. Defaults to config.Config.
        credential_provider: Object implementing the CredentialProvider interface.
            Defaults to a StaticCredentialProvider built from the configuration.
    """
    from stock_ledger.config import Config, INSTANCE_DIR

    app = Flask(__name__)

    if config_object is None:
        config_object = Config
    if isinstance(config_object, Mapping):
        app.config.from_object(Config)
        app.config.from_mapping(config_object)
    else:
        app.config.from_object(config_object)

    setup_logging(app.config.get('LOG_LEVEL', 'INFO'), app.config.get('LOG_DIR', 'logs'))
    logger = get_logger("stock_ledger.app")
    logger.info("Initializing Flask application")

    # SECURITY: Require SECRET_KEY outside of tests - no fallback
    if not app.config.get('SECRET_KEY'):
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if app.config['SQLALCHEMY_DATABASE_URI'].startswith(f"sqlite:///{INSTANCE_DIR.resolve()}"):
        INSTANCE_DIR.mkdir(parents=True, exist_ok=True)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from stock_ledger.data.catalog.product import Product
    from stock_ledger.data.catalog.supplier import Supplier
    from stock_ledger.data.ledger.purchase_record import PurchaseRecord
    from stock_ledger.data.ledger.sale_record import SaleRecord

    logger.debug("Models imported and registered")

    from stock_ledger.buisness.auth.credential_provider import StaticCredentialProvider
    if credential_provider is None:
        credential_provider = StaticCredentialProvider.from_config(app.config)
    app.extensions['credential_provider'] = credential_provider

    if not credential_provider.is_enabled:
        logger.warning("No administrator credential configured - dashboard login is disabled")

    @login_manager.user_loader
    def load_identity(identity_id):
        return current_app.extensions['credential_provider'].load_identity(identity_id)

    # Register blueprints
    from stock_ledger.presentation.routes import init_app as init_routes
    init_routes(app)

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        # Stock figures change on every write; never serve them from a cache
        response.headers['Cache-Control'] = 'no-store'
        return response

    logger.info("Flask application initialization complete")

    return app
