from flask import Blueprint, current_app, request
from flask_login import login_user, logout_user, current_user

from stock_ledger import limiter
from stock_ledger.logger import get_logger
from stock_ledger.presentation.responses import error_response, success_response
from stock_ledger.presentation.schemas import LoginRequest
from stock_ledger.utils.logging_sanitizer import sanitize_json_payload

logger = get_logger("stock_ledger.routes.auth")
bp = Blueprint('auth', __name__)


def _login_rate_limit():
    return current_app.config.get('LOGIN_RATE_LIMIT', '10 per minute')


@bp.route('/login', methods=['POST'])
@limiter.limit(_login_rate_limit)
def login():
    payload = request.get_json(silent=True)
    logger.debug(f"Login attempt payload: {sanitize_json_payload(payload)}")
    if not isinstance(payload, dict):
        payload = {}

    credentials = LoginRequest.from_payload(payload)
    provider = current_app.extensions['credential_provider']
    identity = provider.authenticate(credentials.username, credentials.password)

    if identity is None:
        logger.warning(f"Failed login attempt for username: {credentials.username}")
        return error_response("Incorrect username or password", 401)

    login_user(identity)
    logger.info(f"Successful login for user: {identity.username}")
    return success_response(message="Login successful", token=provider.issue_token(identity))


@bp.route('/logout', methods=['POST'])
def logout():
    if current_user.is_authenticated:
        logger.info(f"User logged out: {current_user.username}")
    logout_user()
    return success_response(message="Logged out")
