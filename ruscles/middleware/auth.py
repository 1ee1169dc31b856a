from functools import wraps
from urllib.parse import urlencode
from flask import request, jsonify, g, current_app, redirect
from ruscles.exceptions import AuthenticationRequired, AccessDenied


def _identity_service():
    return current_app.extensions['identity_service']


def get_request_token():
    """Session token from the 'token' cookie, falling back to a Bearer header."""
    token = request.cookies.get('token')
    if token:
        return token
    header = request.headers.get('Authorization', '')
    if header.lower().startswith('bearer '):
        return header[7:].strip() or None
    return None


def authenticate_request(require_admin=True):
    """
    Resolve the session principal for the current request.

    Raises AuthenticationRequired when there is no valid session and
    AccessDenied when an admin session is required but the principal is not
    an admin. On success the principal is stored on `g.current_user`.
    """
    token = get_request_token()
    if not token:
        raise AuthenticationRequired('Unauthorized')

    principal = _identity_service().resolve_token(token)
    if principal is None:
        raise AuthenticationRequired('Unauthorized')

    if require_admin and not principal.is_admin:
        raise AccessDenied('Forbidden')

    g.current_user = principal
    return principal


def _gate_response(error):
    if isinstance(error, AccessDenied):
        return jsonify({'error': 'Forbidden'}), 403
    return jsonify({'error': 'Unauthorized'}), 401


def require_auth(f):
    """
    Decorator that requires an admin session for a route.
    The principal is available as g.current_user inside the view.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        # Skip authentication for OPTIONS requests
        if request.method == 'OPTIONS':
            return f(*args, **kwargs)

        try:
            authenticate_request()
        except (AuthenticationRequired, AccessDenied) as e:
            return _gate_response(e)

        return f(*args, **kwargs)

    return decorated_function


def protect_blueprint(blueprint):
    """Apply the admin session gate to every route of `blueprint`."""
    @blueprint.before_request
    def _require_admin_session():
        if request.method == 'OPTIONS':
            return None
        try:
            authenticate_request()
        except (AuthenticationRequired, AccessDenied) as e:
            return _gate_response(e)
        return None

    return blueprint


def register_admin_guard(app):
    """
    Page guard for the admin area: unauthenticated visitors are redirected to
    the sign-in page, signed-in non-admins to the auth error page.
    """
    prefixes = tuple(app.config['ADMIN_PATH_PREFIXES'])

    @app.before_request
    def _guard_admin_pages():
        path = request.path
        if not any(path == prefix or path.startswith(prefix + '/') for prefix in prefixes):
            return None

        try:
            authenticate_request()
        except AccessDenied:
            current_app.logger.info(f"Non-admin session redirected away from {path}")
            query = urlencode({'error': 'AccessDenied'})
            return redirect(f"{app.config['AUTH_ERROR_PATH']}?{query}", code=302)
        except AuthenticationRequired:
            return redirect(app.config['SIGNIN_PATH'], code=302)
        return None
