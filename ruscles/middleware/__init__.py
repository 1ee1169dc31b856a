from .validation import ValidationMiddleware
from .auth import require_auth, protect_blueprint, authenticate_request

__all__ = ['ValidationMiddleware', 'require_auth', 'protect_blueprint', 'authenticate_request']
