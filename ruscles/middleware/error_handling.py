from functools import wraps
from flask import jsonify, current_app, g
from ruscles import db
from ruscles.exceptions import ServiceError


def handle_service_errors(action):
    """
    Decorator translating errors raised by a view into JSON responses.

    ServiceError subclasses keep their status code and message; anything else
    is logged and answered with a generic 500 `Failed to <action>`. The
    session is rolled back in both cases.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ServiceError as e:
                db.session.rollback()
                return jsonify(e.to_dict()), e.status_code
            except Exception as e:
                db.session.rollback()
                current_app.logger.error(f"Failed to {action}: {str(e)}", exc_info=True)
                return jsonify({'error': f'Failed to {action}'}), 500
        return decorated_function
    return decorator


def list_response(plural, items, pagination, **extra):
    body = {plural: [item.to_dict() for item in items], 'pagination': pagination}
    body.update(extra)
    return jsonify(body)


def current_principal():
    return g.get('current_user')
