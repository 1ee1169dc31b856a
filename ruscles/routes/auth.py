from flask import Blueprint, request, jsonify, make_response, current_app
from ruscles.exceptions import ServiceError, AuthenticationRequired, AccessDenied
from ruscles.middleware.auth import authenticate_request
from ruscles.middleware.validation import get_json_body

auth_bp = Blueprint('auth', __name__)


def _identity_service():
    return current_app.extensions['identity_service']


def _session_response(principal):
    token = _identity_service().issue_token(principal)
    response = make_response(jsonify({'user': principal.to_dict()}))

    # Set secure cookie
    response.set_cookie(
        'token',
        token,
        httponly=current_app.config['COOKIE_HTTPONLY'],
        secure=current_app.config['COOKIE_SECURE'],
        max_age=current_app.config['COOKIE_MAX_AGE'],
        samesite=current_app.config['COOKIE_SAMESITE'],
        path='/'
    )
    return response


@auth_bp.route('/signin/credentials', methods=['POST'])
def signin_with_credentials():
    try:
        data = get_json_body()
        principal = _identity_service().sign_in_with_credentials(data.get('email'), data.get('password'))
        return _session_response(principal)
    except ServiceError:
        # Every rejection looks the same to the client
        return jsonify({'error': 'Invalid credentials'}), 401
    except Exception as e:
        current_app.logger.error(f"Credentials sign-in error: {str(e)}")
        return jsonify({'error': 'Internal server error'}), 500


@auth_bp.route('/signin/google', methods=['POST'])
def signin_with_google():
    try:
        data = get_json_body()
        principal = _identity_service().sign_in_with_google_token(data.get('idToken'))
        return _session_response(principal)
    except AccessDenied as e:
        return jsonify({'error': e.message}), 403
    except ServiceError as e:
        return jsonify({'error': e.message}), 401
    except Exception as e:
        current_app.logger.error(f"Google sign-in error: {str(e)}")
        return jsonify({'error': 'Internal server error'}), 500


@auth_bp.route('/session', methods=['GET'])
def get_session():
    try:
        principal = authenticate_request(require_admin=False)
    except AuthenticationRequired:
        return jsonify({'error': 'Unauthorized'}), 401
    return jsonify({'user': principal.to_dict()}), 200


@auth_bp.route('/signout', methods=['POST'])
def signout():
    response = make_response(jsonify({'message': 'Signed out'}))
    response.delete_cookie('token', path='/')
    return response
