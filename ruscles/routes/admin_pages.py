"""
Entry points for the admin UI shell and the sign-in pages.

Rendering happens in the frontend; these return the JSON the shell needs.
Access to /admin is enforced by the page guard in middleware.auth.
"""

from flask import Blueprint, jsonify, request, current_app, g

admin_pages_bp = Blueprint('admin_pages', __name__)

AUTH_ERRORS = {
    'AccessDenied': 'You do not have permission to access the admin area.',
    'Configuration': 'Sign-in is not configured correctly.',
    'Verification': 'The sign-in link is no longer valid.',
}


@admin_pages_bp.route('/admin', methods=['GET'], strict_slashes=False)
@admin_pages_bp.route('/admin/<path:page>', methods=['GET'])
def admin_shell(page='dashboard'):
    return jsonify({'page': page, 'user': g.current_user.to_dict()}), 200


@admin_pages_bp.route('/auth/signin', methods=['GET'])
def signin_page():
    providers = ['credentials']
    if current_app.config.get('GOOGLE_CLIENT_ID'):
        providers.append('google')
    return jsonify({
        'page': 'signin',
        'providers': providers,
        'endpoints': {
            'credentials': '/api/auth/signin/credentials',
            'google': '/api/auth/signin/google',
        },
    }), 200


@admin_pages_bp.route('/auth/error', methods=['GET'])
def auth_error_page():
    code = request.args.get('error', 'Default')
    return jsonify({
        'page': 'error',
        'error': code,
        'message': AUTH_ERRORS.get(code, 'Unable to sign in.'),
    }), 200
