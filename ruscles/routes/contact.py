from flask import Blueprint, jsonify, current_app
from ruscles import db
from ruscles.middleware.validation import get_form_or_json
from ruscles.exceptions import ValidationError
from ruscles.services.contact_service import ContactService, INVALID_MESSAGE, FAILURE_MESSAGE

contact_bp = Blueprint('contact', __name__)


@contact_bp.route('', methods=['POST'])
def submit_contact_form():
    """Public contact form. Always answers {success, message}."""
    try:
        data = get_form_or_json()
    except ValidationError:
        return jsonify({'success': False, 'message': INVALID_MESSAGE}), 400

    try:
        success, message, _ = ContactService(db.session).submit(data)
    except Exception as e:
        current_app.logger.error(f"Contact form error: {str(e)}")
        return jsonify({'success': False, 'message': FAILURE_MESSAGE}), 500

    if not success:
        status_code = 500 if message == FAILURE_MESSAGE else 400
        return jsonify({'success': False, 'message': message}), status_code

    return jsonify({'success': True, 'message': message}), 201
