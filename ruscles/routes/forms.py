"""
Form Submission API Routes

This module provides admin endpoints for:
- Listing and filtering the submissions inbox
- Reading, updating and deleting a submission
- Responding to a submission
- Bulk status/priority/assignment updates
- Submission statistics
"""

from flask import Blueprint, request, jsonify
from ruscles import db
from ruscles.middleware.auth import protect_blueprint
from ruscles.middleware.error_handling import handle_service_errors, current_principal
from ruscles.middleware.validation import get_json_body, get_form_or_json
from ruscles.services.form_service import FormService

forms_bp = protect_blueprint(Blueprint('forms', __name__))


@forms_bp.route('', methods=['GET'])
@handle_service_errors('fetch form submissions')
def list_forms():
    forms, pagination = FormService(db.session).list(request.args)
    return jsonify({
        'forms': [form.to_dict(include_responses='latest') for form in forms],
        'pagination': pagination,
    }), 200


@forms_bp.route('', methods=['POST'])
@handle_service_errors('create form submission')
def create_form():
    form = FormService(db.session).create(get_json_body())
    return jsonify(form.to_dict(include_responses='all')), 201


@forms_bp.route('/stats', methods=['GET'])
@handle_service_errors('fetch form stats')
def form_stats():
    return jsonify(FormService(db.session).stats()), 200


@forms_bp.route('/bulk', methods=['PATCH'])
@handle_service_errors('bulk update form submissions')
def bulk_update_forms():
    """
    Body: {"formIds": [1, 2], "updates": {"status": "IN_PROGRESS"}}

    The update is applied to every id or to none of them.
    """
    data = get_json_body()
    form_ids = data.get('formIds')
    applied, results = FormService(db.session).bulk_update(form_ids, data.get('updates'))
    if not applied:
        return jsonify({
            'success': False,
            'error': 'Some form submissions could not be updated',
            'results': results,
        }), 400
    return jsonify({
        'success': True,
        'message': f"Updated {len(form_ids)} form submissions",
        'results': results,
    }), 200


@forms_bp.route('/<int:form_id>', methods=['GET'])
@handle_service_errors('fetch form submission')
def get_form(form_id):
    return jsonify(FormService(db.session).get(form_id).to_dict(include_responses='all')), 200


@forms_bp.route('/<int:form_id>', methods=['PATCH'])
@handle_service_errors('update form submission')
def update_form(form_id):
    form = FormService(db.session).update(form_id, get_json_body())
    return jsonify(form.to_dict(include_responses='all')), 200


@forms_bp.route('/<int:form_id>', methods=['DELETE'])
@handle_service_errors('delete form submission')
def delete_form(form_id):
    FormService(db.session).delete(form_id)
    return jsonify({'message': 'Form submission deleted successfully'}), 200


@forms_bp.route('/<int:form_id>/respond', methods=['POST'])
@handle_service_errors('create response')
def respond_to_form(form_id):
    response = FormService(db.session).respond(form_id, get_form_or_json(), current_principal())
    return jsonify({
        'message': 'Response recorded successfully',
        'response': response.to_dict(),
    }), 201
