"""
Testimonial API Routes

This module provides admin endpoints for:
- Listing, creating, updating and deleting testimonials
- Bulk reordering of the display order
- Testimonial statistics
"""

from flask import Blueprint, request, jsonify, current_app
from ruscles import db
from ruscles.middleware.auth import protect_blueprint
from ruscles.middleware.error_handling import handle_service_errors, list_response
from ruscles.middleware.validation import get_json_body
from ruscles.services.testimonial_service import TestimonialService

testimonials_bp = protect_blueprint(Blueprint('testimonials', __name__))


@testimonials_bp.route('', methods=['GET'])
@handle_service_errors('fetch testimonials')
def list_testimonials():
    items, pagination = TestimonialService(db.session).list(request.args)
    return list_response('testimonials', items, pagination)


@testimonials_bp.route('', methods=['POST'])
@handle_service_errors('create testimonial')
def create_testimonial():
    testimonial = TestimonialService(db.session).create(get_json_body())
    return jsonify(testimonial.to_dict()), 201


@testimonials_bp.route('/stats', methods=['GET'])
@handle_service_errors('fetch testimonial stats')
def testimonial_stats():
    stats = TestimonialService(db.session).stats(current_app.config['BUSINESS_TIMEZONE'])
    return jsonify(stats), 200


@testimonials_bp.route('/reorder', methods=['PUT'])
@handle_service_errors('reorder testimonials')
def reorder_testimonials():
    """
    Body: {"testimonials": [{"id": 1, "displayOrder": 3}, ...]}

    Either every item is applied or none is; the response lists a result
    per item in both cases.
    """
    data = get_json_body()
    applied, results = TestimonialService(db.session).reorder(data.get('testimonials'))
    if not applied:
        return jsonify({'error': 'Some testimonials could not be reordered', 'results': results}), 400
    return jsonify({'message': 'Testimonials reordered successfully', 'results': results}), 200


@testimonials_bp.route('/<int:testimonial_id>', methods=['GET'])
@handle_service_errors('fetch testimonial')
def get_testimonial(testimonial_id):
    return jsonify(TestimonialService(db.session).get(testimonial_id).to_dict()), 200


@testimonials_bp.route('/<int:testimonial_id>', methods=['PUT', 'PATCH'])
@handle_service_errors('update testimonial')
def update_testimonial(testimonial_id):
    testimonial = TestimonialService(db.session).update(
        testimonial_id, get_json_body(), partial=request.method == 'PATCH'
    )
    return jsonify(testimonial.to_dict()), 200


@testimonials_bp.route('/<int:testimonial_id>', methods=['DELETE'])
@handle_service_errors('delete testimonial')
def delete_testimonial(testimonial_id):
    TestimonialService(db.session).delete(testimonial_id)
    return jsonify({'message': 'Testimonial deleted successfully'}), 200
