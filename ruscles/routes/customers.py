from flask import Blueprint, request, jsonify, current_app
from ruscles import db
from ruscles.middleware.auth import protect_blueprint
from ruscles.middleware.error_handling import handle_service_errors
from ruscles.middleware.validation import get_json_body
from ruscles.services.customer_service import CustomerService

customers_bp = protect_blueprint(Blueprint('customers', __name__))


@customers_bp.route('', methods=['GET'])
@handle_service_errors('fetch customers')
def list_customers():
    customers, pagination = CustomerService(db.session).list(request.args)
    return jsonify({
        'customers': [customer.to_dict(include_counts=True) for customer in customers],
        'pagination': pagination,
    }), 200


@customers_bp.route('', methods=['POST'])
@handle_service_errors('create customer')
def create_customer():
    customer = CustomerService(db.session).create(get_json_body())
    return jsonify(customer.to_dict(include_counts=True)), 201


@customers_bp.route('/stats', methods=['GET'])
@handle_service_errors('fetch customer stats')
def customer_stats():
    return jsonify(CustomerService(db.session).stats(current_app.config['BUSINESS_TIMEZONE'])), 200


@customers_bp.route('/<int:customer_id>', methods=['GET'])
@handle_service_errors('fetch customer')
def get_customer(customer_id):
    service = CustomerService(db.session)
    return jsonify(service.to_detail(service.get(customer_id))), 200


@customers_bp.route('/<int:customer_id>', methods=['PUT', 'PATCH'])
@handle_service_errors('update customer')
def update_customer(customer_id):
    service = CustomerService(db.session)
    customer = service.update(customer_id, get_json_body(), partial=request.method == 'PATCH')
    return jsonify(service.to_detail(customer)), 200


@customers_bp.route('/<int:customer_id>', methods=['DELETE'])
@handle_service_errors('deactivate customer')
def deactivate_customer(customer_id):
    CustomerService(db.session).delete(customer_id)
    return jsonify({'message': 'Customer deactivated successfully'}), 200
