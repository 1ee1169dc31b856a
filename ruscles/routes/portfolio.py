from flask import Blueprint, request, jsonify, current_app
from ruscles import db
from ruscles.middleware.auth import protect_blueprint
from ruscles.middleware.error_handling import handle_service_errors, list_response
from ruscles.middleware.validation import get_json_body
from ruscles.services.portfolio_service import PortfolioService

portfolio_bp = protect_blueprint(Blueprint('portfolio', __name__))


@portfolio_bp.route('', methods=['GET'])
@handle_service_errors('fetch portfolio items')
def list_portfolio_items():
    items, pagination = PortfolioService(db.session).list(request.args)
    return list_response('portfolioItems', items, pagination)


@portfolio_bp.route('', methods=['POST'])
@handle_service_errors('create portfolio item')
def create_portfolio_item():
    item = PortfolioService(db.session).create(get_json_body())
    return jsonify(item.to_dict()), 201


@portfolio_bp.route('/stats', methods=['GET'])
@handle_service_errors('fetch portfolio stats')
def portfolio_stats():
    return jsonify(PortfolioService(db.session).stats(current_app.config['BUSINESS_TIMEZONE'])), 200


@portfolio_bp.route('/<int:item_id>', methods=['GET'])
@handle_service_errors('fetch portfolio item')
def get_portfolio_item(item_id):
    return jsonify(PortfolioService(db.session).get(item_id).to_dict()), 200


@portfolio_bp.route('/<int:item_id>', methods=['PUT', 'PATCH'])
@handle_service_errors('update portfolio item')
def update_portfolio_item(item_id):
    item = PortfolioService(db.session).update(item_id, get_json_body(), partial=request.method == 'PATCH')
    return jsonify(item.to_dict()), 200


@portfolio_bp.route('/<int:item_id>', methods=['DELETE'])
@handle_service_errors('delete portfolio item')
def delete_portfolio_item(item_id):
    PortfolioService(db.session).delete(item_id)
    return jsonify({'message': 'Portfolio item deleted successfully'}), 200
