from flask import Blueprint, jsonify
from ruscles import db
from ruscles.middleware.auth import protect_blueprint
from ruscles.middleware.error_handling import handle_service_errors
from ruscles.services.dashboard_service import DashboardService

dashboard_bp = protect_blueprint(Blueprint('dashboard', __name__))


@dashboard_bp.route('/stats', methods=['GET'])
@handle_service_errors('fetch stats')
def dashboard_stats():
    return jsonify({'success': True, 'data': DashboardService(db.session).stats()}), 200
