"""
Liveness/readiness checks and development database utilities.
"""

from flask import Blueprint, jsonify, current_app
from ruscles import db
from ruscles.middleware.auth import require_auth
from ruscles.services.database_service import DatabaseService
from ruscles.utils.dates import utcnow, isoformat

system_bp = Blueprint('system', __name__)

RESET_ENVIRONMENTS = ('development', 'testing')


@system_bp.route('/health', methods=['GET'])
def health_check():
    database_ok = DatabaseService(db.session).check_connection()
    return jsonify({
        'status': 'healthy' if database_ok else 'degraded',
        'timestamp': isoformat(utcnow()),
        'environment': current_app.config['ENVIRONMENT'],
        'database': 'connected' if database_ok else 'disconnected',
        'version': current_app.config['APP_VERSION'],
    }), 200


@system_bp.route('/db/health', methods=['GET'])
def database_health():
    service = DatabaseService(db.session)
    if not service.check_connection():
        return jsonify({'status': 'error', 'message': 'Database connection failed'}), 500

    try:
        counts = service.table_counts()
    except Exception as e:
        current_app.logger.error(f"Failed to collect table counts: {str(e)}")
        counts = None

    return jsonify({
        'status': 'healthy',
        'message': 'Database is running and accessible',
        'timestamp': isoformat(utcnow()),
        'stats': counts,
    }), 200


@system_bp.route('/db/seed', methods=['POST'])
@require_auth
def seed_database():
    try:
        summary = DatabaseService(db.session).seed(
            admin_email=current_app.config['SEED_ADMIN_EMAIL'],
            company_name=current_app.config['SEED_COMPANY_NAME'],
        )
    except Exception as e:
        current_app.logger.error(f"Database seeding failed: {str(e)}")
        return jsonify({'status': 'error', 'message': 'Database seeding failed'}), 500

    return jsonify({
        'status': 'success',
        'message': 'Database seeded successfully',
        'timestamp': isoformat(utcnow()),
        'summary': summary,
    }), 200


@system_bp.route('/db/reset', methods=['POST'])
@require_auth
def reset_database():
    environment = current_app.config['ENVIRONMENT']
    if environment not in RESET_ENVIRONMENTS:
        current_app.logger.warning(f"Refused database reset in {environment}")
        return jsonify({'status': 'error', 'message': f'Database reset is not allowed in {environment}'}), 403

    try:
        removed = DatabaseService(db.session).reset()
    except Exception as e:
        current_app.logger.error(f"Database reset failed: {str(e)}")
        return jsonify({'status': 'error', 'message': 'Database reset failed'}), 500

    return jsonify({
        'status': 'success',
        'message': 'Database reset successfully',
        'timestamp': isoformat(utcnow()),
        'removed': removed,
    }), 200
