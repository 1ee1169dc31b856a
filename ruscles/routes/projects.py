from flask import Blueprint, request, jsonify
from ruscles import db
from ruscles.middleware.auth import protect_blueprint
from ruscles.middleware.error_handling import handle_service_errors, list_response
from ruscles.middleware.validation import get_json_body
from ruscles.services.project_service import ProjectService

projects_bp = protect_blueprint(Blueprint('projects', __name__))


@projects_bp.route('', methods=['GET'])
@handle_service_errors('fetch projects')
def list_projects():
    projects, pagination = ProjectService(db.session).list(request.args)
    return list_response('projects', projects, pagination)


@projects_bp.route('', methods=['POST'])
@handle_service_errors('create project')
def create_project():
    project = ProjectService(db.session).create(get_json_body())
    return jsonify(project.to_dict()), 201


@projects_bp.route('/stats', methods=['GET'])
@handle_service_errors('fetch project stats')
def project_stats():
    return jsonify(ProjectService(db.session).stats()), 200


@projects_bp.route('/<int:project_id>', methods=['GET'])
@handle_service_errors('fetch project')
def get_project(project_id):
    return jsonify(ProjectService(db.session).get(project_id).to_dict()), 200


@projects_bp.route('/<int:project_id>', methods=['PUT', 'PATCH'])
@handle_service_errors('update project')
def update_project(project_id):
    project = ProjectService(db.session).update(project_id, get_json_body(), partial=request.method == 'PATCH')
    return jsonify(project.to_dict()), 200


@projects_bp.route('/<int:project_id>', methods=['DELETE'])
@handle_service_errors('delete project')
def delete_project(project_id):
    ProjectService(db.session).delete(project_id)
    return jsonify({'message': 'Project deleted successfully'}), 200
