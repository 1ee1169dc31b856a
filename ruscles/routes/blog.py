from flask import Blueprint, request, jsonify
from ruscles import db
from ruscles.middleware.auth import protect_blueprint
from ruscles.middleware.error_handling import handle_service_errors, list_response, current_principal
from ruscles.middleware.validation import get_json_body
from ruscles.services.blog_service import BlogService

blog_bp = protect_blueprint(Blueprint('blog', __name__))


@blog_bp.route('', methods=['GET'])
@handle_service_errors('fetch blog posts')
def list_posts():
    posts, pagination = BlogService(db.session).list(request.args)
    return list_response('posts', posts, pagination)


@blog_bp.route('', methods=['POST'])
@handle_service_errors('create blog post')
def create_post():
    post = BlogService(db.session).create(get_json_body(), author_id=current_principal().id)
    return jsonify(post.to_dict()), 201


@blog_bp.route('/stats', methods=['GET'])
@handle_service_errors('fetch blog stats')
def blog_stats():
    return jsonify(BlogService(db.session).stats()), 200


@blog_bp.route('/<int:post_id>', methods=['GET'])
@handle_service_errors('fetch blog post')
def get_post(post_id):
    return jsonify(BlogService(db.session).get(post_id).to_dict()), 200


@blog_bp.route('/<int:post_id>', methods=['PUT', 'PATCH'])
@handle_service_errors('update blog post')
def update_post(post_id):
    post = BlogService(db.session).update(post_id, get_json_body(), partial=request.method == 'PATCH')
    return jsonify(post.to_dict()), 200


@blog_bp.route('/<int:post_id>', methods=['DELETE'])
@handle_service_errors('delete blog post')
def delete_post(post_id):
    BlogService(db.session).delete(post_id)
    return jsonify({'message': 'Blog post deleted successfully'}), 200
