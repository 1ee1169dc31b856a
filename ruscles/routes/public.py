"""
Read-only endpoints backing the public marketing pages.
"""

from flask import Blueprint, request, jsonify
from ruscles import db
from ruscles.middleware.error_handling import handle_service_errors, list_response
from ruscles.models.testimonial import Testimonial
from ruscles.models.blog import BlogPost
from ruscles.services.blog_service import BlogService
from ruscles.services.portfolio_service import PortfolioService
from ruscles.services.settings_service import SettingsService
from ruscles.services.site_content_service import BusinessInfoService, PageContentService
from ruscles.utils.pagination import parse_page_args, paginate

public_bp = Blueprint('public', __name__)


@public_bp.route('/testimonials', methods=['GET'])
@handle_service_errors('fetch testimonials')
def public_testimonials():
    return jsonify({'testimonials': [t.to_dict() for t in Testimonial.get_public()]}), 200


@public_bp.route('/portfolio', methods=['GET'])
@handle_service_errors('fetch portfolio')
def public_portfolio():
    items = PortfolioService(db.session).public_items(request.args.get('category'))
    return jsonify({'portfolioItems': [item.to_dict() for item in items]}), 200


@public_bp.route('/blog', methods=['GET'])
@handle_service_errors('fetch blog posts')
def public_blog_posts():
    page, limit = parse_page_args(request.args)
    query = BlogService(db.session).published_query().order_by(
        BlogPost.published_at.desc(), BlogPost.id.desc()
    )
    posts, pagination = paginate(query, page, limit)
    return list_response('posts', posts, pagination)


@public_bp.route('/blog/<slug>', methods=['GET'])
@handle_service_errors('fetch blog post')
def public_blog_post(slug):
    return jsonify(BlogService(db.session).get_published_by_slug(slug).to_dict()), 200


@public_bp.route('/pages/<slug>', methods=['GET'])
@handle_service_errors('fetch page')
def public_page(slug):
    return jsonify(PageContentService(db.session).get(slug).to_dict()), 200


@public_bp.route('/settings', methods=['GET'])
@handle_service_errors('fetch settings')
def public_settings():
    settings = SettingsService(db.session).public_settings()
    return jsonify({'settings': {setting.key: setting.value for setting in settings}}), 200


@public_bp.route('/business-info', methods=['GET'])
@handle_service_errors('fetch business info')
def public_business_info():
    info = BusinessInfoService(db.session).get()
    if info is None:
        return jsonify({'businessInfo': None}), 200
    data = info.to_dict()
    data.pop('updatedBy', None)
    return jsonify({'businessInfo': data}), 200
