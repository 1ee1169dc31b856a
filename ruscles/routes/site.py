"""
Admin endpoints for site-wide records: settings, business info and pages.
"""

from flask import Blueprint, request, jsonify
from ruscles import db
from ruscles.middleware.auth import protect_blueprint
from ruscles.middleware.error_handling import handle_service_errors, list_response, current_principal
from ruscles.middleware.validation import get_json_body
from ruscles.services.settings_service import SettingsService
from ruscles.services.site_content_service import BusinessInfoService, PageContentService

settings_bp = protect_blueprint(Blueprint('settings', __name__))
business_info_bp = protect_blueprint(Blueprint('business_info', __name__))
pages_bp = protect_blueprint(Blueprint('pages', __name__))


# Settings

@settings_bp.route('', methods=['GET'])
@handle_service_errors('fetch settings')
def list_settings():
    settings, pagination = SettingsService(db.session).list(request.args)
    return list_response('settings', settings, pagination)


@settings_bp.route('', methods=['POST'])
@handle_service_errors('create/update setting')
def upsert_setting():
    setting, created = SettingsService(db.session).upsert(get_json_body(), current_principal().email)
    return jsonify(setting.to_dict()), 201 if created else 200


# Business info

@business_info_bp.route('', methods=['GET'])
@handle_service_errors('fetch business info')
def get_business_info():
    info = BusinessInfoService(db.session).get()
    return jsonify({'businessInfo': info.to_dict() if info else None}), 200


@business_info_bp.route('', methods=['POST', 'PUT'])
@handle_service_errors('save business info')
def upsert_business_info():
    info, created = BusinessInfoService(db.session).upsert(get_json_body(), current_principal().email)
    return jsonify({'businessInfo': info.to_dict()}), 201 if created else 200


# Pages

@pages_bp.route('', methods=['GET'])
@handle_service_errors('fetch pages')
def list_pages():
    pages, pagination = PageContentService(db.session).list(request.args)
    return list_response('pages', pages, pagination)


@pages_bp.route('/<slug>', methods=['GET'])
@handle_service_errors('fetch page')
def get_page(slug):
    return jsonify(PageContentService(db.session).get(slug).to_dict()), 200


@pages_bp.route('/<slug>', methods=['PUT'])
@handle_service_errors('save page')
def upsert_page(slug):
    page, created = PageContentService(db.session).upsert(slug, get_json_body(), current_principal().email)
    return jsonify(page.to_dict()), 201 if created else 200


@pages_bp.route('/<slug>', methods=['DELETE'])
@handle_service_errors('delete page')
def delete_page(slug):
    PageContentService(db.session).delete(slug)
    return jsonify({'message': 'Page deleted successfully'}), 200
