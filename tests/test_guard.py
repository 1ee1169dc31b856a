import pytest

from ruscles.flask_config import TestingConfig
from ruscles import create_app, db
from ruscles.models.enums import Role

from conftest import make_user, auth_headers_for

ADMIN_API_ROUTES = [
    ('get', '/api/content/testimonials'),
    ('get', '/api/content/testimonials/stats'),
    ('put', '/api/content/testimonials/reorder'),
    ('get', '/api/content/portfolio'),
    ('get', '/api/content/blog/stats'),
    ('get', '/api/content/pages'),
    ('get', '/api/customers'),
    ('get', '/api/customers/stats'),
    ('get', '/api/projects/stats'),
    ('get', '/api/forms'),
    ('get', '/api/forms/stats'),
    ('patch', '/api/forms/bulk'),
    ('post', '/api/forms/1/respond'),
    ('get', '/api/settings'),
    ('post', '/api/settings'),
    ('get', '/api/business-info'),
    ('get', '/api/dashboard/stats'),
    ('post', '/api/db/seed'),
    ('post', '/api/db/reset'),
]


@pytest.mark.parametrize('method,path', ADMIN_API_ROUTES)
def test_admin_api_requires_session(client, method, path):
    response = getattr(client, method)(path, json={})
    assert response.status_code == 401
    assert response.get_json() == {'error': 'Unauthorized'}


@pytest.mark.parametrize('method,path', ADMIN_API_ROUTES)
def test_admin_api_rejects_non_admin(client, user_headers, method, path):
    response = getattr(client, method)(path, json={}, headers=user_headers)
    assert response.status_code == 403
    assert response.get_json() == {'error': 'Forbidden'}


def test_admin_api_rejects_invalid_token(client):
    response = client.get('/api/forms', headers={'Authorization': 'Bearer nonsense'})
    assert response.status_code == 401


def test_admin_api_accepts_cookie(client, admin_user):
    client.post('/api/auth/signin/credentials', json={'email': admin_user.email, 'password': 'secret1'})
    assert client.get('/api/forms').status_code == 200


def test_public_routes_need_no_session(client):
    assert client.get('/api/health').status_code == 200
    assert client.get('/api/db/health').status_code == 200
    assert client.get('/api/public/testimonials').status_code == 200
    assert client.get('/auth/signin').status_code == 200


class TestAdminPageGuard:
    def test_redirects_to_sign_in_without_session(self, client):
        response = client.get('/admin/forms')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/auth/signin')

    def test_redirect_has_no_return_to(self, client):
        response = client.get('/admin')
        assert response.status_code == 302
        assert '?' not in response.headers['Location']

    def test_non_admin_redirected_to_error_page(self, client, user_headers):
        response = client.get('/admin/forms', headers=user_headers)
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/auth/error?error=AccessDenied')

    def test_admin_reaches_shell(self, client, admin_headers):
        response = client.get('/admin/forms/12', headers=admin_headers)
        assert response.status_code == 200
        body = response.get_json()
        assert body['page'] == 'forms/12'
        assert body['user']['role'] == 'ADMIN'

    def test_paths_that_only_share_the_prefix_are_not_guarded(self, client):
        assert client.get('/administrator').status_code == 404


def test_deactivated_admin_loses_access(app, client):
    user = make_user('admin@ruscles.com', role=Role.ADMIN)
    headers = auth_headers_for(user)
    assert client.get('/api/forms', headers=headers).status_code == 200

    user.is_active = False
    db.session.commit()
    assert client.get('/api/forms', headers=headers).status_code == 401


def test_unknown_api_route_is_json_404(client):
    response = client.get('/api/does-not-exist')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Not found'}


def test_db_reset_blocked_outside_development():
    class ProductionLikeConfig(TestingConfig):
        ENVIRONMENT = 'production'

    app = create_app(ProductionLikeConfig)
    with app.app_context():
        db.create_all()
        admin = make_user('owner@ruscles.com', role=Role.ADMIN)
        response = app.test_client().post('/api/db/reset', headers=auth_headers_for(admin))
        assert response.status_code == 403
        db.session.remove()
        db.drop_all()
