import pytest

from ruscles import create_app, db
from ruscles.flask_config import TestingConfig
from ruscles.models.enums import Role
from ruscles.models.user import User
from ruscles.services.identity_service import Principal
from ruscles.utils.jwt import generate_token


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email, role=Role.USER, name=None, is_active=True, **extra):
    user = User(email=email, name=name or email.split('@')[0], role=role, is_active=is_active, **extra)
    db.session.add(user)
    db.session.commit()
    return user


def auth_headers_for(user):
    token = generate_token(Principal.from_user(user))
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_user(app):
    return make_user('owner@ruscles.com', role=Role.ADMIN, name='Owner')


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers_for(admin_user)


@pytest.fixture
def user_headers(app):
    return auth_headers_for(make_user('helper@ruscles-staff.com', role=Role.USER, name='Helper'))
