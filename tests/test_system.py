from unittest.mock import patch

from ruscles import bcrypt, db
from ruscles.models.enums import FormStatus, Role
from ruscles.models.form_submission import FormSubmission
from ruscles.models.site import Setting
from ruscles.models.user import User


def add_form(status, name='Visitor'):
    submission = FormSubmission(status=status, customer_info={'name': name}, form_data={'message': 'hi'})
    submission.set_customer_info({'name': name})
    db.session.add(submission)
    db.session.commit()
    return submission


class TestHealth:
    def test_health(self, client):
        body = client.get('/api/health').get_json()
        assert body['status'] == 'healthy'
        assert body['database'] == 'connected'
        assert body['environment'] == 'testing'

    def test_database_health_reports_counts(self, client, admin_user):
        body = client.get('/api/db/health').get_json()
        assert body['status'] == 'healthy'
        assert body['stats']['users'] == 1
        assert body['stats']['formSubmissions'] == 0

    def test_database_health_failure(self, client):
        with patch('ruscles.routes.system.DatabaseService.check_connection', return_value=False):
            response = client.get('/api/db/health')
        assert response.status_code == 500
        assert response.get_json()['status'] == 'error'


class TestSeedAndReset:
    def test_seed_is_idempotent(self, client, admin_headers):
        first = client.post('/api/db/seed', headers=admin_headers).get_json()['summary']
        assert first == {'adminCreated': True, 'businessInfoCreated': True, 'settingsCreated': 4, 'pagesCreated': 3}

        second = client.post('/api/db/seed', headers=admin_headers).get_json()['summary']
        assert second == {'adminCreated': False, 'businessInfoCreated': False, 'settingsCreated': 0, 'pagesCreated': 0}

        db.session.expire_all()
        assert Setting.query.count() == 4
        seeded = User.query.filter_by(email='admin@ruscles.com').one()
        assert seeded.role == Role.ADMIN

    def test_seed_keeps_existing_values(self, client, admin_headers):
        client.post('/api/settings', json={'key': 'site_name', 'value': 'Custom'}, headers=admin_headers)
        client.post('/api/db/seed', headers=admin_headers)
        db.session.expire_all()
        assert Setting.query.filter_by(key='site_name').one().value == 'Custom'

    def test_reset_wipes_tables(self, client, admin_headers):
        add_form(FormStatus.NEW)
        client.post('/api/db/seed', headers=admin_headers)

        response = client.post('/api/db/reset', headers=admin_headers)
        body = response.get_json()
        assert response.status_code == 200
        assert body['removed']['form_submissions'] == 1
        assert body['removed']['settings'] == 4

        db.session.expire_all()
        assert User.query.count() == 0


class TestDashboard:
    def test_empty_dashboard(self, client, admin_headers):
        body = client.get('/api/dashboard/stats', headers=admin_headers).get_json()
        assert body['success'] is True
        data = body['data']
        assert data['totalSubmissions'] == 0
        assert data['responseRate'] == 0
        assert data['recentActivity'] == []
        assert data['systemHealth']['database'] == 'healthy'

    def test_counts_and_response_rate(self, client, admin_headers):
        for status in (FormStatus.NEW, FormStatus.NEW, FormStatus.IN_PROGRESS,
                       FormStatus.RESPONDED, FormStatus.COMPLETED, FormStatus.ARCHIVED):
            add_form(status)

        data = client.get('/api/dashboard/stats', headers=admin_headers).get_json()['data']
        assert data['totalSubmissions'] == 6
        assert data['pendingItems'] == 2
        assert data['activeItems'] == 1
        assert data['completedItems'] == 2
        assert data['responseRate'] == 67
        assert data['avgResponseTime'] == 4
        assert data['customerSatisfaction'] == 95
        assert len(data['recentActivity']) == 5
        assert set(data['recentActivity'][0]) == {'id', 'type', 'status', 'priority', 'customerName', 'submittedAt'}


class TestCli:
    def test_create_admin_command(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-admin', 'boss@ruscles.com', '--password', 'hunter22', '--name', 'Boss'])
        assert result.exit_code == 0, result.output
        assert 'Admin ready: boss@ruscles.com' in result.output

        db.session.expire_all()
        user = User.query.filter_by(email='boss@ruscles.com').one()
        assert user.role == Role.ADMIN
        assert bcrypt.check_password_hash(user.password_hash, 'hunter22')

    def test_create_admin_rejects_short_password(self, app):
        result = app.test_cli_runner().invoke(args=['create-admin', 'boss@ruscles.com', '--password', '123'])
        assert result.exit_code != 0
        assert 'at least 6 characters' in result.output

    def test_seed_command(self, app):
        result = app.test_cli_runner().invoke(args=['seed-db'])
        assert result.exit_code == 0, result.output
        db.session.expire_all()
        assert Setting.query.count() == 4
