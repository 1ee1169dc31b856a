from ruscles import db
from ruscles.models.enums import Role
from ruscles.models.user import User

from conftest import make_user


class TestBlog:
    def create(self, client, headers, **fields):
        payload = {'title': 'Winter HVAC Tips!', 'content': 'Change your filters. ' * 150}
        payload.update(fields)
        return client.post('/api/content/blog', json=payload, headers=headers)

    def test_create_derives_slug_and_reading_time(self, client, admin_headers):
        response = self.create(client, admin_headers)
        post = response.get_json()
        assert response.status_code == 201
        assert post['slug'] == 'winter-hvac-tips'
        assert post['status'] == 'DRAFT'
        assert post['publishedAt'] is None
        assert post['readingTime'] == 2
        assert post['author']['email'] == 'owner@ruscles.com'

    def test_duplicate_title_conflicts(self, client, admin_headers):
        self.create(client, admin_headers)
        response = self.create(client, admin_headers, title='winter hvac tips')
        assert response.status_code == 400
        assert response.get_json() == {'error': 'A blog post with this title already exists'}

    def test_published_at_stamped_once(self, client, admin_headers):
        post = self.create(client, admin_headers, status='PUBLISHED').get_json()
        assert post['publishedAt'] is not None

        url = f"/api/content/blog/{post['id']}"
        client.patch(url, json={'status': 'DRAFT'}, headers=admin_headers)
        republished = client.patch(url, json={'status': 'PUBLISHED'}, headers=admin_headers).get_json()
        assert republished['publishedAt'] == post['publishedAt']

    def test_retitle_changes_slug(self, client, admin_headers):
        post = self.create(client, admin_headers).get_json()
        updated = client.patch(f"/api/content/blog/{post['id']}", json={'title': 'Summer AC Checklist'},
                               headers=admin_headers).get_json()
        assert updated['slug'] == 'summer-ac-checklist'

    def test_status_filter_and_stats(self, client, admin_headers):
        self.create(client, admin_headers, title='One', status='PUBLISHED')
        self.create(client, admin_headers, title='Two')
        self.create(client, admin_headers, title='Three', status='archived')

        assert client.get('/api/content/blog?status=PUBLISHED', headers=admin_headers).get_json()['pagination']['total'] == 1
        assert client.get('/api/content/blog?status=all', headers=admin_headers).get_json()['pagination']['total'] == 3

        stats = client.get('/api/content/blog/stats', headers=admin_headers).get_json()
        assert stats == {'total': 3, 'published': 1, 'draft': 1, 'scheduled': 0, 'archived': 1}

    def test_public_blog_only_shows_published(self, client, admin_headers):
        self.create(client, admin_headers, title='Live post', status='PUBLISHED')
        self.create(client, admin_headers, title='Draft post')

        listed = client.get('/api/public/blog').get_json()
        assert [p['slug'] for p in listed['posts']] == ['live-post']
        assert client.get('/api/public/blog/draft-post').status_code == 404

    def test_public_read_counts_views(self, client, admin_headers):
        self.create(client, admin_headers, title='Live post', status='PUBLISHED')
        client.get('/api/public/blog/live-post')
        assert client.get('/api/public/blog/live-post').get_json()['viewCount'] == 2


class TestPortfolio:
    ITEM = {
        'title': 'Kitchen rewire',
        'description': 'Full rewire of a 1970s kitchen',
        'serviceCategory': 'electrical',
        'thumbnailImage': 'https://cdn.example/kitchen.jpg',
    }

    def create(self, client, headers, **fields):
        response = client.post('/api/content/portfolio', json=dict(self.ITEM, **fields), headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    def test_required_fields(self, client, admin_headers):
        response = client.post('/api/content/portfolio', json={'title': 'x'}, headers=admin_headers)
        assert response.status_code == 400
        assert 'serviceCategory' in response.get_json()['error']

    def test_display_order_and_category_filter(self, client, admin_headers):
        first = self.create(client, admin_headers)
        second = self.create(client, admin_headers, serviceCategory='hvac')
        assert (first['displayOrder'], second['displayOrder']) == (1, 2)

        body = client.get('/api/content/portfolio?category=hvac', headers=admin_headers).get_json()
        assert [item['id'] for item in body['portfolioItems']] == [second['id']]

    def test_stats(self, client, admin_headers):
        self.create(client, admin_headers, projectValue=1200.5)
        self.create(client, admin_headers, projectValue='800', isVisible=False)
        self.create(client, admin_headers, serviceCategory='hvac', isFeatured=True)

        stats = client.get('/api/content/portfolio/stats', headers=admin_headers).get_json()
        assert stats['total'] == 3
        assert stats['visible'] == 2
        assert stats['hidden'] == 1
        assert stats['featured'] == 1
        assert stats['totalValue'] == 2000.5
        assert stats['categoryDistribution'] == [
            {'category': 'electrical', 'count': 2},
            {'category': 'hvac', 'count': 1},
        ]

    def test_public_portfolio(self, client, admin_headers):
        self.create(client, admin_headers, title='Shown')
        self.create(client, admin_headers, title='Hidden', isVisible=False)
        items = client.get('/api/public/portfolio').get_json()['portfolioItems']
        assert [item['title'] for item in items] == ['Shown']


class TestProjects:
    JOB = {'title': 'Boiler install', 'customerName': 'Jane', 'projectType': 'hvac'}

    def create(self, client, headers, **fields):
        return client.post('/api/projects', json=dict(self.JOB, **fields), headers=headers)

    def test_create_defaults(self, client, admin_headers):
        project = self.create(client, admin_headers).get_json()
        assert project['status'] == 'PLANNING'
        assert project['priority'] == 'MEDIUM'
        assert project['progress'] == 0
        assert project['manager'] is None

    def test_manager_and_dates_validated(self, client, admin_headers, admin_user):
        assert self.create(client, admin_headers, managerId=999).status_code == 404
        assert self.create(client, admin_headers, progress=101).status_code == 400
        assert self.create(client, admin_headers, startDate='2024-05-10', endDate='2024-05-01').status_code == 400

        project = self.create(client, admin_headers, managerId=admin_user.id, startDate='2024-05-01').get_json()
        assert project['manager']['id'] == admin_user.id
        assert project['startDate'] == '2024-05-01T00:00:00'

    def test_stats(self, client, admin_headers):
        for status in ('PLANNING', 'IN_PROGRESS', 'ACTIVE', 'COMPLETED', 'COMPLETED', 'ON_HOLD'):
            self.create(client, admin_headers, status=status)

        stats = client.get('/api/projects/stats', headers=admin_headers).get_json()
        assert stats == {
            'total': 6, 'active': 2, 'completed': 2, 'planning': 1,
            'inProgress': 1, 'onHold': 1, 'cancelled': 0,
        }

    def test_status_filter(self, client, admin_headers):
        self.create(client, admin_headers, status='COMPLETED')
        self.create(client, admin_headers)
        body = client.get('/api/projects?status=completed', headers=admin_headers).get_json()
        assert body['pagination']['total'] == 1


class TestCustomers:
    def test_create_and_unique_email(self, client, admin_headers):
        response = client.post('/api/customers', json={'name': 'Jane', 'email': 'Jane@Example.com'},
                               headers=admin_headers)
        assert response.status_code == 201
        assert response.get_json()['email'] == 'jane@example.com'
        assert response.get_json()['role'] == 'USER'

        duplicate = client.post('/api/customers', json={'name': 'J', 'email': 'jane@example.com'},
                                headers=admin_headers)
        assert duplicate.status_code == 400
        assert duplicate.get_json() == {'error': 'Customer with this email already exists'}

    def test_email_of_admin_also_conflicts(self, client, admin_headers):
        response = client.post('/api/customers', json={'name': 'X', 'email': 'owner@ruscles.com'},
                               headers=admin_headers)
        assert response.status_code == 400

    def test_invalid_email(self, client, admin_headers):
        response = client.post('/api/customers', json={'name': 'X', 'email': 'nope'}, headers=admin_headers)
        assert response.status_code == 400

    def test_admins_are_not_customers(self, client, admin_headers, admin_user):
        assert client.get(f'/api/customers/{admin_user.id}', headers=admin_headers).status_code == 404
        assert client.get('/api/customers', headers=admin_headers).get_json()['pagination']['total'] == 0

    def test_delete_deactivates(self, client, admin_headers):
        customer = client.post('/api/customers', json={'name': 'Jane', 'email': 'jane@example.com'},
                               headers=admin_headers).get_json()
        response = client.delete(f"/api/customers/{customer['id']}", headers=admin_headers)
        assert response.get_json() == {'message': 'Customer deactivated successfully'}

        db.session.expire_all()
        user = db.session.get(User, customer['id'])
        assert user is not None
        assert user.is_active is False

        active = client.get('/api/customers?isActive=true', headers=admin_headers).get_json()
        assert active['pagination']['total'] == 0

    def test_detail_includes_related_records(self, client, admin_headers):
        customer = make_user('jane@example.com', role=Role.USER)
        client.post('/api/projects', headers=admin_headers,
                    json={'title': 'Rewire', 'customerName': 'Jane', 'projectType': 'electrical',
                          'managerId': customer.id})

        detail = client.get(f'/api/customers/{customer.id}', headers=admin_headers).get_json()
        assert [p['title'] for p in detail['managedProjects']] == ['Rewire']
        assert detail['assignedForms'] == []

    def test_stats(self, client, admin_headers):
        make_user('a@example.com')
        make_user('b@example.com', is_active=False)
        stats = client.get('/api/customers/stats', headers=admin_headers).get_json()
        assert stats['total'] == 2
        assert stats['active'] == 1
        assert stats['inactive'] == 1
        assert stats['newThisMonth'] == 2
        assert stats['newThisYear'] == 2
