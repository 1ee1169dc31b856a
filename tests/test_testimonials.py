import math
from datetime import timedelta

import pytest

from ruscles import db
from ruscles.models.testimonial import Testimonial
from ruscles.utils.dates import utcnow


def create(client, headers, **fields):
    payload = {'customerName': 'Jane Doe', 'testimonialText': 'Fixed our AC in an hour.'}
    payload.update(fields)
    response = client.post('/api/content/testimonials', json=payload, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_first_testimonial_gets_display_order_one(client, admin_headers):
    body = create(client, admin_headers)
    assert body['displayOrder'] == 1
    assert body['isVisible'] is True
    assert body['isFeatured'] is False


def test_display_order_is_max_plus_one(client, admin_headers):
    create(client, admin_headers)
    create(client, admin_headers, displayOrder=10)
    assert create(client, admin_headers)['displayOrder'] == 11


def test_create_reports_missing_fields(client, admin_headers):
    response = client.post('/api/content/testimonials', json={'rating': 5}, headers=admin_headers)
    assert response.status_code == 400
    error = response.get_json()['error']
    assert 'customerName' in error and 'testimonialText' in error


@pytest.mark.parametrize('rating', [0, 6, 'great', True])
def test_rating_must_be_integer_between_one_and_five(client, admin_headers, rating):
    response = client.post('/api/content/testimonials', headers=admin_headers, json={
        'customerName': 'Jane', 'testimonialText': 'Good', 'rating': rating,
    })
    assert response.status_code == 400


def test_get_unknown_id_is_404(client, admin_headers):
    response = client.get('/api/content/testimonials/999', headers=admin_headers)
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Testimonial not found'}


def test_put_requires_fields_and_overwrites(client, admin_headers):
    created = create(client, admin_headers, customerTitle='Owner', rating=4, isFeatured=True)
    url = f"/api/content/testimonials/{created['id']}"

    missing = client.put(url, json={'customerName': 'Jane'}, headers=admin_headers)
    assert missing.status_code == 400

    response = client.put(url, json={'customerName': 'Janet', 'testimonialText': 'New text'}, headers=admin_headers)
    body = response.get_json()
    assert response.status_code == 200
    assert body['customerName'] == 'Janet'
    assert body['customerTitle'] is None
    assert body['rating'] is None
    assert body['isFeatured'] is False
    assert body['displayOrder'] == created['displayOrder']


def test_patch_merges_supplied_fields(client, admin_headers):
    created = create(client, admin_headers, customerTitle='Owner', rating=4)
    response = client.patch(f"/api/content/testimonials/{created['id']}",
                            json={'isVisible': False}, headers=admin_headers)
    body = response.get_json()
    assert response.status_code == 200
    assert body['isVisible'] is False
    assert body['customerTitle'] == 'Owner'
    assert body['rating'] == 4


def test_delete(client, admin_headers):
    created = create(client, admin_headers)
    url = f"/api/content/testimonials/{created['id']}"
    assert client.delete(url, headers=admin_headers).get_json() == {'message': 'Testimonial deleted successfully'}
    assert client.get(url, headers=admin_headers).status_code == 404
    assert client.delete(url, headers=admin_headers).status_code == 404


def test_reorder_applies_submitted_values(client, admin_headers):
    a = create(client, admin_headers)
    b = create(client, admin_headers)

    response = client.put('/api/content/testimonials/reorder', headers=admin_headers, json={
        'testimonials': [{'id': a['id'], 'displayOrder': 3}, {'id': b['id'], 'displayOrder': 1}],
    })
    assert response.status_code == 200
    assert [r['success'] for r in response.get_json()['results']] == [True, True]

    assert client.get(f"/api/content/testimonials/{a['id']}", headers=admin_headers).get_json()['displayOrder'] == 3
    assert client.get(f"/api/content/testimonials/{b['id']}", headers=admin_headers).get_json()['displayOrder'] == 1


def test_reorder_is_all_or_nothing(client, admin_headers):
    a = create(client, admin_headers)
    original = a['displayOrder']

    response = client.put('/api/content/testimonials/reorder', headers=admin_headers, json={
        'testimonials': [{'id': a['id'], 'displayOrder': 7}, {'id': 9999, 'displayOrder': 2}],
    })
    assert response.status_code == 400
    results = response.get_json()['results']
    assert results[0]['success'] is True
    assert results[1] == {'index': 1, 'id': 9999, 'success': False, 'error': 'Testimonial not found'}

    assert client.get(f"/api/content/testimonials/{a['id']}", headers=admin_headers).get_json()['displayOrder'] == original


def test_reorder_requires_a_list(client, admin_headers):
    response = client.put('/api/content/testimonials/reorder', json={'testimonials': 'nope'}, headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Invalid testimonials data'


def test_pagination_pages_and_total(client, admin_headers):
    for i in range(45):
        db.session.add(Testimonial(customer_name=f'Customer {i}', testimonial_text='ok',
                                   project_type='hvac' if i % 3 == 0 else 'electrical',
                                   display_order=i + 1))
    db.session.commit()

    for params, expected_total in (({}, 45), ({'projectType': 'hvac'}, 15), ({'search': 'Customer 4'}, 6)):
        for limit in (7, 20, 100):
            for page in (1, 2, 50):
                query = dict(params, limit=limit, page=page)
                body = client.get('/api/content/testimonials', query_string=query, headers=admin_headers).get_json()
                pagination = body['pagination']
                assert pagination['total'] == expected_total
                assert pagination['pages'] == math.ceil(expected_total / limit)
                assert pagination['page'] == page
                assert pagination['limit'] == limit


def test_list_defaults_and_bad_paging(client, admin_headers):
    body = client.get('/api/content/testimonials', headers=admin_headers).get_json()
    assert body['pagination'] == {'page': 1, 'limit': 20, 'total': 0, 'pages': 0}
    assert body['testimonials'] == []

    response = client.get('/api/content/testimonials?page=abc', headers=admin_headers)
    assert response.status_code == 400

    response = client.get('/api/content/testimonials?page=99999999999999999999', headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json() == {'error': 'page is out of range'}


def test_list_sorting_and_flags(client, admin_headers):
    create(client, admin_headers, customerName='Zed', isFeatured=True)
    create(client, admin_headers, customerName='Amy', isVisible=False)

    names = [t['customerName'] for t in client.get(
        '/api/content/testimonials?sortBy=customerName&sortOrder=asc', headers=admin_headers).get_json()['testimonials']]
    assert names == ['Amy', 'Zed']

    featured = client.get('/api/content/testimonials?isFeatured=true', headers=admin_headers).get_json()
    assert [t['customerName'] for t in featured['testimonials']] == ['Zed']

    assert client.get('/api/content/testimonials?sortBy=password', headers=admin_headers).status_code == 400


def test_stats(client, admin_headers):
    create(client, admin_headers, rating=5, projectType='hvac', isFeatured=True)
    create(client, admin_headers, rating=4, projectType='hvac')
    create(client, admin_headers, projectType=None, isVisible=False)
    old = Testimonial(customer_name='Old', testimonial_text='x', rating=3, display_order=99,
                      created_at=utcnow() - timedelta(days=800))
    db.session.add(old)
    db.session.commit()

    stats = client.get('/api/content/testimonials/stats', headers=admin_headers).get_json()
    assert stats['total'] == 4
    assert stats['visible'] == 3
    assert stats['hidden'] == 1
    assert stats['featured'] == 1
    assert stats['newThisYear'] == 3
    assert stats['newThisMonth'] == 3
    assert stats['averageRating'] == 4.0
    assert stats['projectTypeDistribution'] == [{'projectType': 'hvac', 'count': 2}]


def test_stats_average_rating_zero_without_ratings(client, admin_headers):
    create(client, admin_headers)
    assert client.get('/api/content/testimonials/stats', headers=admin_headers).get_json()['averageRating'] == 0


def test_public_testimonials_hide_invisible(client, admin_headers):
    create(client, admin_headers, customerName='Shown')
    create(client, admin_headers, customerName='Featured', isFeatured=True)
    create(client, admin_headers, customerName='Hidden', isVisible=False)

    names = [t['customerName'] for t in client.get('/api/public/testimonials').get_json()['testimonials']]
    assert names == ['Featured', 'Shown']
