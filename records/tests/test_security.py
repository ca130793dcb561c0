import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from records.models import AuditEvent, User
from .conftest import QOZ, SONAPUR

pytestmark = pytest.mark.django_db


def login(client, username, password):
    return client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')


def test_login_returns_jwt_and_legacy_token(nurse):
    client = APIClient()
    r = login(client, 'nurse1', 'P@ssw0rd1')
    assert r.status_code == 200
    assert r.data['token']
    assert r.data['jwt_access'] and r.data['jwt_refresh']
    assert r.data['user']['role'] == 'maleNurse'
    assert r.data['user']['locationId'] == 'AL QOUZ'
    assert AuditEvent.objects.filter(action='login', user=nurse).exists()


def test_login_by_email(db):
    User.objects.create_user(username='m2', email='m2@example.com', password='P@ssw0rd1', role='manager')
    r = login(APIClient(), 'M2@example.com', 'P@ssw0rd1')
    assert r.status_code == 200
    assert r.data['user']['username'] == 'm2'


def test_bad_credentials(nurse):
    r = login(APIClient(), 'nurse1', 'wrong')
    assert r.status_code == 401
    assert r.data['ok'] is False
    r = APIClient().post(reverse('login_view'), {'password': 'x'}, format='json')
    assert r.status_code == 400


def test_no_role_bypass_in_login(nurse):
    client = APIClient()
    r = client.post(reverse('login_view'), {'username': 'nurse1', 'password': 'P@ssw0rd1', 'role': 'superadmin'},
                    format='json')
    assert r.status_code == 200
    nurse.refresh_from_db()
    assert nurse.role == 'maleNurse'


def test_token_and_jwt_headers_authenticate(nurse):
    client = APIClient()
    data = login(client, 'nurse1', 'P@ssw0rd1').data

    client.credentials(HTTP_AUTHORIZATION=f"Token {data['token']}")
    assert client.get(reverse('me_view')).data['data']['username'] == 'nurse1'

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['jwt_access']}")
    assert client.get(reverse('me_view')).status_code == 200


def test_refresh_and_logout(nurse):
    client = APIClient()
    data = login(client, 'nurse1', 'P@ssw0rd1').data
    r = client.post(reverse('jwt_refresh_view'), {'refresh': data['jwt_refresh']}, format='json')
    assert r.status_code == 200
    assert r.data['jwt_access']

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['jwt_access']}")
    r = client.post(reverse('jwt_logout_view'), {'refresh': data['jwt_refresh']}, format='json')
    assert r.status_code == 200
    r = client.post(reverse('jwt_refresh_view'), {'refresh': data['jwt_refresh']}, format='json')
    assert r.status_code == 401

    r = client.post(reverse('jwt_logout_view'), {'refresh': 'garbage'}, format='json')
    assert r.status_code == 400


@pytest.mark.parametrize('url', [
    '/api/clinic', '/api/hospital', '/api/ip-admission', '/api/patients', '/api/emp-doj',
    '/api/professions/categories',
])
def test_endpoints_require_authentication(url):
    r = APIClient().get(url)
    assert r.status_code == 401
    assert r.data['ok'] is False


def test_healthz_is_public():
    r = APIClient().get(reverse('healthz'))
    assert r.status_code == 200
    assert r.json()['ok'] is True


def test_manager_cannot_open_other_sites(manager_client):
    from records.models import ClinicVisit
    other = ClinicVisit.objects.create(location_id='SONAPUR 1', emp_no='BB0001', token_no='SONA1-0512-0001')
    assert manager_client.get(f'/api/clinic/{other.id}').status_code == 403
    r = manager_client.get('/api/clinic', {'locationId': 'SONAPUR 1'})
    assert r.data['meta']['total'] == 0


def test_superadmin_sees_assigned_sites():
    from records.models import ClinicVisit
    boss = User.objects.create_user(username='super2', password='P@ssw0rd1', role='superadmin',
                                    manager_locations=[QOZ, SONAPUR])
    client = APIClient()
    client.force_authenticate(user=boss)
    ClinicVisit.objects.create(location_id=SONAPUR, emp_no='BB0001')
    ClinicVisit.objects.create(location_id=QOZ, emp_no='AA0001')
    ClinicVisit.objects.create(location_id='RAHABA', emp_no='CC0001')
    assert client.get('/api/clinic').data['meta']['total'] == 2
    assert client.get('/api/clinic', {'locationId': QOZ}).data['meta']['total'] == 1
    # A site outside the assignment falls back to the assigned set.
    assert client.get('/api/clinic', {'locationId': 'RAHABA'}).data['meta']['total'] == 2


def test_superadmin_without_sites_sees_nothing(super_client):
    from records.models import ClinicVisit
    ClinicVisit.objects.create(location_id='AL QOUZ', emp_no='AA0001')
    assert super_client.get('/api/clinic').data['meta']['total'] == 0
