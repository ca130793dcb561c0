import pytest
from rest_framework.test import APIClient

from records.models import User

QOZ = 'AL QOUZ'
SONAPUR = 'SONAPUR 1'


@pytest.fixture
def nurse(db):
    return User.objects.create_user(username='nurse1', password='P@ssw0rd1', role='maleNurse', location_id=QOZ)


@pytest.fixture
def manager(db):
    return User.objects.create_user(username='manager1', password='P@ssw0rd1', role='manager',
                                    manager_locations=[QOZ])


@pytest.fixture
def superadmin(db):
    return User.objects.create_user(username='super1', password='P@ssw0rd1', role='superadmin')


def client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def nurse_client(nurse):
    return client_for(nurse)


@pytest.fixture
def manager_client(manager):
    return client_for(manager)


@pytest.fixture
def super_client(superadmin):
    return client_for(superadmin)
