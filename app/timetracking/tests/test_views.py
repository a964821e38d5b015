import pytest
from django.urls import reverse
from django.utils import timezone

from timetracking import services

pytestmark = pytest.mark.django_db


@pytest.fixture
def logged_in_client(client, user):
    client.force_login(user)
    return client


def test_period_list(logged_in_client, scope, organization):
    services.create_time_period(scope, '2024-02-01', '2024-03-01')
    services.create_time_period(scope, '2024-01-01', '2024-02-01')

    response = logged_in_client.get(reverse('timetracking:period_list'), HTTP_X_TENANT=organization.slug)

    assert response.status_code == 200
    assert [p['start_date'] for p in response.json()['periods']] == [
        '2024-01-01T00:00:00.000Z', '2024-02-01T00:00:00.000Z',
    ]


def test_current_period(logged_in_client, scope, organization):
    today = timezone.now().replace(hour=0, minute=0, second=0, microsecond=0)
    period = services.create_time_period(scope, today, today + timezone.timedelta(days=7))

    response = logged_in_client.get(reverse('timetracking:current_period'), HTTP_X_TENANT=organization.slug)

    assert response.status_code == 200
    assert response.json()['period_id'] == str(period.pk)


def test_no_current_period(logged_in_client, organization):
    response = logged_in_client.get(reverse('timetracking:current_period'), HTTP_X_TENANT=organization.slug)

    assert response.status_code == 404


def test_periods_are_listed_per_tenant(logged_in_client, scope, other_organization):
    services.create_time_period(scope, '2024-01-01', '2024-02-01')

    response = logged_in_client.get(reverse('timetracking:period_list'), HTTP_X_TENANT=other_organization.slug)

    assert response.status_code == 200
    assert response.json() == {'periods': []}


def test_unknown_tenant(logged_in_client):
    response = logged_in_client.get(reverse('timetracking:period_list'), HTTP_X_TENANT='nobody')

    assert response.status_code == 400
