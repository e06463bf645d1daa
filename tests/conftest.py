import pytest
from django.contrib.auth import get_user_model

from core.models import Horse
from pricing.models import BasePrice


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username='kari', password='secret')


@pytest.fixture
def other_user(db):
    return get_user_model().objects.create_user(username='ola', password='secret')


@pytest.fixture
def staff_user(db):
    return get_user_model().objects.create_user(
        username='admin', password='secret', is_staff=True
    )


@pytest.fixture
def horse(user):
    return Horse.objects.create(owner=user, name='Blakken')


@pytest.fixture
def user_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def base_prices(db):
    return {
        name: BasePrice.objects.create(name=name, price=price)
        for name, price in [
            (BasePrice.Name.BOX_MONTHLY, '10.00'),
            (BasePrice.Name.BOOST_DAILY, '2.00'),
            (BasePrice.Name.SERVICE_MONTHLY, '100.00'),
        ]
    }
