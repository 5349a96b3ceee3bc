"""
Test configuration for the commerce ledger.
"""
import os

import pytest
from rest_framework.test import APIClient


def pytest_configure():
    """Configure Django settings for testing."""
    os.environ.setdefault('ENVIRONMENT', 'test')


@pytest.fixture
def customer():
    from tests.factories import UserFactory
    return UserFactory()


@pytest.fixture
def operator():
    """Staff user for operator endpoints."""
    from tests.factories import UserFactory
    return UserFactory(is_staff=True)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def operator_client(operator):
    client = APIClient()
    client.force_authenticate(user=operator)
    return client


@pytest.fixture
def customer_client(customer):
    client = APIClient()
    client.force_authenticate(user=customer)
    return client
