"""
Root conftest.py for all tests.

Fixtures here are available to every test module under the app tests/ folders.
"""
from decimal import Decimal

import pytest


@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/items/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def make_item(db):
    """Factory for catalogue items; every call gets a fresh SKU unless one is given"""
    from inventory.models import Item

    counter = {'n': 0}

    def _make_item(**overrides):
        counter['n'] += 1
        fields = {
            'name': f"Test Item {counter['n']}",
            'category': 'Coffee',
            'price': Decimal('100.00'),
            'cost_price': Decimal('40.00'),
            'stock': 10,
            'sku': f"TST-{counter['n']:03d}",
        }
        fields.update(overrides)
        return Item.objects.create(**fields)

    return _make_item


@pytest.fixture
def make_table(db):
    """Factory for tables numbered 1, 2, 3... unless a number is given"""
    from orders.models import Table

    counter = {'n': 0}

    def _make_table(**overrides):
        counter['n'] += 1
        fields = {'number': counter['n'], 'seats': 4}
        fields.update(overrides)
        return Table.objects.create(**fields)

    return _make_table


@pytest.fixture
def cappuccino(make_item):
    return make_item(
        name='Cappuccino', category='Coffee', sku='CAP-001',
        price=Decimal('450.00'), cost_price=Decimal('150.00'), stock=30,
    )


@pytest.fixture
def table_one(make_table):
    return make_table(number=1, seats=2)
