import uuid
from decimal import Decimal

import pytest

from inventory.models import Item


@pytest.mark.django_db
class TestItemsAPI:

    def test_create_and_list(self, api_client):
        payload = {
            'name': 'Iced Mocha', 'category': 'Cold Drinks', 'price': 600,
            'costPrice': 200, 'stock': 25, 'sku': 'MOC-003',
            'description': 'Refreshing iced chocolate coffee',
        }
        response = api_client.post('/api/items/', payload, format='json')

        assert response.status_code == 201
        assert response.data['sku'] == 'MOC-003'
        assert response.data['costPrice'] == Decimal('200.00')
        assert 'createdAt' in response.data

        response = api_client.get('/api/items/')
        assert response.status_code == 200
        assert [row['sku'] for row in response.data] == ['MOC-003']

    def test_duplicate_sku_returns_400(self, api_client, cappuccino):
        payload = {'name': 'Dup', 'category': 'Coffee', 'price': 1, 'sku': 'CAP-001'}
        response = api_client.post('/api/items/', payload, format='json')

        assert response.status_code == 400
        assert response.data['message'] == "Item with this SKU already exists"
        assert response.data['details'] == {'code': 'conflict'}

    def test_get_unknown_item_returns_404(self, api_client):
        response = api_client.get(f'/api/items/{uuid.uuid4()}/')

        assert response.status_code == 404
        assert response.data['error'] is True
        assert response.data['status_code'] == 404

    def test_put_updates_given_fields_only(self, api_client, cappuccino):
        response = api_client.put(f'/api/items/{cappuccino.pk}/', {'price': 480}, format='json')

        assert response.status_code == 200
        assert response.data['price'] == Decimal('480.00')
        assert response.data['name'] == 'Cappuccino'

    def test_negative_price_rejected(self, api_client, cappuccino):
        response = api_client.patch(f'/api/items/{cappuccino.pk}/', {'price': -1}, format='json')

        assert response.status_code == 400
        assert response.data['message'] == 'Validation error'

    def test_stock_delta(self, api_client, cappuccino):
        response = api_client.patch(f'/api/items/{cappuccino.pk}/stock/', {'delta': -4}, format='json')

        assert response.status_code == 200
        assert response.data['stock'] == 26

    def test_stock_delta_below_zero(self, api_client, cappuccino):
        response = api_client.patch(f'/api/items/{cappuccino.pk}/stock/', {'delta': -40}, format='json')

        assert response.status_code == 400
        assert "Stock cannot be negative" in response.data['message']
        assert Item.objects.get(pk=cappuccino.pk).stock == 30

    def test_stock_needs_exactly_one_field(self, api_client, cappuccino):
        response = api_client.patch(
            f'/api/items/{cappuccino.pk}/stock/', {'stock': 5, 'delta': 1}, format='json'
        )
        assert response.status_code == 400

    def test_delete(self, api_client, cappuccino):
        response = api_client.delete(f'/api/items/{cappuccino.pk}/')

        assert response.status_code == 204
        assert not Item.objects.exists()

    def test_low_stock(self, api_client, make_item):
        make_item(sku='LOW-001', stock=1)
        make_item(sku='OK-001', stock=50)

        response = api_client.get('/api/items/low-stock/', {'threshold': 5})

        assert response.status_code == 200
        assert [row['sku'] for row in response.data] == ['LOW-001']
