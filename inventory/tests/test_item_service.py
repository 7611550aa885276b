import uuid
from decimal import Decimal

import pytest

from coffeeme.exceptions import ConflictError, NotFoundError, ValidationError
from inventory.models import Item
from inventory.services import ItemService
from orders.services import OrderService


@pytest.mark.django_db
class TestItemCatalogue:

    def test_create_item(self):
        item = ItemService.create_item({
            'name': 'Espresso', 'category': 'Coffee', 'price': '350',
            'cost_price': 120, 'stock': 50, 'sku': 'ESP-007',
        })

        assert item.price == Decimal('350.00')
        assert item.cost_price == Decimal('120.00')
        assert item.stock == 50
        assert item.description is None

    def test_missing_required_fields(self):
        with pytest.raises(ValidationError, match="Missing required fields: price, sku"):
            ItemService.create_item({'name': 'Espresso', 'category': 'Coffee'})

    def test_duplicate_sku_is_a_conflict(self, cappuccino):
        with pytest.raises(ConflictError, match="Item with this SKU already exists"):
            ItemService.create_item({
                'name': 'Another', 'category': 'Coffee', 'price': 1, 'sku': 'CAP-001',
            })
        assert Item.objects.filter(sku='CAP-001').count() == 1

    def test_negative_stock_rejected_on_create(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            ItemService.create_item({
                'name': 'Tea', 'category': 'Tea', 'price': 100, 'sku': 'TEA-001', 'stock': -1,
            })

    def test_update_keeps_unspecified_fields(self, cappuccino):
        item = ItemService.update_item(cappuccino.pk, {'price': '475.00'})

        assert item.price == Decimal('475.00')
        assert item.name == 'Cappuccino'
        assert item.stock == 30

    def test_update_to_taken_sku_is_a_conflict(self, cappuccino, make_item):
        other = make_item(sku='LAT-002')
        with pytest.raises(ConflictError):
            ItemService.update_item(other.pk, {'sku': 'CAP-001'})

    def test_update_with_own_sku_is_allowed(self, cappuccino):
        item = ItemService.update_item(cappuccino.pk, {'sku': 'CAP-001', 'name': 'Cappuccino Grande'})
        assert item.name == 'Cappuccino Grande'

    def test_unknown_and_malformed_ids_are_not_found(self):
        with pytest.raises(NotFoundError):
            ItemService.get_item(uuid.uuid4())
        with pytest.raises(NotFoundError):
            ItemService.get_item('not-a-uuid')

    def test_delete_unused_item(self, cappuccino):
        ItemService.delete_item(cappuccino.pk)
        assert not Item.objects.filter(pk=cappuccino.pk).exists()

    def test_delete_sold_item_is_a_conflict(self, cappuccino):
        OrderService.create_order(
            [{'item_id': cappuccino.pk, 'quantity': 1}], {'order_type': 'takeaway'}
        )
        with pytest.raises(ConflictError, match="Cannot delete item that has been used in orders"):
            ItemService.delete_item(cappuccino.pk)

    def test_list_filters_by_category_and_search(self, make_item):
        make_item(name='Espresso', category='Coffee', sku='ESP-007')
        make_item(name='Croissant', category='Pastries', sku='CRO-008')

        assert [i.sku for i in ItemService.list_items(category='Pastries')] == ['CRO-008']
        assert [i.sku for i in ItemService.list_items(search='esp')] == ['ESP-007']
        assert [i.sku for i in ItemService.list_items(search='cro-')] == ['CRO-008']


@pytest.mark.django_db
class TestStockLedger:

    def test_adjust_stock_up_and_down(self, cappuccino):
        assert ItemService.adjust_stock(cappuccino.pk, -5).stock == 25
        assert ItemService.adjust_stock(cappuccino.pk, 12).stock == 37

    def test_adjust_below_zero_rejected(self, cappuccino):
        with pytest.raises(ValidationError, match="Available: 30, Adjustment: -31"):
            ItemService.adjust_stock(cappuccino.pk, -31)

        cappuccino.refresh_from_db()
        assert cappuccino.stock == 30

    def test_adjust_to_exactly_zero(self, cappuccino):
        assert ItemService.adjust_stock(cappuccino.pk, -30).stock == 0

    def test_set_stock(self, cappuccino):
        assert ItemService.set_stock(cappuccino.pk, 3).stock == 3

    def test_set_negative_stock_rejected(self, cappuccino):
        with pytest.raises(ValidationError):
            ItemService.set_stock(cappuccino.pk, -1)

    def test_apply_stock_delta_is_conditional(self, cappuccino):
        assert ItemService.apply_stock_delta(cappuccino.pk, -30) is True
        assert ItemService.apply_stock_delta(cappuccino.pk, -1) is False

        cappuccino.refresh_from_db()
        assert cappuccino.stock == 0

    def test_low_stock_items(self, make_item, settings):
        settings.LOW_STOCK_THRESHOLD = 10
        make_item(sku='LOW-001', stock=2)
        make_item(sku='LOW-002', stock=9)
        make_item(sku='OK-001', stock=10)

        assert [i.sku for i in ItemService.low_stock_items()] == ['LOW-001', 'LOW-002']
        assert [i.sku for i in ItemService.low_stock_items(threshold=3)] == ['LOW-001']
