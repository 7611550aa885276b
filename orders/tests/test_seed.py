import pytest
from django.core.management import call_command

from inventory.models import Item
from orders.models import Table
from store.models import ShopSettings


@pytest.mark.django_db
class TestSeedCommand:

    def test_loads_sample_data(self):
        call_command('seed_pos')

        assert Item.objects.count() == 8
        assert Item.objects.get(sku='CAP-001').stock == 30
        assert list(Table.objects.values_list('number', 'seats')) == [
            (1, 2), (2, 2), (3, 4), (4, 4), (5, 6), (6, 6), (7, 8), (8, 4)
        ]
        assert ShopSettings.objects.count() == 1

    def test_is_idempotent(self):
        call_command('seed_pos')
        Item.objects.filter(sku='CAP-001').update(stock=3)

        call_command('seed_pos')

        assert Item.objects.count() == 8
        assert Table.objects.count() == 8
        assert Item.objects.get(sku='CAP-001').stock == 3

    def test_skip_tables(self):
        call_command('seed_pos', skip_tables=True)

        assert Item.objects.count() == 8
        assert not Table.objects.exists()
