import uuid

import pytest

from coffeeme.exceptions import ConflictError, NotFoundError, ValidationError
from orders.models import Table
from orders.services import OrderService, TableService


@pytest.mark.django_db
class TestTableRegistry:

    def test_create_and_list_by_number(self):
        TableService.create_table({'number': 3, 'seats': 4})
        TableService.create_table({'number': 1, 'seats': 2, 'status': 'reserved'})

        tables = list(TableService.list_tables())
        assert [t.number for t in tables] == [1, 3]
        assert tables[0].status == Table.STATUS_RESERVED
        assert tables[1].status == Table.STATUS_AVAILABLE

    def test_duplicate_number_is_a_conflict(self, table_one):
        with pytest.raises(ConflictError, match="Table with this number already exists"):
            TableService.create_table({'number': 1, 'seats': 6})

    def test_occupied_cannot_be_requested(self):
        with pytest.raises(ValidationError):
            TableService.create_table({'number': 5, 'seats': 2, 'status': 'occupied'})
        assert not Table.objects.exists()

    def test_seats_and_number_must_be_positive(self):
        with pytest.raises(ValidationError):
            TableService.create_table({'number': 0, 'seats': 2})
        with pytest.raises(ValidationError):
            TableService.create_table({'number': 2, 'seats': 0})

    def test_update_number_conflict(self, make_table):
        make_table(number=1)
        second = make_table(number=2)

        with pytest.raises(ConflictError):
            TableService.update_table(second.pk, {'number': 1})

    def test_update_seats_and_status(self, table_one):
        table = TableService.update_table(table_one.pk, {'seats': 6, 'status': 'reserved'})

        assert table.seats == 6
        assert table.status == Table.STATUS_RESERVED

    def test_unknown_table(self):
        with pytest.raises(NotFoundError):
            TableService.get_table(uuid.uuid4())


@pytest.mark.django_db
class TestTableStatus:

    def test_invalid_status(self, table_one):
        with pytest.raises(ValidationError, match="Invalid status"):
            TableService.set_status(table_one.pk, 'broken')

    def test_occupied_cannot_be_set_by_hand(self, table_one):
        with pytest.raises(ValidationError):
            TableService.set_status(table_one.pk, 'occupied')

    def test_manual_release_clears_current_order(self, cappuccino, table_one):
        order = OrderService.create_order(
            [{'item_id': cappuccino.pk, 'quantity': 1}],
            {'order_type': 'dine-in', 'table_id': table_one.pk},
        )

        table = TableService.set_status(table_one.pk, 'reserved')

        assert table.status == Table.STATUS_RESERVED
        assert table.current_order_id is None
        # Later checkout must not touch a table it no longer holds
        OrderService.checkout_order(order.pk)
        table.refresh_from_db()
        assert table.status == Table.STATUS_RESERVED


@pytest.mark.django_db
class TestTableDelete:

    def test_delete_free_table(self, table_one):
        TableService.delete_table(table_one.pk)
        assert not Table.objects.exists()

    def test_delete_occupied_table(self, cappuccino, table_one):
        OrderService.create_order(
            [{'item_id': cappuccino.pk, 'quantity': 1}],
            {'order_type': 'dine-in', 'table_id': table_one.pk},
        )
        with pytest.raises(ConflictError, match="Cannot delete occupied table"):
            TableService.delete_table(table_one.pk)

    def test_delete_table_with_pending_order(self, cappuccino, table_one):
        OrderService.create_order(
            [{'item_id': cappuccino.pk, 'quantity': 1}],
            {'order_type': 'dine-in', 'table_id': table_one.pk},
        )
        TableService.set_status(table_one.pk, 'available')

        with pytest.raises(ConflictError, match="Cannot delete table with pending orders"):
            TableService.delete_table(table_one.pk)

    def test_deleted_table_keeps_number_on_orders(self, cappuccino, table_one):
        order = OrderService.create_order(
            [{'item_id': cappuccino.pk, 'quantity': 1}],
            {'order_type': 'dine-in', 'table_id': table_one.pk},
        )
        OrderService.checkout_order(order.pk)

        TableService.delete_table(table_one.pk)

        order = OrderService.get_order(order.pk)
        assert order.table_id is None
        assert order.table_number == 1
