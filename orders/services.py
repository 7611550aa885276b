import logging
from collections import OrderedDict
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from coffeeme.exceptions import ConflictError, NotFoundError, ValidationError
from coffeeme.validators import CENT, to_decimal, to_int
from inventory.services import ItemService
from store.services import SettingsService
from .filters import OrderFilter
from .models import Order, OrderLine, Table

logger = logging.getLogger(__name__)


class TableService:
    """Table registry: seating plan and occupancy."""

    STATUSES = [choice for choice, _ in Table.STATUS_CHOICES]

    @staticmethod
    def _check_status(status):
        if status not in TableService.STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(TableService.STATUSES)}")

    @staticmethod
    def list_tables():
        return Table.objects.order_by('number')

    @staticmethod
    def get_table(table_id, for_update=False):
        queryset = Table.objects.select_for_update() if for_update else Table.objects.all()
        try:
            return queryset.get(pk=table_id)
        except (Table.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(f"Table {table_id} not found")

    @staticmethod
    def _ensure_number_free(number, exclude_pk=None):
        queryset = Table.objects.filter(number=number)
        if exclude_pk is not None:
            queryset = queryset.exclude(pk=exclude_pk)
        if queryset.exists():
            raise ConflictError("Table with this number already exists")

    @staticmethod
    @transaction.atomic
    def create_table(data):
        number = to_int(data.get('number'), 'number', minimum=1)
        seats = to_int(data.get('seats'), 'seats', minimum=1)
        status = data.get('status') or Table.STATUS_AVAILABLE
        TableService._check_status(status)
        if status == Table.STATUS_OCCUPIED:
            raise ValidationError("Tables become occupied only through orders")

        TableService._ensure_number_free(number)
        table = Table.objects.create(number=number, seats=seats, status=status)
        logger.info(f"Created table {table.number} with {table.seats} seats")
        return table

    @staticmethod
    @transaction.atomic
    def update_table(table_id, data):
        table = TableService.get_table(table_id, for_update=True)

        if data.get('number') is not None:
            number = to_int(data['number'], 'number', minimum=1)
            if number != table.number:
                TableService._ensure_number_free(number, exclude_pk=table.pk)
            table.number = number
        if data.get('seats') is not None:
            table.seats = to_int(data['seats'], 'seats', minimum=1)
        table.save()

        if data.get('status') is not None and data['status'] != table.status:
            table = TableService.set_status(table.pk, data['status'])
        return table

    @staticmethod
    @transaction.atomic
    def delete_table(table_id):
        table = TableService.get_table(table_id, for_update=True)
        if table.status == Table.STATUS_OCCUPIED:
            raise ConflictError("Cannot delete occupied table. Please complete or cancel the order first")
        if table.orders.filter(status=Order.STATUS_PENDING).exists():
            raise ConflictError("Cannot delete table with pending orders")
        table.delete()
        logger.info(f"Deleted table {table.number}")

    @staticmethod
    @transaction.atomic
    def set_status(table_id, status):
        """
        Manual status change from the floor plan.

        Occupancy belongs to orders, so 'occupied' cannot be set by hand; moving
        a table to 'available' or 'reserved' drops its current order reference.
        """
        TableService._check_status(status)
        table = TableService.get_table(table_id, for_update=True)
        if status == Table.STATUS_OCCUPIED:
            raise ValidationError("Tables become occupied only by placing a dine-in order")

        if table.current_order_id is not None:
            logger.warning(f"Table {table.number} released by hand from order {table.current_order_id}")
        table.status = status
        table.current_order = None
        table.save(update_fields=['status', 'current_order', 'updated_at'])
        return table

    @staticmethod
    def occupy(table, order):
        table.status = Table.STATUS_OCCUPIED
        table.current_order = order
        table.save(update_fields=['status', 'current_order', 'updated_at'])

    @staticmethod
    def release_for_order(order):
        """Free the order's table, but only while the table is still held by this order"""
        if order.table_id is None:
            return
        table = Table.objects.select_for_update().filter(pk=order.table_id).first()
        if table is None or table.current_order_id != order.pk:
            return
        table.status = Table.STATUS_AVAILABLE
        table.current_order = None
        table.save(update_fields=['status', 'current_order', 'updated_at'])


class OrderService:
    """
    Order lifecycle: create, checkout, status change and delete.

    Every mutation runs in one transaction so stock, table occupancy and the
    order rows always change together or not at all.
    """

    ORDER_TYPES = [choice for choice, _ in Order.ORDER_TYPE_CHOICES]
    PAYMENT_METHODS = [choice for choice, _ in Order.PAYMENT_METHOD_CHOICES]
    STATUSES = [choice for choice, _ in Order.STATUS_CHOICES]
    INITIAL_STATUSES = (Order.STATUS_PENDING, Order.STATUS_COMPLETED)

    # Client-computed figures may differ from ours by rounding only
    TOTAL_TOLERANCE = CENT
    # Largest amount the Order money columns (10 digits, 2 places) hold
    MAX_AMOUNT = Decimal('99999999.99')

    @staticmethod
    def _hydrated():
        return Order.objects.select_related('table').prefetch_related('lines__item')

    @staticmethod
    def get_order(order_id):
        try:
            return OrderService._hydrated().get(pk=order_id)
        except (Order.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(f"Order {order_id} not found")

    @staticmethod
    def _get_for_update(order_id):
        try:
            return Order.objects.select_for_update().get(pk=order_id)
        except (Order.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(f"Order {order_id} not found")

    @staticmethod
    def list_orders(filters=None):
        """Orders matching status, orderType, dateFrom and dateTo, newest first"""
        filterset = OrderFilter(data=filters or {}, queryset=OrderService._hydrated())
        if not filterset.is_valid():
            problems = '; '.join(
                f"{field}: {' '.join(messages)}" for field, messages in filterset.errors.items()
            )
            raise ValidationError(f"Invalid filters. {problems}")
        return filterset.qs.order_by('-created_at')

    @staticmethod
    def pending_orders():
        return OrderService._hydrated().filter(status=Order.STATUS_PENDING).order_by('-created_at')

    @staticmethod
    def _cart_lines(cart):
        """Validate cart entries into (item_id, quantity) pairs, keeping cart order"""
        if not cart:
            raise ValidationError("Cart is empty")
        lines = []
        for entry in cart:
            item_id = entry.get('item_id') or entry.get('id')
            if not item_id:
                raise ValidationError("Every cart line needs an item id")
            quantity = to_int(entry.get('quantity'), 'quantity')
            if quantity < 1:
                raise ValidationError("Quantity must be at least 1")
            lines.append((str(item_id), quantity))
        return lines

    @staticmethod
    def _compute_totals(lines, items, meta):
        subtotal = sum((items[item_id].price * quantity for item_id, quantity in lines), Decimal('0.00'))
        limit = OrderService.MAX_AMOUNT
        if subtotal > limit:
            raise ValidationError(f"Order subtotal cannot be greater than {limit}")

        if meta.get('service_charge') is not None:
            service_charge = to_decimal(
                meta['service_charge'], 'serviceCharge', minimum=Decimal('0'), maximum=limit
            )
        else:
            percent = SettingsService.get_settings().service_charge_percent
            service_charge = to_decimal(subtotal * percent / 100, 'serviceCharge', maximum=limit)

        discount = to_decimal(meta.get('discount') or 0, 'discount', minimum=Decimal('0'), maximum=limit)
        total = subtotal + service_charge - discount
        if total < 0:
            raise ValidationError("Discount cannot exceed subtotal plus service charge")
        if total > limit:
            raise ValidationError(f"Order total cannot be greater than {limit}")

        for field, label, computed in (('subtotal', 'subtotal', subtotal), ('total', 'total', total)):
            claimed = meta.get(field)
            if claimed is None:
                continue
            claimed = to_decimal(claimed, label)
            if abs(claimed - computed) > OrderService.TOTAL_TOLERANCE:
                raise ValidationError(
                    f"Order {label} {claimed} does not match the current prices ({computed})"
                )
        return subtotal, service_charge, discount, total

    @staticmethod
    def _reverse(order):
        """Undo an order's effects: restore its stock, free its table, remove it"""
        for line in order.lines.all():
            ItemService.apply_stock_delta(line.item_id, line.quantity)
        TableService.release_for_order(order)
        order.delete()

    @staticmethod
    @transaction.atomic
    def create_order(cart, meta):
        """
        Place an order for the cart.

        meta keys: order_type, payment_method, status (pending or completed),
        table_id, replaces_order_id, service_charge, discount, subtotal, total,
        staff_name, customer_name, customer_phone.

        replaces_order_id names a pending order that was loaded back into the
        cart; it is reversed inside this transaction and the new order takes
        its place, including its table.
        """
        order_type = meta.get('order_type')
        if order_type not in OrderService.ORDER_TYPES:
            raise ValidationError(f"Invalid order type. Must be one of: {', '.join(OrderService.ORDER_TYPES)}")
        payment_method = meta.get('payment_method') or Order.PAYMENT_CASH
        if payment_method not in OrderService.PAYMENT_METHODS:
            raise ValidationError(
                f"Invalid payment method. Must be one of: {', '.join(OrderService.PAYMENT_METHODS)}"
            )
        status = meta.get('status') or Order.STATUS_PENDING
        if status not in OrderService.INITIAL_STATUSES:
            raise ValidationError("Orders can only be created as pending or completed")

        table_id = meta.get('table_id')
        if order_type == Order.ORDER_TYPE_DINE_IN and not table_id:
            raise ValidationError("A table is required for dine-in orders")
        if order_type != Order.ORDER_TYPE_DINE_IN and table_id:
            raise ValidationError("Only dine-in orders can be assigned a table")

        lines = OrderService._cart_lines(cart)

        replaces_order_id = meta.get('replaces_order_id')
        if replaces_order_id:
            replaced = OrderService._get_for_update(replaces_order_id)
            if replaced.status != Order.STATUS_PENDING:
                raise ConflictError("Only pending orders can be replaced")
            OrderService._reverse(replaced)
            logger.info(f"Order {replaces_order_id} reversed to be saved again")

        requested = OrderedDict()
        for item_id, quantity in lines:
            requested[item_id] = requested.get(item_id, 0) + quantity

        # Lock rows in a stable order so concurrent orders cannot deadlock
        items = {}
        for item_id in sorted(requested):
            item = ItemService.get_item(item_id, for_update=True)
            if item.stock < requested[item_id]:
                raise ValidationError(
                    f"Insufficient stock for {item.name}. "
                    f"Available: {item.stock}, Requested: {requested[item_id]}"
                )
            items[item_id] = item

        table = None
        if order_type == Order.ORDER_TYPE_DINE_IN:
            table = TableService.get_table(table_id, for_update=True)
            if table.status == Table.STATUS_OCCUPIED:
                raise ConflictError(f"Table {table.number} is already occupied")

        subtotal, service_charge, discount, total = OrderService._compute_totals(lines, items, meta)

        order = Order.objects.create(
            order_type=order_type,
            payment_method=payment_method,
            status=status,
            subtotal=subtotal,
            service_charge=service_charge,
            discount=discount,
            total=total,
            table=table,
            table_number=table.number if table else None,
            staff_name=meta.get('staff_name') or None,
            customer_name=meta.get('customer_name') or None,
            customer_phone=meta.get('customer_phone') or None,
        )

        for item_id, quantity in lines:
            item = items[item_id]
            OrderLine.objects.create(
                order=order,
                item=item,
                quantity=quantity,
                price=item.price,
                cost_price=item.cost_price,
            )

        for item_id, quantity in requested.items():
            if not ItemService.apply_stock_delta(item_id, -quantity):
                raise ValidationError(f"Insufficient stock for {items[item_id].name}")

        # A sale paid on the spot never holds the table
        if table is not None and status == Order.STATUS_PENDING:
            TableService.occupy(table, order)

        logger.info(
            f"Created {status} {order_type} order {order.pk} with {len(lines)} lines, total {total}"
        )
        return OrderService.get_order(order.pk)

    @staticmethod
    @transaction.atomic
    def checkout_order(order_id):
        """Complete a pending order and free its table. Stock was taken at creation."""
        order = OrderService._get_for_update(order_id)
        if order.status == Order.STATUS_COMPLETED:
            raise ConflictError("Order is already completed")
        if order.status == Order.STATUS_CANCELLED:
            raise ConflictError("Cancelled orders cannot be checked out")

        order.status = Order.STATUS_COMPLETED
        order.save(update_fields=['status', 'updated_at'])
        TableService.release_for_order(order)

        logger.info(f"Checked out order {order.pk}")
        return OrderService.get_order(order.pk)

    @staticmethod
    @transaction.atomic
    def update_order_status(order_id, status):
        """
        Overwrite the status field only.

        Unlike checkout_order this leaves the table and stock alone; a dine-in
        order marked completed here still holds its table until it is freed.
        """
        if status not in OrderService.STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(OrderService.STATUSES)}")
        order = OrderService._get_for_update(order_id)

        if order.is_terminal and status != order.status:
            logger.warning(f"Order {order.pk} moved out of terminal status {order.status} to {status}")
        order.status = status
        order.save(update_fields=['status', 'updated_at'])
        return OrderService.get_order(order.pk)

    @staticmethod
    @transaction.atomic
    def delete_order(order_id):
        """Remove an order, returning its stock and freeing its table"""
        order = OrderService._get_for_update(order_id)
        OrderService._reverse(order)
        logger.info(f"Deleted order {order_id} and restored its stock")
