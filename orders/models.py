import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from inventory.models import Item
from store.models import TimeStampedModel


class Table(TimeStampedModel):
    STATUS_AVAILABLE = 'available'
    STATUS_OCCUPIED = 'occupied'
    STATUS_RESERVED = 'reserved'
    STATUS_CHOICES = (
        (STATUS_AVAILABLE, "Available"),
        (STATUS_OCCUPIED, "Occupied"),
        (STATUS_RESERVED, "Reserved"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    number = models.PositiveIntegerField(unique=True, validators=[MinValueValidator(1)])
    seats = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_AVAILABLE)

    # Weak reference to the pending order seated here; only orders set it
    current_order = models.ForeignKey(
        'Order', on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )

    def __str__(self):
        return f"Table: {self.number}"

    class Meta:
        db_table = 'tables'
        ordering = ['number']


class Order(models.Model):
    ORDER_TYPE_DINE_IN = 'dine-in'
    ORDER_TYPE_TAKEAWAY = 'takeaway'
    ORDER_TYPE_DELIVERY = 'delivery'
    ORDER_TYPE_CHOICES = (
        (ORDER_TYPE_DINE_IN, "Dine In"),
        (ORDER_TYPE_TAKEAWAY, "Takeaway"),
        (ORDER_TYPE_DELIVERY, "Delivery"),
    )

    PAYMENT_CASH = 'cash'
    PAYMENT_CARD = 'card'
    PAYMENT_ONLINE = 'online'
    PAYMENT_METHOD_CHOICES = (
        (PAYMENT_CASH, "Cash"),
        (PAYMENT_CARD, "Card"),
        (PAYMENT_ONLINE, "Online"),
    )

    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = (
        (STATUS_PENDING, "Pending"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    )
    TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_CANCELLED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_type = models.CharField(max_length=20, choices=ORDER_TYPE_CHOICES)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default=PAYMENT_CASH)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    # Pricing fields
    subtotal = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    service_charge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    discount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    # Dine-in only. table_number is a copy that survives the table being removed
    table = models.ForeignKey(Table, on_delete=models.SET_NULL, null=True, blank=True, related_name='orders')
    table_number = models.PositiveIntegerField(null=True, blank=True)

    staff_name = models.CharField(max_length=100, null=True, blank=True)
    customer_name = models.CharField(max_length=100, null=True, blank=True)
    customer_phone = models.CharField(max_length=20, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    def __str__(self):
        where = f"Table {self.table_number}" if self.table_number else self.get_order_type_display()
        return f"#{self.id} - {where} - {self.status}"

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']


class OrderLine(models.Model):
    order = models.ForeignKey(Order, related_name='lines', on_delete=models.CASCADE)
    item = models.ForeignKey(Item, related_name='order_lines', on_delete=models.PROTECT)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    # Snapshots taken when the order was placed; later item edits do not touch them
    price = models.DecimalField(max_digits=10, decimal_places=2)
    cost_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    @property
    def line_total(self):
        return self.price * self.quantity

    @property
    def line_profit(self):
        return (self.price - self.cost_price) * self.quantity

    def __str__(self):
        return f"{self.quantity} x {self.item.name}"

    class Meta:
        db_table = 'order_lines'
        ordering = ['id']
