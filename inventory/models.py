import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from store.models import TimeStampedModel


class Item(TimeStampedModel):
    """A sellable product with its price, cost and stock on hand"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100)

    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    cost_price = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    stock = models.PositiveIntegerField(default=0)

    # Stock keeping unit, used for searching and must stay unique
    sku = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=1000, null=True, blank=True)
    image = models.TextField(null=True, blank=True)

    @property
    def margin(self):
        return self.price - self.cost_price

    def __str__(self):
        return f"{self.name} ({self.sku})"

    class Meta:
        db_table = 'items'
        ordering = ['-created_at']
