from decimal import Decimal

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


class TimeStampedModel(models.Model):
    """Base model with created_at and updated_at fields"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class ShopSettings(TimeStampedModel):
    """Shop-wide configuration. Exactly one row, always stored under SINGLETON_ID."""
    SINGLETON_ID = 1

    DEFAULTS = {
        'shop_name': 'Coffee Me',
        'address': '123 Coffee Street, Cityville',
        'phone': '+1 234 567 8900',
        'email': 'hello@coffeeme.com',
        'service_charge_percent': Decimal('10.00'),
        'tax_percent': Decimal('0.00'),
        'currency_code': 'INR',
        'currency_locale': 'en-IN',
        'currency_symbol': '₹',
    }

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID, editable=False)
    shop_name = models.CharField(max_length=255)
    address = models.CharField(max_length=500, blank=True, default='')
    phone = models.CharField(max_length=50, blank=True, default='')
    email = models.CharField(max_length=255, blank=True, default='')

    service_charge_percent = models.DecimalField(
        max_digits=5, decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    tax_percent = models.DecimalField(
        max_digits=5, decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )

    currency_code = models.CharField(max_length=10)
    currency_locale = models.CharField(max_length=20)
    currency_symbol = models.CharField(max_length=10)
    logo = models.TextField(null=True, blank=True)

    def __str__(self):
        return self.shop_name

    class Meta:
        db_table = 'shop_settings'
        verbose_name = 'Shop settings'
        verbose_name_plural = 'Shop settings'
