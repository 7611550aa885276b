"""
Load the sample catalogue and floor plan.

Idempotent: items whose SKU already exists and tables whose number already
exists are left as they are.

Usage:
    python manage.py seed_pos
    python manage.py seed_pos --skip-tables
"""
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from inventory.models import Item
from orders.models import Table
from store.services import SettingsService

SAMPLE_ITEMS = [
    # name, category, price, cost price, stock, sku, description
    ('Cappuccino', 'Coffee', '450', '150', 30, 'CAP-001', 'Classic Italian cappuccino'),
    ('Caramel Latte', 'Coffee', '550', '180', 20, 'LAT-002', 'Sweet caramel flavored latte'),
    ('Iced Mocha', 'Cold Drinks', '600', '200', 25, 'MOC-003', 'Refreshing iced chocolate coffee'),
    ('Chocolate Donut', 'Pastries', '300', '100', 40, 'DON-004', 'Freshly baked chocolate donut'),
    ('Chicken Sandwich', 'Meals', '850', '350', 15, 'SAN-005', 'Grilled chicken sandwich with fries'),
    ('French Fries', 'Snacks', '500', '150', 35, 'FRI-006', 'Crispy golden french fries'),
    ('Espresso', 'Coffee', '350', '120', 50, 'ESP-007', 'Strong Italian espresso'),
    ('Croissant', 'Pastries', '400', '120', 30, 'CRO-008', 'Buttery flaky croissant'),
]

SAMPLE_TABLE_SEATS = [2, 2, 4, 4, 6, 6, 8, 4]


class Command(BaseCommand):
    help = "Load sample items, tables 1-8 and default shop settings"

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-tables",
            action="store_true",
            help="Only load the item catalogue",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        created_items = 0
        for name, category, price, cost_price, stock, sku, description in SAMPLE_ITEMS:
            _, created = Item.objects.get_or_create(
                sku=sku,
                defaults={
                    "name": name,
                    "category": category,
                    "price": Decimal(price),
                    "cost_price": Decimal(cost_price),
                    "stock": stock,
                    "description": description,
                },
            )
            created_items += created

        created_tables = 0
        if not options["skip_tables"]:
            for number, seats in enumerate(SAMPLE_TABLE_SEATS, start=1):
                _, created = Table.objects.get_or_create(number=number, defaults={"seats": seats})
                created_tables += created

        shop_settings = SettingsService.get_settings()

        self.stdout.write(self.style.SUCCESS(f"✓ Created {created_items} items and {created_tables} tables"))
        self.stdout.write(f"  Shop: {shop_settings.shop_name}")
