import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from coffeeme.exceptions import ConflictError, NotFoundError, ValidationError
from coffeeme.validators import to_decimal, to_int
from .models import Item

logger = logging.getLogger(__name__)


class ItemService:
    """Inventory ledger: the item catalogue and its stock counts."""

    REQUIRED_FIELDS = ('name', 'category', 'price', 'sku')
    OPTIONAL_TEXT_FIELDS = ('description', 'image')

    @staticmethod
    def _clean(data, partial=False):
        """Normalise an item payload, raising ValidationError on bad values"""
        if not partial:
            missing = [field for field in ItemService.REQUIRED_FIELDS if data.get(field) in (None, '')]
            if missing:
                raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        cleaned = {}
        for field in ('name', 'category'):
            if field in data:
                value = str(data[field] or '').strip()
                if not value:
                    raise ValidationError(f"{field} cannot be empty")
                cleaned[field] = value

        if 'sku' in data:
            sku = str(data['sku'] or '').strip()
            if not sku:
                raise ValidationError("SKU cannot be empty")
            cleaned['sku'] = sku

        if 'price' in data:
            cleaned['price'] = to_decimal(data['price'], 'price', minimum=Decimal('0'))
        if data.get('cost_price') is not None:
            cleaned['cost_price'] = to_decimal(data['cost_price'], 'cost_price', minimum=Decimal('0'))
        if data.get('stock') is not None:
            stock = to_int(data['stock'], 'stock')
            if stock < 0:
                raise ValidationError("Stock cannot be negative")
            cleaned['stock'] = stock

        for field in ItemService.OPTIONAL_TEXT_FIELDS:
            if field in data:
                cleaned[field] = data[field] or None

        return cleaned

    @staticmethod
    def list_items(category=None, search=None):
        queryset = Item.objects.all()
        if category:
            queryset = queryset.filter(category=category)
        if search:
            queryset = queryset.filter(Q(name__icontains=search) | Q(sku__icontains=search))
        return queryset.order_by('-created_at')

    @staticmethod
    def get_item(item_id, for_update=False):
        queryset = Item.objects.select_for_update() if for_update else Item.objects.all()
        try:
            return queryset.get(pk=item_id)
        except (Item.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(f"Item {item_id} not found")

    @staticmethod
    @transaction.atomic
    def create_item(data):
        cleaned = ItemService._clean(data)
        if Item.objects.filter(sku=cleaned['sku']).exists():
            raise ConflictError("Item with this SKU already exists")

        item = Item.objects.create(**cleaned)
        logger.info(f"Created item {item.sku} ({item.pk}) with stock {item.stock}")
        return item

    @staticmethod
    @transaction.atomic
    def update_item(item_id, data):
        item = ItemService.get_item(item_id, for_update=True)
        cleaned = ItemService._clean(data, partial=True)

        new_sku = cleaned.get('sku')
        if new_sku and new_sku != item.sku:
            if Item.objects.filter(sku=new_sku).exclude(pk=item.pk).exists():
                raise ConflictError("Item with this SKU already exists")

        for attr, value in cleaned.items():
            setattr(item, attr, value)
        item.save()
        return item

    @staticmethod
    @transaction.atomic
    def delete_item(item_id):
        item = ItemService.get_item(item_id, for_update=True)
        # Sold items stay so order history keeps its references
        if item.order_lines.exists():
            raise ConflictError("Cannot delete item that has been used in orders")
        item.delete()
        logger.info(f"Deleted item {item.sku} ({item_id})")

    @staticmethod
    def apply_stock_delta(item_id, delta):
        """
        Change stock in place with a single conditional UPDATE.

        The stock check is part of the same statement, so two transactions
        cannot both sell the last unit. Returns False when the change would
        take stock below zero (nothing is written in that case).
        """
        queryset = Item.objects.filter(pk=item_id)
        if delta < 0:
            queryset = queryset.filter(stock__gte=-delta)
        return queryset.update(stock=F('stock') + delta, updated_at=timezone.now()) == 1

    @staticmethod
    @transaction.atomic
    def adjust_stock(item_id, delta):
        """Manual stock correction by a signed amount"""
        delta = to_int(delta, 'delta')
        item = ItemService.get_item(item_id, for_update=True)
        if not ItemService.apply_stock_delta(item.pk, delta):
            raise ValidationError(
                f"Stock cannot be negative. Available: {item.stock}, Adjustment: {delta}"
            )
        item.refresh_from_db()
        logger.info(f"Stock for {item.sku} adjusted by {delta} to {item.stock}")
        return item

    @staticmethod
    @transaction.atomic
    def set_stock(item_id, stock):
        """Set an absolute stock count (stock take)"""
        stock = to_int(stock, 'stock')
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        item = ItemService.get_item(item_id, for_update=True)
        previous = item.stock
        item.stock = stock
        item.save(update_fields=['stock', 'updated_at'])
        logger.info(f"Stock for {item.sku} set from {previous} to {stock}")
        return item

    @staticmethod
    def low_stock_items(threshold=None):
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        return Item.objects.filter(stock__lt=threshold).order_by('stock', 'name')
