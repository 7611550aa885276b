import logging
from decimal import Decimal

from django.db import transaction

from coffeeme.exceptions import ValidationError
from coffeeme.validators import to_decimal
from .models import ShopSettings

logger = logging.getLogger(__name__)


class SettingsService:
    """Singleton shop configuration with lazily seeded defaults."""

    TEXT_FIELDS = (
        'shop_name', 'address', 'phone', 'email',
        'currency_code', 'currency_locale', 'currency_symbol',
    )
    PERCENT_FIELDS = ('service_charge_percent', 'tax_percent')

    @staticmethod
    def get_settings():
        """Return the settings row, creating it with the defaults on first access"""
        shop_settings, created = ShopSettings.objects.get_or_create(
            pk=ShopSettings.SINGLETON_ID,
            defaults=ShopSettings.DEFAULTS,
        )
        if created:
            logger.info("Seeded default shop settings")
        return shop_settings

    @staticmethod
    @transaction.atomic
    def update_settings(data):
        """
        Merge the given fields into the settings row.

        Fields that are absent (or None, except logo) keep their current value.
        """
        changes = {}
        for field in SettingsService.TEXT_FIELDS:
            value = data.get(field)
            if value is None:
                continue
            value = str(value).strip()
            if field == 'shop_name' and not value:
                raise ValidationError("Shop name cannot be empty")
            changes[field] = value

        for field in SettingsService.PERCENT_FIELDS:
            if data.get(field) is not None:
                changes[field] = to_decimal(data[field], field, minimum=Decimal('0'), maximum=Decimal('100'))

        if 'logo' in data:
            changes['logo'] = data['logo'] or None

        SettingsService.get_settings()
        shop_settings = ShopSettings.objects.select_for_update().get(pk=ShopSettings.SINGLETON_ID)
        for field, value in changes.items():
            setattr(shop_settings, field, value)
        shop_settings.save()

        logger.info(f"Shop settings updated: {', '.join(sorted(changes)) or 'no changes'}")
        return shop_settings
