from decimal import Decimal

from rest_framework import serializers

from .models import ShopSettings


class ShopSettingsSerializer(serializers.ModelSerializer):
    shopName = serializers.CharField(source='shop_name', max_length=255, required=False)
    serviceChargePercent = serializers.DecimalField(
        source='service_charge_percent', max_digits=5, decimal_places=2,
        min_value=Decimal('0'), max_value=Decimal('100'), required=False
    )
    taxPercent = serializers.DecimalField(
        source='tax_percent', max_digits=5, decimal_places=2,
        min_value=Decimal('0'), max_value=Decimal('100'), required=False
    )
    currencyCode = serializers.CharField(source='currency_code', max_length=10, required=False)
    currencyLocale = serializers.CharField(source='currency_locale', max_length=20, required=False)
    currencySymbol = serializers.CharField(source='currency_symbol', max_length=10, required=False)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = ShopSettings
        fields = [
            'id', 'shopName', 'address', 'phone', 'email',
            'serviceChargePercent', 'taxPercent',
            'currencyCode', 'currencyLocale', 'currencySymbol',
            'logo', 'updatedAt'
        ]
        read_only_fields = ['id', 'updatedAt']
        extra_kwargs = {
            'address': {'required': False, 'allow_blank': True},
            'phone': {'required': False, 'allow_blank': True},
            'email': {'required': False, 'allow_blank': True},
            'logo': {'required': False, 'allow_null': True, 'allow_blank': True},
        }
