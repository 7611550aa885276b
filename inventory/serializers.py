from decimal import Decimal

from rest_framework import serializers

from .models import Item


class ItemSerializer(serializers.ModelSerializer):
    costPrice = serializers.DecimalField(
        source='cost_price', max_digits=10, decimal_places=2,
        min_value=Decimal('0'), required=False
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Item
        fields = [
            'id', 'name', 'category', 'price', 'costPrice', 'stock',
            'sku', 'description', 'image', 'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id', 'createdAt', 'updatedAt']
        extra_kwargs = {
            'price': {'min_value': Decimal('0')},
            # SKU uniqueness is checked by ItemService so it surfaces as a conflict
            'sku': {'validators': []},
            'description': {'required': False, 'allow_null': True, 'allow_blank': True},
            'image': {'required': False, 'allow_null': True, 'allow_blank': True},
        }


class StockUpdateSerializer(serializers.Serializer):
    """Either an absolute stock count or a signed adjustment"""
    stock = serializers.IntegerField(required=False)
    delta = serializers.IntegerField(required=False)

    def validate(self, attrs):
        if ('stock' in attrs) == ('delta' in attrs):
            raise serializers.ValidationError("Provide exactly one of 'stock' or 'delta'.")
        return attrs
