from rest_framework import serializers

from .models import Order, OrderLine, Table


class TableSerializer(serializers.ModelSerializer):
    currentOrderId = serializers.UUIDField(source='current_order_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Table
        fields = ['id', 'number', 'seats', 'status', 'currentOrderId', 'createdAt', 'updatedAt']
        read_only_fields = ['id', 'currentOrderId', 'createdAt', 'updatedAt']
        extra_kwargs = {
            # Number uniqueness is checked by TableService so it surfaces as a conflict
            'number': {'validators': []},
            'status': {'required': False},
        }


class TableStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class OrderLineSerializer(serializers.ModelSerializer):
    """A cart line as the till shows it: the item plus the price it was sold at"""
    id = serializers.UUIDField(source='item_id', read_only=True)
    name = serializers.CharField(source='item.name', read_only=True)
    category = serializers.CharField(source='item.category', read_only=True)
    sku = serializers.CharField(source='item.sku', read_only=True)
    description = serializers.CharField(source='item.description', read_only=True)
    image = serializers.CharField(source='item.image', read_only=True)
    stock = serializers.IntegerField(source='item.stock', read_only=True)
    costPrice = serializers.DecimalField(source='cost_price', max_digits=10, decimal_places=2, read_only=True)
    lineTotal = serializers.DecimalField(source='line_total', max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderLine
        fields = [
            'id', 'name', 'category', 'sku', 'description', 'image', 'stock',
            'price', 'costPrice', 'quantity', 'lineTotal'
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderLineSerializer(source='lines', many=True, read_only=True)
    orderType = serializers.CharField(source='order_type', read_only=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)
    serviceCharge = serializers.DecimalField(source='service_charge', max_digits=10, decimal_places=2, read_only=True)
    tableId = serializers.UUIDField(source='table_id', read_only=True)
    tableNumber = serializers.IntegerField(source='table_number', read_only=True)
    table = TableSerializer(read_only=True)
    staffName = serializers.CharField(source='staff_name', read_only=True)
    customerName = serializers.CharField(source='customer_name', read_only=True)
    customerPhone = serializers.CharField(source='customer_phone', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'items', 'orderType', 'paymentMethod', 'status',
            'subtotal', 'serviceCharge', 'discount', 'total',
            'tableId', 'tableNumber', 'table',
            'staffName', 'customerName', 'customerPhone',
            'createdAt', 'updatedAt'
        ]
        read_only_fields = fields


class CartLineSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


def money_field():
    # Same precision as the Order money columns
    return serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)


class OrderCreateSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True, allow_empty=False)
    orderType = serializers.CharField()
    paymentMethod = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)
    tableId = serializers.UUIDField(required=False, allow_null=True)
    replacesOrderId = serializers.UUIDField(required=False, allow_null=True)
    subtotal = money_field()
    serviceCharge = money_field()
    discount = money_field()
    total = money_field()
    staffName = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    customerName = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    customerPhone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)

    META_FIELDS = {
        'orderType': 'order_type',
        'paymentMethod': 'payment_method',
        'status': 'status',
        'tableId': 'table_id',
        'replacesOrderId': 'replaces_order_id',
        'subtotal': 'subtotal',
        'serviceCharge': 'service_charge',
        'discount': 'discount',
        'total': 'total',
        'staffName': 'staff_name',
        'customerName': 'customer_name',
        'customerPhone': 'customer_phone',
    }

    def to_service_args(self):
        """Split validated data into the (cart, meta) pair OrderService.create_order takes"""
        data = self.validated_data
        cart = [{'item_id': line['id'], 'quantity': line['quantity']} for line in data['items']]
        meta = {key: data.get(field) for field, key in self.META_FIELDS.items()}
        return cart, meta


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
