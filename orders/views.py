from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics, status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    OrderCreateSerializer, OrderSerializer, OrderStatusSerializer,
    TableSerializer, TableStatusSerializer,
)
from .services import OrderService, TableService


class TableListCreateView(generics.ListCreateAPIView):
    """
    get: List tables by number
    post: Add a table to the floor plan
    """
    serializer_class = TableSerializer

    def get_queryset(self):
        return TableService.list_tables()

    def perform_create(self, serializer):
        serializer.instance = TableService.create_table(serializer.validated_data)


class TableDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get table details
    put/patch: Update number, seats or status
    delete: Remove a table that holds no order
    """
    serializer_class = TableSerializer

    def get_object(self):
        return TableService.get_table(self.kwargs['pk'])

    def put(self, request, *args, **kwargs):
        return self.partial_update(request, *args, **kwargs)

    def perform_update(self, serializer):
        serializer.instance = TableService.update_table(self.kwargs['pk'], serializer.validated_data)

    def perform_destroy(self, instance):
        TableService.delete_table(instance.pk)


class TableStatusView(APIView):

    @swagger_auto_schema(
        operation_description="Mark a table available or reserved. Occupancy is set by dine-in orders only.",
        request_body=TableStatusSerializer,
        responses={200: TableSerializer, 400: 'Bad Request', 404: 'Table not found'}
    )
    def patch(self, request, pk):
        serializer = TableStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        table = TableService.set_status(pk, serializer.validated_data['status'])
        return Response(TableSerializer(table).data)


class OrderListCreateView(generics.ListCreateAPIView):
    """
    get: Order history, newest first
    post: Place an order from the cart
    """
    serializer_class = OrderSerializer
    # OrderService applies OrderFilter itself
    filter_backends = []

    def get_queryset(self):
        return OrderService.list_orders(self.request.query_params)

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('status', openapi.IN_QUERY, description="pending, completed or cancelled", type=openapi.TYPE_STRING),
            openapi.Parameter('orderType', openapi.IN_QUERY, description="dine-in, takeaway or delivery", type=openapi.TYPE_STRING),
            openapi.Parameter('dateFrom', openapi.IN_QUERY, description="Inclusive lower bound (YYYY-MM-DD or ISO date/time)", type=openapi.TYPE_STRING),
            openapi.Parameter('dateTo', openapi.IN_QUERY, description="Inclusive upper bound; a bare date covers the whole day", type=openapi.TYPE_STRING),
        ]
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @swagger_auto_schema(
        operation_description="Create an order. Stock is taken and a dine-in table is occupied in one transaction.",
        request_body=OrderCreateSerializer,
        responses={
            201: OrderSerializer,
            400: 'Bad Request',
            404: 'Item, table or replaced order not found'
        }
    )
    def post(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart, meta = serializer.to_service_args()
        order = OrderService.create_order(cart, meta)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class PendingOrderListView(generics.ListAPIView):
    """Orders still open at the till"""
    serializer_class = OrderSerializer
    filter_backends = []

    def get_queryset(self):
        return OrderService.pending_orders()


class OrderDetailView(generics.RetrieveDestroyAPIView):
    """
    get: Get an order with its lines
    delete: Delete an order, restoring its stock and freeing its table
    """
    serializer_class = OrderSerializer

    def get_object(self):
        return OrderService.get_order(self.kwargs['pk'])

    def perform_destroy(self, instance):
        OrderService.delete_order(instance.pk)


@swagger_auto_schema(
    method='post',
    operation_description="Complete a pending order and free its table",
    responses={
        200: OrderSerializer,
        400: openapi.Response(description="Order already completed or cancelled"),
        404: openapi.Response(description="Order not found"),
    }
)
@api_view(['POST'])
def checkout_order(request, pk):
    order = OrderService.checkout_order(pk)
    return Response(OrderSerializer(order).data)


class OrderStatusView(APIView):

    @swagger_auto_schema(
        operation_description="Overwrite the order status. Tables and stock are left untouched; use checkout to complete an order.",
        request_body=OrderStatusSerializer,
        responses={200: OrderSerializer, 400: 'Bad Request', 404: 'Order not found'}
    )
    def patch(self, request, pk):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.update_order_status(pk, serializer.validated_data['status'])
        return Response(OrderSerializer(order).data)
