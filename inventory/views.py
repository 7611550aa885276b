from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics, status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework.views import APIView

from coffeeme.validators import to_int
from .serializers import ItemSerializer, StockUpdateSerializer
from .services import ItemService


class ItemListCreateView(generics.ListCreateAPIView):
    """
    get: List all items, newest first
    post: Create a new item
    """
    serializer_class = ItemSerializer

    def get_queryset(self):
        return ItemService.list_items(
            category=self.request.query_params.get('category'),
            search=self.request.query_params.get('search'),
        )

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('category', openapi.IN_QUERY, description="Filter by category", type=openapi.TYPE_STRING),
            openapi.Parameter('search', openapi.IN_QUERY, description="Search by name or SKU", type=openapi.TYPE_STRING),
        ]
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.instance = ItemService.create_item(serializer.validated_data)


class ItemRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get item details
    put/patch: Update the given item fields
    delete: Delete an item that has never been sold
    """
    serializer_class = ItemSerializer

    def get_object(self):
        return ItemService.get_item(self.kwargs['pk'])

    def put(self, request, *args, **kwargs):
        return self.partial_update(request, *args, **kwargs)

    def perform_update(self, serializer):
        serializer.instance = ItemService.update_item(self.kwargs['pk'], serializer.validated_data)

    def perform_destroy(self, instance):
        ItemService.delete_item(instance.pk)


class ItemStockView(APIView):
    """Set or adjust the stock of an item"""

    @swagger_auto_schema(
        operation_description="Set an absolute stock count with 'stock' or adjust it with a signed 'delta'",
        request_body=StockUpdateSerializer,
        responses={200: ItemSerializer, 400: 'Bad Request', 404: 'Item not found'}
    )
    def patch(self, request, pk):
        serializer = StockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if 'delta' in serializer.validated_data:
            item = ItemService.adjust_stock(pk, serializer.validated_data['delta'])
        else:
            item = ItemService.set_stock(pk, serializer.validated_data['stock'])
        return Response(ItemSerializer(item).data, status=status.HTTP_200_OK)


@swagger_auto_schema(
    method='get',
    operation_description="Items whose stock is below the threshold",
    manual_parameters=[
        openapi.Parameter('threshold', openapi.IN_QUERY, description="Defaults to LOW_STOCK_THRESHOLD", type=openapi.TYPE_INTEGER),
    ],
    responses={200: ItemSerializer(many=True)}
)
@api_view(['GET'])
def low_stock_items(request):
    threshold = request.query_params.get('threshold')
    if threshold is not None:
        threshold = to_int(threshold, 'threshold', minimum=0)
    items = ItemService.low_stock_items(threshold)
    return Response(ItemSerializer(items, many=True).data)
