from drf_yasg.utils import swagger_auto_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ShopSettingsSerializer
from .services import SettingsService


class ShopSettingsView(APIView):
    """
    get: Shop settings, seeded with the defaults on first access
    put/patch: Merge the given fields into the shop settings
    """

    @swagger_auto_schema(responses={200: ShopSettingsSerializer})
    def get(self, request):
        return Response(ShopSettingsSerializer(SettingsService.get_settings()).data)

    @swagger_auto_schema(request_body=ShopSettingsSerializer, responses={200: ShopSettingsSerializer})
    def put(self, request):
        serializer = ShopSettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        shop_settings = SettingsService.update_settings(serializer.validated_data)
        return Response(ShopSettingsSerializer(shop_settings).data)

    @swagger_auto_schema(request_body=ShopSettingsSerializer, responses={200: ShopSettingsSerializer})
    def patch(self, request):
        return self.put(request)
