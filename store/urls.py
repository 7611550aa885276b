from django.urls import path
from . import views

urlpatterns = [
    path('', views.ShopSettingsView.as_view(), name='shop-settings'),
]
