from django.urls import path
from . import views


urlpatterns = [
    path('', views.ItemListCreateView.as_view(), name='item-list-create'),
    path('low-stock/', views.low_stock_items, name='item-low-stock'),
    path('<uuid:pk>/', views.ItemRetrieveUpdateDestroyView.as_view(), name='item-detail'),
    path('<uuid:pk>/stock/', views.ItemStockView.as_view(), name='item-stock'),
]
