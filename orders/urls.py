from django.urls import path
from . import views


urlpatterns = [
    path('tables/', views.TableListCreateView.as_view(), name='table-list-create'),
    path('tables/<uuid:pk>/', views.TableDetailView.as_view(), name='table-detail'),
    path('tables/<uuid:pk>/status/', views.TableStatusView.as_view(), name='table-status'),

    path('orders/', views.OrderListCreateView.as_view(), name='order-list-create'),
    path('orders/pending/', views.PendingOrderListView.as_view(), name='order-pending'),
    path('orders/<uuid:pk>/', views.OrderDetailView.as_view(), name='order-detail'),
    path('orders/<uuid:pk>/checkout/', views.checkout_order, name='order-checkout'),
    path('orders/<uuid:pk>/status/', views.OrderStatusView.as_view(), name='order-status'),
]
