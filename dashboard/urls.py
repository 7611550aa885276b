from django.urls import path
from . import views

urlpatterns = [
    path('dashboard/summary/', views.dashboard_summary, name='dashboard-summary'),
    path('reports/sales/', views.sales_report, name='sales-report'),
]
