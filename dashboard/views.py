from django.utils.dateparse import parse_date
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.decorators import api_view
from rest_framework.response import Response

from coffeeme.exceptions import ValidationError
from .services import ReportService


def date_param(request, name):
    value = request.query_params.get(name)
    if not value:
        return None
    try:
        parsed = parse_date(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(f"{name} must be a date in YYYY-MM-DD format")
    return parsed


@swagger_auto_schema(
    method='get',
    operation_description="Today's sales, pending orders, low-stock items and the seven-day revenue trend",
    responses={200: openapi.Response(description="Dashboard summary")}
)
@api_view(['GET'])
def dashboard_summary(request):
    return Response(ReportService.dashboard_summary())


@swagger_auto_schema(
    method='get',
    operation_description="Sales analytics over non-cancelled orders",
    manual_parameters=[
        openapi.Parameter('dateFrom', openapi.IN_QUERY, description="First day (YYYY-MM-DD), inclusive", type=openapi.TYPE_STRING),
        openapi.Parameter('dateTo', openapi.IN_QUERY, description="Last day (YYYY-MM-DD), inclusive", type=openapi.TYPE_STRING),
    ],
    responses={
        200: openapi.Response(description="Sales report"),
        400: openapi.Response(description="Invalid date range"),
    }
)
@api_view(['GET'])
def sales_report(request):
    report = ReportService.sales_report(
        date_from=date_param(request, 'dateFrom'),
        date_to=date_param(request, 'dateTo'),
    )
    return Response(report)
