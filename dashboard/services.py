import logging
from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from coffeeme.exceptions import ValidationError
from coffeeme.validators import CENT
from inventory.services import ItemService
from orders.models import Order, OrderLine

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')

LINE_REVENUE = ExpressionWrapper(
    F('price') * F('quantity'), output_field=DecimalField(max_digits=12, decimal_places=2)
)
LINE_PROFIT = ExpressionWrapper(
    (F('price') - F('cost_price')) * F('quantity'), output_field=DecimalField(max_digits=12, decimal_places=2)
)


def money(value):
    if value is None:
        return ZERO
    return Decimal(str(value)).quantize(CENT)


class ReportService:
    """Sales analytics over non-cancelled orders"""

    TOP_ITEMS_REPORT = 10
    TOP_ITEMS_DASHBOARD = 5
    TREND_DAYS = 7

    @staticmethod
    def _sales_orders(date_from=None, date_to=None):
        queryset = Order.objects.exclude(status=Order.STATUS_CANCELLED)
        if date_from is not None:
            queryset = queryset.filter(created_at__date__gte=date_from)
        if date_to is not None:
            queryset = queryset.filter(created_at__date__lte=date_to)
        return queryset

    @staticmethod
    def _sales_lines(orders):
        return OrderLine.objects.filter(order__in=orders)

    @staticmethod
    def _top_items(lines, limit):
        rows = (
            lines.values('item_id', 'item__name', 'item__sku')
            .annotate(units=Sum('quantity'), revenue=Sum(LINE_REVENUE))
            .order_by('-revenue', 'item__name')[:limit]
        )
        return [
            {
                'id': row['item_id'],
                'name': row['item__name'],
                'sku': row['item__sku'],
                'quantity': row['units'],
                'revenue': money(row['revenue']),
            }
            for row in rows
        ]

    @staticmethod
    def _totals(orders):
        figures = orders.aggregate(revenue=Sum('total'), count=Count('id'))
        profit = ReportService._sales_lines(orders).aggregate(profit=Sum(LINE_PROFIT))['profit']
        return money(figures['revenue']), figures['count'], money(profit)

    @staticmethod
    def dashboard_summary(today=None):
        today = today or timezone.localdate()
        today_orders = ReportService._sales_orders(today, today)
        revenue, count, profit = ReportService._totals(today_orders)

        first_day = today - timedelta(days=ReportService.TREND_DAYS - 1)
        daily = {
            row['day']: money(row['revenue'])
            for row in ReportService._sales_orders(first_day, today)
            .annotate(day=TruncDate('created_at'))
            .values('day')
            .annotate(revenue=Sum('total'))
        }
        trend = []
        for offset in range(ReportService.TREND_DAYS):
            day = first_day + timedelta(days=offset)
            trend.append({'date': day.isoformat(), 'revenue': daily.get(day, ZERO)})

        low_stock = [
            {'id': item.pk, 'name': item.name, 'sku': item.sku, 'stock': item.stock}
            for item in ItemService.low_stock_items()
        ]

        return {
            'date': today.isoformat(),
            'todayOrders': count,
            'todayRevenue': revenue,
            'todayProfit': profit,
            'pendingOrders': Order.objects.filter(status=Order.STATUS_PENDING).count(),
            'lowStockItems': low_stock,
            'topItems': ReportService._top_items(
                ReportService._sales_lines(today_orders), ReportService.TOP_ITEMS_DASHBOARD
            ),
            'revenueTrend': trend,
        }

    @staticmethod
    def sales_report(date_from=None, date_to=None):
        """
        Revenue, profit and breakdowns for orders placed between the two dates
        (both inclusive, either may be open).

        Revenue is the sum of order totals; profit comes from the price and
        cost snapshots on the order lines, so it excludes the service charge.
        """
        if date_from and date_to and date_from > date_to:
            raise ValidationError("dateFrom cannot be after dateTo")

        orders = ReportService._sales_orders(date_from, date_to)
        lines = ReportService._sales_lines(orders)
        revenue, count, profit = ReportService._totals(orders)

        average = money(revenue / count) if count else ZERO
        margin = (profit / revenue * 100).quantize(CENT) if revenue else ZERO

        payment_methods = {
            row['payment_method']: row['count']
            for row in orders.values('payment_method').annotate(count=Count('id')).order_by()
        }
        order_types = {
            row['order_type']: row['count']
            for row in orders.values('order_type').annotate(count=Count('id')).order_by()
        }

        daily_profit = {
            row['day']: money(row['profit'])
            for row in lines.annotate(day=TruncDate('order__created_at'))
            .values('day')
            .annotate(profit=Sum(LINE_PROFIT))
            .order_by()
        }
        daily = []
        for row in (
            orders.annotate(day=TruncDate('created_at'))
            .values('day')
            .annotate(revenue=Sum('total'), orders=Count('id'))
            .order_by('day')
        ):
            daily.append({
                'date': row['day'].isoformat(),
                'revenue': money(row['revenue']),
                'orders': row['orders'],
                'profit': daily_profit.get(row['day'], ZERO),
            })

        logger.debug(f"Sales report {date_from} - {date_to}: {count} orders, revenue {revenue}")
        return {
            'dateFrom': date_from.isoformat() if date_from else None,
            'dateTo': date_to.isoformat() if date_to else None,
            'totalRevenue': revenue,
            'totalOrders': count,
            'averageOrderValue': average,
            'totalProfit': profit,
            'profitMargin': margin,
            'paymentMethods': payment_methods,
            'orderTypes': order_types,
            'topItems': ReportService._top_items(lines, ReportService.TOP_ITEMS_REPORT),
            'dailyTrend': daily,
        }
