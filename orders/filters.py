from datetime import date, datetime, time

import django_filters
from django import forms
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .models import Order


class DateBoundField(forms.Field):
    """
    Accepts an ISO date or date/time.

    A bare date expands to the start of the day, or to the end of the day when
    the field is an upper bound, so `dateTo=2024-05-01` includes all of May 1st.
    """

    def __init__(self, *args, end_of_day=False, **kwargs):
        self.end_of_day = end_of_day
        super().__init__(*args, **kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return None
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime.combine(value, time.max if self.end_of_day else time.min)
        else:
            text = str(value).strip()
            try:
                day = parse_date(text)
                if day is not None:
                    parsed = datetime.combine(day, time.max if self.end_of_day else time.min)
                else:
                    parsed = parse_datetime(text)
                    if parsed is None:
                        raise ValueError(text)
            except ValueError:
                raise forms.ValidationError("Enter a valid date or date/time.", code='invalid')
        if timezone.is_naive(parsed):
            parsed = timezone.make_aware(parsed)
        return parsed


class DateBoundFilter(django_filters.Filter):
    field_class = DateBoundField


class OrderFilter(django_filters.FilterSet):
    """Query filters for the order history, named as the POS front end sends them"""
    status = django_filters.ChoiceFilter(field_name='status', choices=Order.STATUS_CHOICES)
    orderType = django_filters.ChoiceFilter(field_name='order_type', choices=Order.ORDER_TYPE_CHOICES)
    dateFrom = DateBoundFilter(field_name='created_at', lookup_expr='gte')
    dateTo = DateBoundFilter(field_name='created_at', lookup_expr='lte', end_of_day=True)

    class Meta:
        model = Order
        fields = ['status', 'orderType', 'dateFrom', 'dateTo']
