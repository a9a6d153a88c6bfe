"""FilterSet for the admin booking search."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Booking
from .services import parse_calendar_date

ALL_STATUSES = "all"


class BookingFilterSet(django_filters.FilterSet):
    """Free-text search, status and pickup lower bound.

    The pickup bound is exposed as the ``from`` query parameter.
    """

    search = django_filters.CharFilter(method="filter_search")
    status = django_filters.CharFilter(method="filter_status")
    pickup_from = django_filters.CharFilter(method="filter_pickup_from")

    class Meta:
        model = Booking
        fields: list[str] = []

    def filter_search(self, queryset, name, value):  # type: ignore
        term = (value or "").strip()
        if not term:
            return queryset
        matches = (
            Q(customer__icontains=term)
            | Q(email__icontains=term)
            | Q(phone__icontains=term)
            | Q(car__make__icontains=term)
            | Q(car__model__icontains=term)
        )
        if term.isdigit():
            matches |= Q(car__id=int(term))
        return queryset.filter(matches)

    def filter_status(self, queryset, name, value):  # type: ignore
        if not value or value == ALL_STATUSES:
            return queryset
        return queryset.filter(status=value)

    def filter_pickup_from(self, queryset, name, value):  # type: ignore
        try:
            start = parse_calendar_date(value)
        except ValueError:
            return queryset
        return queryset.filter(pickup_date__gte=start)


# "from" is a keyword, so the filter is renamed after the class is built.
BookingFilterSet.base_filters["from"] = BookingFilterSet.base_filters.pop("pickup_from")
