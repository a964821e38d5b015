"""
JSON views for time periods.
"""
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import JsonResponse
from django.views import View

from organizations.mixins import TenantScopeMixin
from .periods import to_iso
from .services import fetch_all_time_periods, get_current_time_period


def serialize_period(period):
    return {
        'period_id': str(period.pk),
        'start_date': to_iso(period.start_date),
        'end_date': to_iso(period.end_date),
    }


class TimePeriodListAPIView(LoginRequiredMixin, TenantScopeMixin, View):
    """All periods of the tenant, oldest first."""

    def get(self, request):
        periods = fetch_all_time_periods(self.get_scope())
        return JsonResponse({'periods': [serialize_period(period) for period in periods]})


class CurrentTimePeriodAPIView(LoginRequiredMixin, TenantScopeMixin, View):

    def get(self, request):
        period = get_current_time_period(self.get_scope())
        if period is None:
            return JsonResponse({'error': 'No time period covers the current date'}, status=404)
        return JsonResponse(serialize_period(period))
