"""
Views for billing app.
"""
import logging

from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views import View

from core.exceptions import ConfigurationError, DataIntegrityError, NoActivePlanError
from organizations.mixins import TenantScopeMixin
from .engine import BillingEngine

logger = logging.getLogger(__name__)


class BillingPreviewAPIView(LoginRequiredMixin, TenantScopeMixin, View):
    """
    Compute (without persisting) what a company would be billed for a period.

    Query parameters ``start_date`` and ``end_date`` are ISO 8601 timestamps.
    """

    def get(self, request, company_id):
        start_date = request.GET.get('start_date')
        end_date = request.GET.get('end_date')
        if not start_date or not end_date:
            return JsonResponse({'error': 'start_date and end_date are required'}, status=400)

        engine = BillingEngine(self.get_scope())
        try:
            result = engine.calculate_billing(company_id, start_date, end_date)
        except NoActivePlanError as e:
            return JsonResponse({'error': str(e)}, status=404)
        except DataIntegrityError as e:
            logger.error(f"Billing preview for company {company_id} failed: {str(e)}")
            return JsonResponse({'error': str(e)}, status=404)
        except (ConfigurationError, ValidationError, ValueError) as e:
            return JsonResponse({'error': str(e)}, status=400)

        return JsonResponse(result.to_dict())
