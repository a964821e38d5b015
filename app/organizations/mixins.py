"""
Mixins for tenant-scoped views.
"""
from django.http import JsonResponse

from core.db import TenantScope


class TenantScopeMixin:
    """
    Resolve the request's organization and expose it as a ``TenantScope``.

    Requests without a resolved tenant get a JSON 400 response.
    """

    def get_organization(self):
        return getattr(self.request, 'tenant', None)

    def get_scope(self) -> TenantScope:
        if not hasattr(self, '_scope'):
            scope = getattr(self.request, 'tenant_scope', None)
            self._scope = scope or TenantScope(self.get_organization())
        return self._scope

    def dispatch(self, request, *args, **kwargs):
        if request.user.is_authenticated and self.get_organization() is None:
            return JsonResponse({'error': 'Tenant could not be resolved'}, status=400)
        return super().dispatch(request, *args, **kwargs)
