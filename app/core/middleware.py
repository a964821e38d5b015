"""
Custom middleware for the PSA platform.
"""
from typing import Optional
from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin
from organizations.models import Organization
from core.db import TenantScope, reset_rls_tenant


class TenantMiddleware(MiddlewareMixin):
    """
    Middleware to resolve the tenant for a request.

    Resolves tenant by:
    1. Subdomain (orgslug.psa.local)
    2. X-Tenant header
    3. Path prefix (/t/<slug>/)

    The result is attached to the request as ``request.tenant`` and an
    explicit ``request.tenant_scope`` handle; nothing is stored globally.
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        tenant = None

        # Try to resolve tenant by subdomain
        host = request.get_host().split(':')[0]
        if getattr(settings, 'TENANT_SUBDOMAIN_ENABLED', True) and '.' in host:
            subdomain = host.split('.')[0]
            if subdomain not in ('www', 'psa', 'localhost'):
                tenant = self._get_tenant_by_slug(subdomain)

        # Try X-Tenant header
        if not tenant:
            tenant_header = request.META.get('HTTP_X_TENANT')
            if tenant_header:
                tenant = self._get_tenant_by_slug(tenant_header)

        # Try path prefix
        if not tenant:
            path = request.path
            if path.startswith('/t/'):
                parts = path.split('/')
                if len(parts) >= 3:
                    tenant = self._get_tenant_by_slug(parts[2])

        request.tenant = tenant
        request.tenant_scope = TenantScope(tenant) if tenant else None

        # Set PostgreSQL session variable for RLS
        if request.tenant_scope:
            request.tenant_scope.activate()
        return None

    def process_response(self, request: HttpRequest, response: HttpResponse) -> HttpResponse:
        if getattr(request, 'tenant_scope', None):
            reset_rls_tenant()
        return response

    def _get_tenant_by_slug(self, slug: str) -> Optional[Organization]:
        """Get tenant by slug with caching."""
        cache_key = f'tenant_slug_{slug}'
        tenant = cache.get(cache_key)

        if tenant is None:
            try:
                tenant = Organization.objects.get(slug=slug, is_active=True)
                cache.set(cache_key, tenant, 300)  # Cache for 5 minutes
            except Organization.DoesNotExist:
                tenant = False
                cache.set(cache_key, tenant, 60)  # Cache negative result for 1 minute

        return tenant if tenant else None
