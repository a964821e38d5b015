"""
Database utilities for multi-tenant functionality.

Tenant isolation is explicit: callers build a ``TenantScope`` for the
organization they act on and pass it to every service. There is no
ambient tenant state.
"""
import uuid
from contextlib import contextmanager
from typing import Optional

from django.db import models, connection, transaction
from django.db.models import QuerySet


class TenantQuerySet(QuerySet):
    """QuerySet with an explicit tenant filter."""

    def for_tenant(self, organization) -> 'TenantQuerySet':
        organization_id = getattr(organization, 'pk', organization)
        return self.filter(organization_id=organization_id)


class TenantManager(models.Manager.from_queryset(TenantQuerySet)):
    """Manager exposing ``for_tenant`` on every tenant model."""


class BaseTenantModel(models.Model):
    """
    Abstract base model for all multi-tenant entities.

    Includes the organization foreign key that RLS policies key on.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(
        'organizations.Organization',
        on_delete=models.CASCADE,
        related_name='%(app_label)s_%(class)s_set'
    )

    objects = TenantManager()

    class Meta:
        abstract = True

    def belongs_to(self, organization) -> bool:
        organization_id = getattr(organization, 'pk', organization)
        return str(self.organization_id) == str(organization_id)


class TenantScope:
    """
    Tenant-scoped data-access handle.

    Every core entry point receives one of these instead of reading the
    tenant from request or thread state.
    """

    def __init__(self, organization):
        if organization is None:
            raise ValueError("TenantScope requires an organization")
        self.organization = organization

    def __repr__(self):
        return f"TenantScope(organization={self.organization_id})"

    @property
    def organization_id(self):
        return self.organization.pk

    def queryset(self, model) -> QuerySet:
        """Tenant-filtered queryset for ``model``."""
        return model.objects.for_tenant(self.organization)

    def get(self, model, **kwargs):
        return self.queryset(model).get(**kwargs)

    def first(self, model, **kwargs) -> Optional[models.Model]:
        return self.queryset(model).filter(**kwargs).first()

    def create(self, model, **kwargs):
        return model.objects.create(organization=self.organization, **kwargs)

    @contextmanager
    def atomic(self):
        """Transaction with the RLS tenant variable set for its duration."""
        with transaction.atomic():
            set_rls_tenant(str(self.organization_id))
            yield self

    def activate(self, using=None) -> None:
        """
        Bind the tenant to the connection for statements outside ``atomic()``.

        The setting lasts for the database session, so whoever activates a
        scope on a shared connection resets it afterwards.
        """
        set_rls_tenant(str(self.organization_id), using=using, local=False)


def set_rls_tenant(tenant_id: str, using=None, local: bool = True) -> None:
    """
    Set the PostgreSQL session variable for Row Level Security.

    With ``local`` the value ends with the current transaction, like
    ``SET LOCAL``; otherwise it lasts for the session.

    Args:
        tenant_id: UUID of the tenant organization, or '' to match no tenant
    """
    using = using or connection
    if using.vendor != 'postgresql':
        return
    with using.cursor() as cursor:
        cursor.execute(
            "SELECT set_config('app.current_tenant', %s, %s)",
            [tenant_id, local]
        )


def reset_rls_tenant(using=None) -> None:
    """Unbind the session tenant; RLS tables then return no rows."""
    set_rls_tenant('', using=using, local=False)


def execute_rls_migration(table_name: str, schema: str = 'public', using=None) -> None:
    """
    Enable RLS and create policies for a tenant table.

    Args:
        table_name: Name of the table to enable RLS on
        schema: Schema name (default: public)
    """
    using = using or connection
    if using.vendor != 'postgresql':
        return
    with using.cursor() as cursor:
        # Enable RLS
        cursor.execute(f"ALTER TABLE {schema}.{table_name} ENABLE ROW LEVEL SECURITY")

        # Create SELECT policy
        cursor.execute(f"""
            CREATE POLICY tenant_iso_select ON {schema}.{table_name}
            FOR SELECT USING (organization_id::text = current_setting('app.current_tenant', true))
        """)

        # Create INSERT/UPDATE/DELETE policy
        cursor.execute(f"""
            CREATE POLICY tenant_iso_write ON {schema}.{table_name}
            FOR ALL USING (organization_id::text = current_setting('app.current_tenant', true))
            WITH CHECK (organization_id::text = current_setting('app.current_tenant', true))
        """)


def reverse_rls_migration(table_name: str, using=None) -> None:
    """Disable RLS and drop the tenant policies for a table."""
    using = using or connection
    if using.vendor != 'postgresql':
        return
    with using.cursor() as cursor:
        cursor.execute(f"ALTER TABLE {table_name} DISABLE ROW LEVEL SECURITY")
        cursor.execute(f"DROP POLICY IF EXISTS tenant_iso_select ON {table_name}")
        cursor.execute(f"DROP POLICY IF EXISTS tenant_iso_write ON {table_name}")
