"""
Organization models for multi-tenant functionality.
"""
import uuid
from django.db import models
from django.utils.translation import gettext_lazy as _
from core.utils import generate_tenant_slug


class Organization(models.Model):
    """
    Tenant organization. Every tenant-owned row references one.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(_('name'), max_length=200)
    slug = models.SlugField(_('slug'), max_length=200, unique=True)

    # Contact information
    email = models.EmailField(_('contact email'), blank=True)

    is_active = models.BooleanField(_('active'), default=True)

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Organization')
        verbose_name_plural = _('Organizations')
        ordering = ['name']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        # Generate slug if not provided
        if not self.slug:
            self.slug = generate_tenant_slug(self.name)
        super().save(*args, **kwargs)
