"""
Utility functions shared across apps.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Any

import unidecode


def generate_tenant_slug(name: str) -> str:
    """Generate a URL-safe slug from organization name."""
    # Convert to ASCII and lowercase
    slug = unidecode.unidecode(name).lower()

    # Replace spaces and special characters with hyphens
    slug = re.sub(r'[^a-z0-9]+', '-', slug)

    # Remove leading/trailing hyphens
    slug = slug.strip('-')

    # Limit length
    slug = slug[:50]

    return slug


def to_decimal(value: Any, default: Decimal = Decimal('0')) -> Decimal:
    """Coerce a DB or JSON number to ``Decimal``; ``None`` becomes ``default``."""
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Not a number: {value!r}") from e
