"""
Role-based location scoping and list pagination shared by the record
endpoints.
"""
from __future__ import annotations

from typing import Optional

from django.db.models import Q, QuerySet
from rest_framework.exceptions import NotFound, PermissionDenied

from records.permissions import MANAGER_ROLES

MAX_PAGE_SIZE = 200


def manager_locations(user) -> list[str]:
    return [loc for loc in (getattr(user, 'manager_locations', None) or []) if loc]


def scope_locations(user, requested: Optional[str] = None, field: str = 'location_id') -> Q:
    """Filter limiting records to the locations ``user`` may see.

    Nurses see their own clinic only.  Managers and superadmins see their
    assigned sites, narrowed to ``requested`` when it is one of them.
    """
    role = getattr(user, 'role', None)
    if role == 'maleNurse':
        return Q(**{field: getattr(user, 'location_id', '') or ''})
    if role in MANAGER_ROLES:
        locations = manager_locations(user)
        if requested and requested in locations:
            return Q(**{field: requested})
        return Q(**{f'{field}__in': locations})
    if requested:
        return Q(**{field: requested})
    return Q()


def check_location_scope(user, obj, field: str = 'location_id'):
    """Raise ``PermissionDenied`` when ``obj`` is outside the user's locations."""
    location = getattr(obj, field, '')
    role = getattr(user, 'role', None)
    if role == 'maleNurse' and location != (user.location_id or ''):
        raise PermissionDenied('forbidden for this location')
    if role in MANAGER_ROLES and location not in manager_locations(user):
        raise PermissionDenied('forbidden for this location')
    return obj


def get_scoped_or_404(queryset: QuerySet, pk, user, field: str = 'location_id', label: str = 'record'):
    obj = queryset.filter(pk=pk).first()
    if obj is None:
        raise NotFound(f'{label} not found')
    return check_location_scope(user, obj, field)


def paginate(queryset: QuerySet, page: int = 1, limit: int = 50):
    """Return ``(items, meta)`` for one page of ``queryset``."""
    page = max(1, page or 1)
    limit = max(1, min(limit or 50, MAX_PAGE_SIZE))
    total = queryset.count()
    start = (page - 1) * limit
    items = list(queryset[start:start + limit])
    return items, {'total': total, 'page': page, 'limit': limit}
