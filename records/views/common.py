"""
Response helpers shared by the record views.
"""
from __future__ import annotations

from typing import Any, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from records.services.audit import log_action
from records.services.excel import read_rows
from records.services.scoping import paginate


def page_response(queryset, params: dict[str, Any], serializer_class) -> Response:
    items, meta = paginate(queryset, params.get('page', 1), params.get('limit', 50))
    return Response({'ok': True, 'data': serializer_class(items, many=True).data, 'meta': meta})


def detail_response(request, obj, serializer_class, *, object_type: str,
                    save_kwargs: Optional[dict[str, Any]] = None) -> Response:
    """GET/PUT/PATCH/DELETE on a single record already checked for access."""
    if request.method == 'GET':
        return Response({'ok': True, 'data': serializer_class(obj).data})
    if request.method == 'DELETE':
        pk = obj.pk
        obj.delete()
        log_action(user=request.user, action=f'{object_type}_delete', object_type=object_type, object_id=pk)
        return Response({'ok': True, 'message': f'{object_type} deleted'})
    s = serializer_class(obj, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    obj = s.save(**(save_kwargs or {}))
    log_action(user=request.user, action=f'{object_type}_update', object_type=object_type, object_id=obj.pk,
               detail={'fields': sorted(s.validated_data)})
    return Response({'ok': True, 'data': serializer_class(obj).data})


def import_response(request, importer, object_type: str) -> Response:
    rows = read_rows(request.FILES.get('file'))
    summary = importer(rows, request.user)
    log_action(user=request.user, action=f'{object_type}_import', object_type=object_type,
               detail={'rows': len(rows), **summary})
    return Response({'ok': True, 'message': 'Excel imported successfully', **summary},
                    status=status.HTTP_201_CREATED)


def require_location(request) -> str:
    location = (request.user.location_id or '').strip()
    if not location:
        raise ValidationError('User location not set')
    return location
