"""
Hospital case and H&I admission helpers.
"""
from __future__ import annotations

from typing import Any

from django.db.models import Q, QuerySet
from rest_framework.exceptions import NotFound

from records.models import HospitalCase, IpAdmission
from records.serializers.handi import (
    IP_BOOLEAN_FILTERS,
    IP_DATE_RANGES,
    IP_EXACT_FILTERS,
    IP_NUMBER_FILTERS,
    IP_SEARCH_FIELDS,
)
from records.services.excel import parse_date, parse_number, parse_optional_bool
from records.services.scoping import check_location_scope

DISCHARGED = 'discharge'


def pending_discharge_cases(locations: list[str]) -> QuerySet:
    """Cases at ``locations`` still in hospital and not yet taken up as an IP admission."""
    return (
        HospitalCase.objects.filter(location_id__in=locations)
        .exclude(status__iexact=DISCHARGED)
        .filter(ip_admissions__isnull=True)
        .select_related('created_by')
        .order_by('-date_of_admission', '-id')
    )


def filter_ip_admissions(qs: QuerySet, params) -> QuerySet:
    """Apply the list filters accepted by the admission endpoint."""
    for key, field in IP_EXACT_FILTERS.items():
        value = params.get(key)
        if value not in (None, ''):
            qs = qs.filter(**{field: value.strip().upper() if key == 'empNo' else value})
    for key, field in IP_BOOLEAN_FILTERS.items():
        value = parse_optional_bool(params.get(key))
        if value is not None:
            qs = qs.filter(**{field: value})
    for key, field in IP_NUMBER_FILTERS.items():
        value = parse_number(params.get(key))
        if value is not None:
            qs = qs.filter(**{field: int(value)})
    for key, field in IP_DATE_RANGES.items():
        start = parse_date(params.get(f'{key}From'))
        end = parse_date(params.get(f'{key}To'))
        if start:
            qs = qs.filter(**{f'{field}__gte': start})
        if end:
            qs = qs.filter(**{f'{field}__lte': end})
    search = (params.get('search') or '').strip()
    if search:
        cond = Q()
        for field in IP_SEARCH_FIELDS:
            cond |= Q(**{f'{field}__icontains': search})
        qs = qs.filter(cond)
    return qs


def admission_from_hospital_case(user, case_id: int, hi_managers: str, case_type_change: str,
                                 extra: dict[str, Any]) -> IpAdmission:
    """Open an admission for ``case_id``; the case's site must be one ``user`` may see."""
    case = HospitalCase.objects.filter(pk=case_id).first()
    if case is None:
        raise NotFound('Hospital case not found')
    admission = IpAdmission(
        hospital_case=case,
        emp_no=case.emp_no,
        hospital_name=case.hospital_name,
        date_of_admission=case.date_of_admission,
        tr_location=case.tr_location or case.location_id,
        hi_managers=hi_managers,
        case_type_change=case_type_change,
        source=IpAdmission.SOURCE_HOSPITAL,
        **extra,
    )
    check_location_scope(user, admission, 'tr_location')
    admission.save()
    return admission
