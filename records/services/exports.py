"""
Clinic visit export to Excel.

Fixed columns use the same headers the importer accepts, so an exported
workbook can be fed back through ``/api/clinic/import/excel``.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from django.conf import settings
from django.utils import timezone

from records.models import ClinicVisit
from records.services.excel import Column, build_workbook, parse_date, save_export
from records.services.imports import VISIT_COLUMNS

MAX_EXPORT_MEDICINES = 10
MAX_EXPORT_FOLLOW_UPS = 5


def export_value(column: Column, value: Any) -> Any:
    if column.kind == 'list':
        return ' | '.join(str(v) for v in (value or []))
    if column.kind in ('bool', 'optbool'):
        return '' if value is None else ('YES' if value else 'NO')
    if value is None:
        return ''
    return value


def visit_headers(medicine_slots: int, follow_up_slots: int) -> list[str]:
    headers = ['SR NO', 'LOCATION ID'] + [col.headers[0] for col in VISIT_COLUMNS]
    for n in range(1, medicine_slots + 1):
        headers += [f'MEDICINE {n} NAME', f'MEDICINE {n} COURSE', f'MEDICINE {n} EXPIRY']
    for n in range(1, follow_up_slots + 1):
        headers += [f'NEXT VISIT DATE {n}', f'NEXT VISIT REMARKS {n}']
    return headers + ['CREATED BY', 'CREATED AT']


def visit_row(sr_no: int, visit: ClinicVisit, medicine_slots: int, follow_up_slots: int) -> list[Any]:
    row = [sr_no, visit.location_id]
    row += [export_value(col, getattr(visit, col.field)) for col in VISIT_COLUMNS]
    medicines = list(visit.medicines or [])[:medicine_slots]
    for n in range(medicine_slots):
        med = medicines[n] if n < len(medicines) else {}
        row += [med.get('name', ''), med.get('course', ''), parse_date(med.get('expiryDate')) or '']
    follow_ups = list(visit.follow_up_visits or [])[:follow_up_slots]
    for n in range(follow_up_slots):
        fu = follow_ups[n] if n < len(follow_ups) else {}
        row += [parse_date(fu.get('visitDate')) or '', fu.get('visitRemarks', '')]
    creator = visit.created_by
    row += [
        (creator.get_full_name() or creator.username) if creator else '',
        timezone.localtime(visit.created_at).strftime('%Y-%m-%d %H:%M') if visit.created_at else '',
    ]
    return row


def export_visits(visits: Iterable[ClinicVisit]) -> Optional[dict[str, Any]]:
    """Write ``visits`` to a workbook in ``EXPORT_DIR``; ``None`` when there is nothing to export."""
    visits = list(visits)
    if not visits:
        return None
    medicine_slots = min(max(len(v.medicines or []) for v in visits), MAX_EXPORT_MEDICINES)
    follow_up_slots = min(max(len(v.follow_up_visits or []) for v in visits), MAX_EXPORT_FOLLOW_UPS)

    rows = (visit_row(i, v, medicine_slots, follow_up_slots) for i, v in enumerate(visits, start=1))
    wb = build_workbook('Clinic Visits', visit_headers(medicine_slots, follow_up_slots), rows)
    filename = f'clinic-visits-{timezone.localtime():%Y%m%d-%H%M%S}.xlsx'
    save_export(wb, filename)
    return {
        'filename': filename,
        'records': len(visits),
        'downloadUrl': f'{settings.EXPORT_URL}{filename}',
    }
