"""
Daily visit-token sequencing.

Every clinic visit gets a human-readable token of the form
``[EL-]<LOC>[XT]-<DDMM>-<SEQ4>``.  ``SEQ4`` comes from a counter row per
(location, day) that is incremented in the database, so two nurses
saving visits at the same clinic at the same moment never receive the
same number.  The counter restarts at 1 on each new local calendar day.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone
from prometheus_client import Counter

from records.models import DailyTokenCounter

logger = logging.getLogger(__name__)

EXTERNAL_PROVIDER = 'EXTERNAL PROVIDER'
UNKNOWN_LOCATION_CODE = 'UNKN'
SEQ_WIDTH = 4
SEQ_MAX = 10 ** SEQ_WIDTH - 1

TOKEN_SEQUENCE_OVERFLOW = Counter(
    'clinic_token_sequence_overflow_total',
    'Visit tokens whose daily sequence no longer fits in four digits',
    ['location'],
)


def normalize_location(value: Any) -> str:
    """Trim, upper-case and collapse internal whitespace."""
    return re.sub(r'\s+', ' ', str(value or '').strip().upper())


def location_code(location_id: Any) -> str:
    """Short code for a location, used as the token prefix."""
    codes = {normalize_location(name): code for name, code in settings.TOKEN_LOCATION_CODES.items()}
    code = codes.get(normalize_location(location_id))
    if code:
        return code
    return re.sub(r'\s+', '', str(location_id or ''))[:SEQ_WIDTH].upper() or UNKNOWN_LOCATION_CODE


def is_external_provider(send_to: Any) -> bool:
    return str(send_to or '').strip().upper() == EXTERNAL_PROVIDER


def is_sick_leave_eligible(value: Any) -> bool:
    return value is True or str(value).lower() == 'true'


def _increment(counters) -> Optional[int]:
    """``UPDATE ... SET seq = seq + 1``; ``None`` when the row does not exist yet."""
    with transaction.atomic():
        if not counters.update(seq=F('seq') + 1, updated_at=timezone.now()):
            return None
        return counters.values_list('seq', flat=True).get()


def next_sequence(location_id: str, date_key: str) -> int:
    """Increment and return the counter for ``(location_id, date_key)``.

    The increment is a single ``UPDATE`` statement, so concurrent callers
    are serialized by the database on the counter row.  The first call of
    the day finds no row, creates it at zero (a racing creator hits the
    unique constraint and ``get_or_create`` falls back to reading it) and
    runs the increment again.
    """
    counters = DailyTokenCounter.objects.filter(location_id=location_id, date_key=date_key)
    seq = _increment(counters)
    if seq is None:
        DailyTokenCounter.objects.get_or_create(location_id=location_id, date_key=date_key)
        seq = _increment(counters)
    return seq


def format_sequence(seq: int, *, location_id: str = '', date_key: str = '') -> str:
    """Zero-pad to four digits; past 9999 only the last four digits are kept."""
    text = str(seq).zfill(SEQ_WIDTH)
    if seq > SEQ_MAX:
        logger.warning('token sequence overflow for %r on %s: seq=%d wraps to %s',
                       location_id, date_key, seq, text[-SEQ_WIDTH:])
        TOKEN_SEQUENCE_OVERFLOW.labels(location=location_code(location_id)).inc()
        text = text[-SEQ_WIDTH:]
    return text


def token_prefix(code: str, *, external: bool = False, sick_leave: bool = False) -> str:
    prefix = f'{code}XT' if external else code
    if sick_leave:
        prefix = f'EL-{prefix}'
    return prefix


def generate_token(location_id: Any, send_to: Any = None, eligibility_for_sick_leave: Any = None,
                   now: Optional[datetime] = None) -> str:
    """Issue the next visit token for ``location_id`` on the current local day."""
    now = now or timezone.now()
    if timezone.is_aware(now):
        now = timezone.localtime(now)
    date_key = now.strftime('%Y-%m-%d')
    raw_location = str(location_id or '').strip()

    seq = next_sequence(raw_location, date_key)
    prefix = token_prefix(
        location_code(raw_location),
        external=is_external_provider(send_to),
        sick_leave=is_sick_leave_eligible(eligibility_for_sick_leave),
    )
    token = f'{prefix}-{now:%d%m}-{format_sequence(seq, location_id=raw_location, date_key=date_key)}'
    logger.debug('issued token %s for %r', token, raw_location)
    return token
