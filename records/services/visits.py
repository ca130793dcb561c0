"""
Clinic visit business logic: creation with token issuance, employee
summaries and the manager follow-up prioritization.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Any, Optional

from django.db.models import Case, Count, IntegerField, Max, QuerySet, Value, When
from django.utils import timezone

from records.models import ClinicVisit, MemberFeedback
from records.services.tokens import generate_token

SUMMARY_WINDOW_DAYS = 90
MANAGER_WINDOW_DAYS = 30
REFERRAL_STALE_DAYS = 5
PRIORITIZED_LIMIT = 50
SEARCH_LIMIT = 200

RANK_REPEAT_WITH_SICK_LEAVE = 1
RANK_REPEAT = 2
RANK_STALE_REFERRAL = 3
RANK_OTHER = 4


def apply_referral_code(data: dict[str, Any], token_no: str) -> None:
    """Referred visits without a referral code reuse the visit token."""
    if (data.get('referral') or data.get('referred_to_hospital')) and not data.get('referral_code'):
        data['referral_code'] = token_no


def create_visit(user, data: dict[str, Any], *, send_to: Any = None,
                 eligibility: Any = None) -> ClinicVisit:
    """Persist a new visit, issuing a token unless the caller supplied one.

    ``send_to`` and ``eligibility`` are the raw request values used for
    the token prefix; the location always comes from the user when set.
    """
    data = dict(data)
    if getattr(user, 'location_id', None):
        data['location_id'] = user.location_id
    # The counter commits on its own; a failed insert below leaves a gap.
    if not data.get('token_no'):
        data['token_no'] = generate_token(
            data.get('location_id', ''),
            send_to=send_to if send_to else data.get('sent_to'),
            eligibility_for_sick_leave=eligibility if eligibility is not None
            else data.get('eligibility_for_sick_leave'),
        )
    apply_referral_code(data, data['token_no'])
    return ClinicVisit.objects.create(created_by=user, **data)


def update_visit(visit: ClinicVisit, data: dict[str, Any]) -> ClinicVisit:
    data = dict(data)
    merged = {
        'referral': data.get('referral', visit.referral),
        'referred_to_hospital': data.get('referred_to_hospital', visit.referred_to_hospital),
        'referral_code': data.get('referral_code', visit.referral_code),
    }
    apply_referral_code(merged, data.get('token_no') or visit.token_no)
    if merged['referral_code'] != visit.referral_code:
        data['referral_code'] = merged['referral_code']
    for field, value in data.items():
        setattr(visit, field, value)
    visit.save()
    return visit


def filter_visits(qs: QuerySet, params: dict[str, Any]) -> QuerySet:
    if params.get('emiratesId'):
        qs = qs.filter(emirates_id=params['emiratesId'])
    if params.get('empNo'):
        qs = qs.filter(emp_no=params['empNo'].strip().upper())
    if params.get('visitStatus'):
        qs = qs.filter(visit_status=params['visitStatus'].strip().upper())
    if params.get('tokenNo'):
        qs = qs.filter(token_no=params['tokenNo'].strip())
    if params.get('startDate'):
        qs = qs.filter(date__gte=params['startDate'])
    if params.get('endDate'):
        qs = qs.filter(date__lte=params['endDate'])
    return qs


def provider_of(visit: ClinicVisit) -> Optional[str]:
    return visit.provider_name or visit.doctor_name or visit.sent_to or None


def employee_summary(emp_no: str) -> dict[str, Any]:
    today = timezone.localdate()
    since = today - timedelta(days=SUMMARY_WINDOW_DAYS)
    visits = ClinicVisit.objects.filter(emp_no=emp_no)
    recent = list(visits.filter(date__gte=since, date__lte=today).order_by('-date', '-time', '-id'))
    return {
        'empNo': emp_no,
        'last90Days': {
            'from': since,
            'to': today,
            'count': len(recent),
            'visits': [{'date': v.date, 'provider': provider_of(v)} for v in recent],
        },
        'allTimeTotalVisits': visits.count(),
        'sickLeaveApprovedCount': visits.filter(sick_leave_status='Approved').count(),
        'totalReferrals': visits.filter(referral=True).count(),
        'openReferrals': visits.filter(referral=True, visit_status='OPEN').count(),
    }


def employee_history(emp_no: str) -> list[dict[str, Any]]:
    since = timezone.localdate() - timedelta(days=SUMMARY_WINDOW_DAYS)
    history = ClinicVisit.objects.filter(emp_no=emp_no, date__gte=since).order_by('-date', '-id')
    return [
        {
            'id': v.id,
            'date': v.date,
            'providerName': provider_of(v),
            'primaryDiagnosis': v.primary_diagnosis,
            'secondaryDiagnosis': v.secondary_diagnosis,
            'referral': v.referral,
            'referralType': v.referral_type,
            'visitDateReferral': v.visit_date_referral,
        }
        for v in history
    ]


def _approved_flag():
    return Max(Case(When(sick_leave_status='Approved', then=Value(1)), default=Value(0),
                    output_field=IntegerField()))


def visits_by_employee(locations: list[str]) -> list[dict[str, Any]]:
    """Last 30 days at ``locations`` grouped per employee, repeat visitors first."""
    since = timezone.localdate() - timedelta(days=MANAGER_WINDOW_DAYS)
    qs = ClinicVisit.objects.filter(location_id__in=locations, date__gte=since)
    groups = (
        qs.values('emp_no')
        .annotate(visit_count=Count('id'), has_approved=_approved_flag(), last_visit_date=Max('date'))
        .order_by('-has_approved', '-visit_count', '-last_visit_date')
    )
    visits: dict[str, list[ClinicVisit]] = {}
    for visit in qs.order_by('-date', '-id'):
        visits.setdefault(visit.emp_no, []).append(visit)
    return [
        {
            'empNo': g['emp_no'],
            'visitCount': g['visit_count'],
            'hasApprovedSickLeave': bool(g['has_approved']),
            'lastVisitDate': g['last_visit_date'],
            'visits': visits.get(g['emp_no'], []),
        }
        for g in groups
    ]


def prioritized_visits(locations: list[str]) -> tuple[list[tuple[ClinicVisit, int, int]], int]:
    """Employees a manager should follow up first.

    Looks at the last 30 days at ``locations``, skipping employees who
    already received a feedback call.  Ranks per employee:

    1. more than one visit and an approved sick leave
    2. more than one visit
    3. referred, with the last visit more than 5 days ago
    4. everyone else

    Returns up to 50 ``(latest_visit, rank, visit_count)`` ordered by
    rank then most recent visit, plus the number of excluded employees.
    """
    today = timezone.localdate()
    since = today - timedelta(days=MANAGER_WINDOW_DAYS)
    stale_before = today - timedelta(days=REFERRAL_STALE_DAYS)

    excluded = set(
        MemberFeedback.objects.exclude(employee_id='').values_list('employee_id', flat=True).distinct()
    )
    qs = ClinicVisit.objects.filter(location_id__in=locations, date__gte=since).exclude(emp_no__in=excluded)

    ranked = list(
        qs.values('emp_no')
        .annotate(
            visit_count=Count('id'),
            has_approved=_approved_flag(),
            any_referral=Max(Case(When(referral=True, then=Value(1)), default=Value(0),
                                  output_field=IntegerField())),
            last_visit_date=Max('date'),
        )
        .annotate(rank=Case(
            When(visit_count__gt=1, has_approved=1, then=Value(RANK_REPEAT_WITH_SICK_LEAVE)),
            When(visit_count__gt=1, then=Value(RANK_REPEAT)),
            When(any_referral=1, last_visit_date__lt=stale_before, then=Value(RANK_STALE_REFERRAL)),
            default=Value(RANK_OTHER),
            output_field=IntegerField(),
        ))
        .order_by('rank', '-last_visit_date', 'emp_no')[:PRIORITIZED_LIMIT]
    )

    latest: dict[str, ClinicVisit] = {}
    emp_nos = [row['emp_no'] for row in ranked]
    for visit in qs.filter(emp_no__in=emp_nos).select_related('created_by').order_by('-date', '-id'):
        latest.setdefault(visit.emp_no, visit)

    rows = [(latest[row['emp_no']], row['rank'], row['visit_count']) for row in ranked if row['emp_no'] in latest]
    return rows, len(excluded)
