"""
Clinic visit views.

Nurses record visits at their own clinic; the visit token is issued on
creation unless the client already carries one.  Managers get the
employee-level roll-ups used to decide whom to call back.  Every list
is filtered by :func:`records.services.scoping.scope_locations`.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from records.models import ClinicVisit, MemberFeedback
from records.permissions import IsManagerOrSuperadmin
from records.serializers.common import PageQuerySerializer
from records.serializers.visit import (
    REQUIRED_VISIT_FIELDS,
    ClinicVisitSerializer,
    EmpNoQuerySerializer,
    MemberFeedbackSerializer,
    VisitListQuerySerializer,
    VisitSearchQuerySerializer,
)
from records.services import visits as visit_service
from records.services.audit import log_action
from records.services.exports import export_visits
from records.services.imports import import_visits
from records.services.scoping import get_scoped_or_404, manager_locations, scope_locations
from .common import detail_response, import_response, page_response, require_location


def _visits():
    return ClinicVisit.objects.select_related('created_by')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def visits(request):
    if request.method == 'GET':
        q = VisitListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        params = q.validated_data
        qs = _visits().filter(scope_locations(request.user, params.get('locationId')))
        qs = visit_service.filter_visits(qs, params).order_by('-date', '-time', '-id')
        return page_response(qs, params, ClinicVisitSerializer)

    missing = [key for key in REQUIRED_VISIT_FIELDS if not request.data.get(key)]
    if missing:
        return Response({'ok': False, 'detail': f"Missing required fields: {', '.join(missing)}"},
                        status=status.HTTP_400_BAD_REQUEST)
    s = ClinicVisitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    visit = visit_service.create_visit(
        request.user,
        s.validated_data,
        send_to=request.data.get('sendTo') or request.data.get('sentTo'),
        eligibility=request.data.get('eligibilityForSickLeave'),
    )
    log_action(user=request.user, action='visit_create', object_type='clinic_visit', object_id=visit.id,
               detail={'tokenNo': visit.token_no, 'locationId': visit.location_id})
    return Response({'ok': True, 'data': ClinicVisitSerializer(visit).data}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def visit_detail(request, pk: int):
    visit = get_scoped_or_404(_visits(), pk, request.user, label='Visit')
    if request.method in ('PUT', 'PATCH'):
        s = ClinicVisitSerializer(visit, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        visit = visit_service.update_visit(visit, s.validated_data)
        log_action(user=request.user, action='visit_update', object_type='clinic_visit', object_id=visit.id,
                   detail={'fields': sorted(s.validated_data)})
        return Response({'ok': True, 'data': ClinicVisitSerializer(visit).data})
    return detail_response(request, visit, ClinicVisitSerializer, object_type='clinic_visit')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_location_visits(request):
    q = PageQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = _visits().filter(location_id=require_location(request)).order_by('-date', '-time', '-id')
    return page_response(qs, q.validated_data, ClinicVisitSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def employee_info(request, token_no: str):
    """Employee details captured on the visit carrying ``token_no``."""
    visit = (
        ClinicVisit.objects.filter(scope_locations(request.user), token_no=token_no.strip())
        .order_by('-id').first()
    )
    if visit is None:
        raise NotFound('Visit not found')
    return Response({'ok': True, 'data': {
        'tokenNo': visit.token_no,
        'empNo': visit.emp_no,
        'employeeName': visit.employee_name,
        'emiratesId': visit.emirates_id,
        'insuranceId': visit.insurance_id,
        'trLocation': visit.tr_location,
        'mobileNumber': visit.mobile_number,
        'locationId': visit.location_id,
    }})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search_visits(request):
    q = VisitSearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    params = q.validated_data
    qs = _visits().filter(scope_locations(request.user))
    if params.get('empNo'):
        qs = qs.filter(emp_no=params['empNo'].strip().upper())
    if params.get('date'):
        qs = qs.filter(date=params['date'])
    items = list(qs.order_by('-date', '-time', '-id')[:visit_service.SEARCH_LIMIT])
    return Response({'ok': True, 'data': ClinicVisitSerializer(items, many=True).data,
                     'meta': {'count': len(items)}})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def emp_summary(request):
    q = EmpNoQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response({'ok': True, 'data': visit_service.employee_summary(q.validated_data['empNo'])})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def emp_history(request):
    q = EmpNoQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response({'ok': True, 'data': visit_service.employee_history(q.validated_data['empNo'])})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def manager_by_employee(request):
    locations = manager_locations(request.user)
    if not locations:
        return Response({'ok': False, 'detail': 'No manager locations assigned'}, status=status.HTTP_403_FORBIDDEN)
    groups = visit_service.visits_by_employee(locations)
    for group in groups:
        group['visits'] = ClinicVisitSerializer(group['visits'], many=True).data
    return Response({'ok': True, 'data': groups, 'meta': {'employees': len(groups)}})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def manager_prioritized(request):
    locations = manager_locations(request.user)
    if not locations:
        return Response({'ok': False, 'detail': 'No manager locations assigned'}, status=status.HTTP_403_FORBIDDEN)
    rows, excluded = visit_service.prioritized_visits(locations)
    data = []
    for visit, rank, count in rows:
        item = ClinicVisitSerializer(visit).data
        item['rank'] = rank
        item['visitCount'] = count
        data.append(item)
    return Response({'ok': True, 'data': data, 'meta': {'returned': len(data), 'excludedEmpNosCount': excluded}})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def export_excel(request):
    qs = _visits().filter(scope_locations(request.user, request.query_params.get('locationId')))
    result = export_visits(qs.order_by('-date', '-time', '-id'))
    if result is None:
        return Response({'ok': False, 'detail': 'No visits to export'}, status=status.HTTP_400_BAD_REQUEST)
    log_action(user=request.user, action='visit_export', object_type='clinic_visit', detail=result)
    return Response({'ok': True, 'message': 'Excel file generated', **result})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def import_excel(request):
    return import_response(request, import_visits, 'clinic_visit')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def member_feedback(request):
    if request.method == 'GET':
        q = PageQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = MemberFeedback.objects.select_related('created_by')
        emp = (request.query_params.get('employeeId') or '').strip().upper()
        if emp:
            qs = qs.filter(employee_id=emp)
        return page_response(qs, q.validated_data, MemberFeedbackSerializer)
    s = MemberFeedbackSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    feedback = s.save(created_by=request.user)
    log_action(user=request.user, action='feedback_create', object_type='member_feedback', object_id=feedback.id)
    return Response({'ok': True, 'data': MemberFeedbackSerializer(feedback).data}, status=status.HTTP_201_CREATED)
