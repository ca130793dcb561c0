"""
Hospital admission and isolation views.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from records.models import HospitalCase, Isolation
from records.permissions import IsManagerOrSuperadmin
from records.serializers.common import PageQuerySerializer
from records.serializers.hospital import (
    EmployeeDateQuerySerializer,
    HospitalCaseSerializer,
    HospitalListQuerySerializer,
    IsolationListQuerySerializer,
    IsolationSerializer,
)
from records.services.audit import log_action
from records.services.hospital import pending_discharge_cases
from records.services.imports import import_hospital_cases, import_isolations
from records.services.scoping import get_scoped_or_404, manager_locations, scope_locations
from .common import detail_response, import_response, page_response, require_location


def _create(request, serializer_class, object_type: str) -> Response:
    s = serializer_class(data=request.data)
    s.is_valid(raise_exception=True)
    extra = {'created_by': request.user}
    if request.user.location_id:
        extra['location_id'] = request.user.location_id
    obj = s.save(**extra)
    log_action(user=request.user, action=f'{object_type}_create', object_type=object_type, object_id=obj.id)
    return Response({'ok': True, 'data': serializer_class(obj).data}, status=status.HTTP_201_CREATED)


# ---------------------------------------------------------------------
# Hospital cases
# ---------------------------------------------------------------------
def _cases():
    return HospitalCase.objects.select_related('created_by')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def hospital_cases(request):
    if request.method == 'POST':
        return _create(request, HospitalCaseSerializer, 'hospital_case')
    q = HospitalListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    params = q.validated_data
    qs = _cases().filter(scope_locations(request.user, params.get('locationId')))
    if params.get('empNo'):
        qs = qs.filter(emp_no=params['empNo'].strip().upper())
    if params.get('status'):
        qs = qs.filter(status__iexact=params['status'])
    if params.get('hospitalName'):
        qs = qs.filter(hospital_name__icontains=params['hospitalName'])
    if params.get('startDate'):
        qs = qs.filter(date_of_admission__gte=params['startDate'])
    if params.get('endDate'):
        qs = qs.filter(date_of_admission__lte=params['endDate'])
    return page_response(qs, params, HospitalCaseSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def hospital_case_detail(request, pk: int):
    case = get_scoped_or_404(_cases(), pk, request.user, label='Hospital case')
    return detail_response(request, case, HospitalCaseSerializer, object_type='hospital_case')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def hospital_my_location(request):
    q = PageQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = _cases().filter(location_id=require_location(request))
    return page_response(qs, q.validated_data, HospitalCaseSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def hospital_employee_search(request):
    """Admission of ``empNo`` on ``date``."""
    q = EmployeeDateQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    params = q.validated_data
    case = (
        _cases().filter(scope_locations(request.user), emp_no=params['empNo'], date_of_admission=params['date'])
        .order_by('-id').first()
    )
    if case is None:
        return Response({'ok': False, 'detail': 'No hospital record for this employee on that date'},
                        status=status.HTTP_404_NOT_FOUND)
    return Response({'ok': True, 'data': HospitalCaseSerializer(case).data})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def discharge_status(request):
    locations = manager_locations(request.user)
    if not locations:
        return Response({'ok': False, 'detail': 'No manager locations assigned'}, status=status.HTTP_400_BAD_REQUEST)
    cases = pending_discharge_cases(locations)
    return Response({'ok': True, 'data': HospitalCaseSerializer(cases, many=True).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def hospital_import(request):
    return import_response(request, import_hospital_cases, 'hospital_case')


# ---------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------
def _isolations():
    return Isolation.objects.select_related('created_by')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def isolations(request):
    if request.method == 'POST':
        return _create(request, IsolationSerializer, 'isolation')
    q = IsolationListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    params = q.validated_data
    qs = _isolations().filter(scope_locations(request.user, params.get('locationId')))
    if params.get('empNo'):
        qs = qs.filter(emp_no=params['empNo'].strip().upper())
    if params.get('currentStatus'):
        qs = qs.filter(current_status__iexact=params['currentStatus'])
    if params.get('startDate'):
        qs = qs.filter(date_from__gte=params['startDate'])
    if params.get('endDate'):
        qs = qs.filter(date_from__lte=params['endDate'])
    return page_response(qs, params, IsolationSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def isolation_detail(request, pk: int):
    isolation = get_scoped_or_404(_isolations(), pk, request.user, label='Isolation')
    return detail_response(request, isolation, IsolationSerializer, object_type='isolation')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def isolation_my_location(request):
    q = PageQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = _isolations().filter(location_id=require_location(request))
    return page_response(qs, q.validated_data, IsolationSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def isolation_import(request):
    return import_response(request, import_isolations, 'isolation')
