"""
H&I (hospitalisation and injury) views: in-patient admission follow-up
and case resolutions.  Manager and superadmin only; managers are scoped
on the admission's TR location.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from records.models import CaseResolution, IpAdmission
from records.permissions import IsManagerOrSuperadmin
from records.serializers.handi import (
    CaseResolutionSerializer,
    FromHospitalCaseSerializer,
    IpAdmissionListQuerySerializer,
    IpAdmissionSerializer,
    ManualAdmissionSerializer,
    ResolutionListQuerySerializer,
)
from records.services.audit import log_action
from records.services.hospital import admission_from_hospital_case, filter_ip_admissions
from records.services.scoping import get_scoped_or_404, scope_locations
from .common import detail_response, page_response

SCOPE_FIELD = 'tr_location'


def _admissions():
    return IpAdmission.objects.select_related('hospital_case')


def _created(request, admission: IpAdmission, action: str) -> Response:
    log_action(user=request.user, action=action, object_type='ip_admission', object_id=admission.id,
               detail={'source': admission.source})
    return Response({'ok': True, 'data': IpAdmissionSerializer(admission).data}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def ip_admissions(request):
    if request.method == 'POST':
        s = IpAdmissionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return _created(request, s.save(), 'ip_admission_create')
    q = IpAdmissionListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    params = q.validated_data
    qs = _admissions().filter(scope_locations(request.user, params.get('locationId'), field=SCOPE_FIELD))
    qs = filter_ip_admissions(qs, request.query_params).order_by('-created_at', '-id')
    return page_response(qs, params, IpAdmissionSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def ip_admission_detail(request, pk: int):
    admission = get_scoped_or_404(_admissions(), pk, request.user, field=SCOPE_FIELD, label='IP admission')
    return detail_response(request, admission, IpAdmissionSerializer, object_type='ip_admission')


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def ip_admission_from_hospital_case(request):
    """Open an H&I follow-up for an existing hospital case."""
    s = FromHospitalCaseSerializer(data=request.data)
    if not s.is_valid():
        return Response({'ok': False, 'detail': 'hospitalCase, hiManagers and caseTypeChange are required',
                         'errors': s.errors}, status=status.HTTP_422_UNPROCESSABLE_ENTITY)
    vd = s.validated_data
    payload = {k: v for k, v in request.data.items() if k != 'hospitalCase'}
    extra = IpAdmissionSerializer(data=payload, partial=True)
    extra.is_valid(raise_exception=True)
    fields = {
        k: v for k, v in extra.validated_data.items()
        if k not in ('hospital_case', 'emp_no', 'hospital_name', 'date_of_admission', 'tr_location',
                     'hi_managers', 'case_type_change', 'source')
    }
    admission = admission_from_hospital_case(request.user, vd['hospitalCase'], vd['hiManagers'],
                                             vd['caseTypeChange'], fields)
    return _created(request, admission, 'ip_admission_from_case')


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def ip_admission_manual(request):
    """Admission for an employee not known to the hospital records."""
    s = ManualAdmissionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    full = IpAdmissionSerializer(data=request.data)
    full.is_valid(raise_exception=True)
    admission = full.save(source=IpAdmission.SOURCE_MANUAL, hospital_case=None)
    return _created(request, admission, 'ip_admission_manual')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def resolutions(request):
    if request.method == 'POST':
        s = CaseResolutionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        resolution = s.save(resolved_by=request.user)
        log_action(user=request.user, action='resolution_create', object_type='case_resolution',
                   object_id=resolution.id)
        return Response({'ok': True, 'data': CaseResolutionSerializer(resolution).data},
                        status=status.HTTP_201_CREATED)
    q = ResolutionListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    params = q.validated_data
    qs = CaseResolution.objects.select_related('resolved_by', 'ip_admission', 'hospital_case')
    if params.get('empNo'):
        qs = qs.filter(emp_no=params['empNo'].strip().upper())
    if params.get('resolutionStatus'):
        qs = qs.filter(resolution_status__iexact=params['resolutionStatus'])
    if params.get('ipAdmission'):
        qs = qs.filter(ip_admission_id=params['ipAdmission'])
    return page_response(qs, params, CaseResolutionSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsManagerOrSuperadmin])
def resolution_detail(request, pk: int):
    resolution = CaseResolution.objects.select_related('resolved_by').filter(pk=pk).first()
    if resolution is None:
        raise NotFound('Case resolution not found')
    return detail_response(request, resolution, CaseResolutionSerializer, object_type='case_resolution')
