"""
Employee master data: date of joining / leave balances, the patient
(employee) register used to pre-fill visit forms, and the profession
lookup list.
"""
from __future__ import annotations

from django.db import IntegrityError, transaction
from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from records.models import EmployeeDoj, Patient, Profession
from records.permissions import IsSuperadmin
from records.serializers.employee import (
    EmpDojListQuerySerializer,
    EmployeeDojSerializer,
    PatientListQuerySerializer,
    PatientSerializer,
    ProfessionSearchQuerySerializer,
    ProfessionSerializer,
)
from records.services.audit import log_action
from records.services.imports import import_employee_doj, import_patients, import_professions
from .common import detail_response, import_response, page_response

LEAVE_FIELDS = ('sl', 'al', 'el', 'lop')


# ---------------------------------------------------------------------
# Employee DOJ
# ---------------------------------------------------------------------
def _doj_records():
    return EmployeeDoj.objects.select_related('created_by').order_by('-doj', '-id')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def emp_doj(request):
    if request.method == 'POST':
        s = EmployeeDojSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        record = s.save(created_by=request.user)
        log_action(user=request.user, action='emp_doj_create', object_type='emp_doj', object_id=record.id)
        return Response({'ok': True, 'data': EmployeeDojSerializer(record).data}, status=status.HTTP_201_CREATED)
    q = EmpDojListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    params = q.validated_data
    qs = _doj_records()
    if params.get('empNo'):
        qs = qs.filter(emp_no=params['empNo'].strip().upper())
    if params.get('dateFrom'):
        qs = qs.filter(doj__gte=params['dateFrom'])
    if params.get('dateTo'):
        qs = qs.filter(doj__lte=params['dateTo'])
    return page_response(qs, params, EmployeeDojSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def emp_doj_detail(request, pk: int):
    record = _doj_records().filter(pk=pk).first()
    if record is None:
        raise NotFound('DOJ record not found')
    return detail_response(request, record, EmployeeDojSerializer, object_type='emp_doj')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def leave_eligibility(request, emp_no: str):
    """Eligible for leave only when no SL, AL, EL or LOP was taken."""
    emp_no = emp_no.strip().upper()
    record = _doj_records().filter(emp_no=emp_no).first()
    if record is None:
        raise NotFound('No DOJ record for this employee')
    eligible = all(not getattr(record, name) for name in LEAVE_FIELDS)
    return Response({'ok': True, 'data': {
        'empNo': emp_no,
        'doj': record.doj,
        'eligible': eligible,
        'leave': 'eligible' if eligible else 'Not eligible',
        **{name: getattr(record, name) for name in LEAVE_FIELDS},
    }})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def emp_doj_import(request):
    return import_response(request, import_employee_doj, 'emp_doj')


# ---------------------------------------------------------------------
# Patients
# ---------------------------------------------------------------------
def _filtered_patients(params):
    qs = Patient.objects.all()
    if params.get('trLocation'):
        qs = qs.filter(tr_location=params['trLocation'])
    term = (params.get('q') or '').strip()
    if term:
        qs = qs.filter(
            Q(patient_name__icontains=term) | Q(emp_id__icontains=term) | Q(emirates_id__icontains=term)
        )
    return qs


def _duplicate_emp_id(emp_id: str) -> Response:
    return Response({'ok': False, 'detail': f'Employee {emp_id} already exists'}, status=status.HTTP_409_CONFLICT)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients(request):
    if request.method == 'POST':
        s = PatientSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        emp_id = s.validated_data['emp_id']
        if Patient.objects.filter(emp_id=emp_id).exists():
            return _duplicate_emp_id(emp_id)
        try:
            with transaction.atomic():
                patient = s.save()
        except IntegrityError:
            return _duplicate_emp_id(emp_id)
        log_action(user=request.user, action='patient_create', object_type='patient', object_id=patient.id)
        return Response({'ok': True, 'data': PatientSerializer(patient).data}, status=status.HTTP_201_CREATED)
    q = PatientListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return page_response(_filtered_patients(q.validated_data), q.validated_data, PatientSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patients_all(request):
    """Unpaginated list for dropdowns."""
    q = PatientListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    items = list(_filtered_patients(q.validated_data))
    return Response({'ok': True, 'items': PatientSerializer(items, many=True).data, 'total': len(items)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patients_table(request):
    q = PatientListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return page_response(_filtered_patients(q.validated_data), q.validated_data, PatientSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patients_by_tr(request, tr_location: str):
    items = Patient.objects.filter(tr_location=tr_location.strip())
    return Response({'ok': True, 'data': PatientSerializer(items, many=True).data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_by_emp_id(request, emp_id: str):
    patient = Patient.objects.filter(emp_id=emp_id.strip().upper()).first()
    if patient is None:
        raise NotFound('Patient not found')
    return Response({'ok': True, 'data': PatientSerializer(patient).data})


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def patient_detail(request, pk: int):
    patient = Patient.objects.filter(pk=pk).first()
    if patient is None:
        raise NotFound('Patient not found')
    new_emp_id = request.data.get('empId') if request.method in ('PUT', 'PATCH') else None
    if new_emp_id:
        new_emp_id = str(new_emp_id).strip().upper()
        if Patient.objects.filter(emp_id=new_emp_id).exclude(pk=pk).exists():
            return _duplicate_emp_id(new_emp_id)
    return detail_response(request, patient, PatientSerializer, object_type='patient')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def patients_import(request):
    return import_response(request, import_patients, 'patient')


# ---------------------------------------------------------------------
# Professions
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def professions(request):
    """``GET`` searches word by word; ``POST`` adds an entry (superadmin)."""
    if request.method == 'POST':
        if request.user.role != 'superadmin':
            return Response({'ok': False, 'detail': 'Forbidden'}, status=status.HTTP_403_FORBIDDEN)
        s = ProfessionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        profession = s.save()
        log_action(user=request.user, action='profession_create', object_type='profession',
                   object_id=profession.id)
        return Response({'ok': True, 'data': ProfessionSerializer(profession).data},
                        status=status.HTTP_201_CREATED)
    q = ProfessionSearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    params = q.validated_data
    words = params['search'].split()
    if not words:
        return Response({'ok': True, 'count': 0, 'data': []})
    qs = Profession.objects.all()
    for word in words:
        qs = qs.filter(name__icontains=word)
    if params.get('category'):
        qs = qs.filter(category__iexact=params['category'].strip())
    items = list(qs[:params['limit']])
    return Response({'ok': True, 'count': len(items), 'data': ProfessionSerializer(items, many=True).data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profession_categories(request):
    categories = (
        Profession.objects.exclude(category='').order_by('category')
        .values_list('category', flat=True).distinct()
    )
    return Response({'ok': True, 'data': list(categories)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def professions_by_category(request, category: str):
    items = Profession.objects.filter(category__iexact=category.strip())
    return Response({'ok': True, 'category': category, 'count': items.count(),
                     'data': ProfessionSerializer(items, many=True).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsSuperadmin])
def profession_upload(request):
    return import_response(request, import_professions, 'profession')
