"""
Bulk Excel imports.

Each importer takes the rows produced by :func:`records.services.excel.read_rows`
and the importing user, and returns a small summary dict.  Rows missing
the fields a record cannot exist without are skipped and counted.
"""
from __future__ import annotations

import logging
import re
from typing import Any

from django.db import transaction

from records.models import (
    ClinicVisit,
    EmployeeDoj,
    HospitalCase,
    Isolation,
    Patient,
    Profession,
)
from records.services.excel import Column, cell_text, map_row, parse_date, row_value
from records.services.visits import apply_referral_code

logger = logging.getLogger(__name__)

BATCH_SIZE = 500
EMP_ID_RE = re.compile(r'[A-Z0-9]{6}')
MAX_IMPORT_MEDICINES = 8
MAX_IMPORT_VISIT_FOLLOW_UPS = 6
MAX_IMPORT_HOSPITAL_FOLLOW_UPS = 10

EMP_NO_HEADERS = ('EMP NO', 'EMPNO', 'EMPLOYEE NO', 'EMP ID', 'EMPID')

VISIT_COLUMNS = (
    Column(('DATE',), 'date', 'date'),
    Column(('TIME',), 'time'),
    Column(EMP_NO_HEADERS, 'emp_no', 'upper'),
    Column(('EMPLOYEE NAME', 'NAME'), 'employee_name'),
    Column(('DATE OF JOINING', 'DOJ'), 'date_of_joining'),
    Column(('ELIGIBILITY FOR SICK LEAVE',), 'eligibility_for_sick_leave', 'optbool'),
    Column(('EMIRATES ID',), 'emirates_id'),
    Column(('INSURANCE ID',), 'insurance_id'),
    Column(('TR LOCATION',), 'tr_location'),
    Column(('MOBILE NUMBER', 'MOBILE NO'), 'mobile_number'),
    Column(('NATURE OF CASE',), 'nature_of_case'),
    Column(('CASE CATEGORY',), 'case_category'),
    Column(('NURSE ASSESSMENT',), 'nurse_assessment', 'list'),
    Column(('SYMPTOM DURATION',), 'symptom_duration'),
    Column(('TEMPERATURE', 'TEMP'), 'temperature'),
    Column(('BLOOD PRESSURE', 'BP'), 'blood_pressure'),
    Column(('HEART RATE',), 'heart_rate'),
    Column(('OTHERS',), 'others'),
    Column(('TOKEN NO', 'TOKEN'), 'token_no'),
    Column(('SENT TO',), 'sent_to'),
    Column(('PROVIDER NAME',), 'provider_name'),
    Column(('DOCTOR NAME',), 'doctor_name'),
    Column(('PRIMARY DIAGNOSIS',), 'primary_diagnosis'),
    Column(('SECONDARY DIAGNOSIS',), 'secondary_diagnosis', 'list'),
    Column(('SICK LEAVE STATUS',), 'sick_leave_status'),
    Column(('SICK LEAVE START DATE',), 'sick_leave_start_date', 'date'),
    Column(('SICK LEAVE END DATE',), 'sick_leave_end_date', 'date'),
    Column(('TOTAL SICK LEAVE DAYS',), 'total_sick_leave_days'),
    Column(('REMARKS', 'SICK LEAVE REMARKS'), 'remarks'),
    Column(('REFERRAL',), 'referral', 'bool'),
    Column(('REFERRAL CODE',), 'referral_code'),
    Column(('REFERRAL TYPE',), 'referral_type'),
    Column(('REFERRED TO HOSPITAL',), 'referred_to_hospital'),
    Column(('VISIT DATE REFERRAL', 'REFERRAL VISIT DATE'), 'visit_date_referral', 'date'),
    Column(('SPECIALIST TYPE',), 'specialist_type'),
    Column(('DOCTOR NAME REFERRAL', 'REFERRAL DOCTOR NAME'), 'doctor_name_referral'),
    Column(('INVESTIGATION REPORTS',), 'investigation_reports'),
    Column(('PRIMARY DIAGNOSIS REFERRAL',), 'primary_diagnosis_referral'),
    Column(('SECONDARY DIAGNOSIS REFERRAL',), 'secondary_diagnosis_referral', 'list'),
    Column(('NURSE REMARKS REFERRAL',), 'nurse_remarks_referral'),
    Column(('INSURANCE APPROVAL REQUESTED',), 'insurance_approval_requested', 'bool'),
    Column(('FOLLOW UP REQUIRED',), 'follow_up_required', 'bool'),
    Column(('VISIT STATUS',), 'visit_status', 'upper'),
    Column(('FINAL REMARKS',), 'final_remarks'),
    Column(('IP ADMISSION REQUIRED',), 'ip_admission_required', 'bool'),
)

HOSPITAL_COLUMNS = (
    Column(('CLINIC VISIT TOKEN', 'TOKEN NO'), 'clinic_visit_token'),
    Column(EMP_NO_HEADERS, 'emp_no', 'upper'),
    Column(('EMPLOYEE NAME', 'NAME'), 'employee_name'),
    Column(('EMIRATES ID',), 'emirates_id'),
    Column(('INSURANCE ID',), 'insurance_id'),
    Column(('TR LOCATION',), 'tr_location'),
    Column(('MOBILE NUMBER', 'MOBILE NO'), 'mobile_number'),
    Column(('HOSPITAL NAME', 'HOSPITAL'), 'hospital_name'),
    Column(('DOA', 'DATE OF ADMISSION'), 'date_of_admission', 'date'),
    Column(('NATURE OF CASE',), 'nature_of_case'),
    Column(('CASE CATEGORY',), 'case_category'),
    Column(('PRIMARY DIAGNOSIS',), 'primary_diagnosis'),
    Column(('SECONDARY DIAGNOSIS',), 'secondary_diagnosis', 'list'),
    Column(('STATUS',), 'status'),
    Column(('DISCHARGE SUMMARY RECEIVED',), 'discharge_summary_received', 'bool'),
    Column(('DOD', 'DATE OF DISCHARGE'), 'date_of_discharge', 'date'),
    Column(('DAYS HOSPITALIZED', 'NO OF DAYS'), 'days_hospitalized', 'int'),
    Column(('FITNESS STATUS',), 'fitness_status'),
    Column(('ISOLATION REQUIRED',), 'isolation_required', 'bool'),
    Column(('FINAL REMARKS',), 'final_remarks'),
)

ISOLATION_COLUMNS = (
    Column(('CLINIC VISIT TOKEN', 'TOKEN NO'), 'clinic_visit_token'),
    Column(EMP_NO_HEADERS, 'emp_no', 'upper'),
    Column(('TYPE',), 'isolation_type'),
    Column(('EMPLOYEE NAME', 'NAME'), 'employee_name'),
    Column(('EMIRATES ID',), 'emirates_id'),
    Column(('INSURANCE ID',), 'insurance_id'),
    Column(('MOBILE NUMBER', 'MOBILE NO'), 'mobile_number'),
    Column(('TR LOCATION',), 'tr_location'),
    Column(('ISOLATED IN',), 'isolated_in'),
    Column(('ISOLATION REASON', 'REASON'), 'isolation_reason'),
    Column(('NATIONALITY',), 'nationality'),
    Column(('SL UPTO',), 'sl_upto'),
    Column(('DATE FROM', 'FROM'), 'date_from', 'date'),
    Column(('DATE TO', 'TO'), 'date_to', 'date'),
    Column(('CURRENT STATUS', 'STATUS'), 'current_status'),
    Column(('REMARKS',), 'remarks'),
)

EMP_DOJ_COLUMNS = (
    Column(EMP_NO_HEADERS, 'emp_no', 'upper'),
    Column(('DOJ', 'DATE OF JOINING'), 'doj', 'date'),
    Column(('SL (LAST 3M)', 'SL LAST 3M', 'SL'), 'sl', 'float'),
    Column(('AL (LAST 6M)', 'AL LAST 6M', 'AL'), 'al', 'float'),
    Column(('EL (LAST 6M)', 'EL LAST 6M', 'EL'), 'el', 'float'),
    Column(('LOP (LAST 3M)', 'LOP LAST 3M', 'LOP'), 'lop', 'float'),
)

PATIENT_COLUMNS = (
    Column(EMP_NO_HEADERS, 'emp_id', 'upper'),
    Column(('PATIENT NAME', 'EMPLOYEE NAME', 'NAME'), 'patient_name'),
    Column(('EMIRATES ID',), 'emirates_id'),
    Column(('INSURANCE ID',), 'insurance_id'),
    Column(('TR LOCATION',), 'tr_location'),
    Column(('MOBILE NUMBER', 'MOBILE NO'), 'mobile_number'),
)

PROFESSION_COLUMNS = (
    Column(('NAME', 'PROFESSION'), 'name'),
    Column(('CATEGORY',), 'category'),
)


def _row_location(user, row: dict[str, Any], fallback: str) -> str:
    if getattr(user, 'location_id', None):
        return user.location_id
    return cell_text(row_value(row, ('LOCATION ID', 'LOCATION'))) or fallback


def _medicines(row: dict[str, Any]) -> list[dict[str, Any]]:
    medicines = []
    for n in range(1, MAX_IMPORT_MEDICINES + 1):
        name = cell_text(row.get(f'MEDICINE {n} NAME'))
        course = cell_text(row.get(f'MEDICINE {n} COURSE'))
        expiry = parse_date(row.get(f'MEDICINE {n} EXPIRY'))
        if name or course or expiry:
            medicines.append({'name': name, 'course': course, 'expiryDate': expiry})
    return medicines


def _visit_follow_ups(row: dict[str, Any]) -> list[dict[str, Any]]:
    visits = []
    for n in range(1, MAX_IMPORT_VISIT_FOLLOW_UPS + 1):
        visit_date = parse_date(row.get(f'NEXT VISIT DATE {n}'))
        remarks = cell_text(row.get(f'NEXT VISIT REMARKS {n}'))
        if visit_date or remarks:
            visits.append({'visitDate': visit_date, 'visitRemarks': remarks})
    return visits


def _hospital_follow_ups(row: dict[str, Any]) -> list[dict[str, Any]]:
    follow_ups = []
    for n in range(1, MAX_IMPORT_HOSPITAL_FOLLOW_UPS + 1):
        follow_date = parse_date(row_value(row, (f'FOLLOW-UP -{n}', f'FOLLOW-UP {n}', f'FOLLOW UP {n}')))
        remarks = cell_text(row.get(f'REMARKS {n}'))
        if follow_date or remarks:
            follow_ups.append({'date': follow_date, 'remarks': remarks})
    return follow_ups


def _summary(kind: str, created: int, skipped: int, **extra) -> dict[str, Any]:
    logger.info('%s import: %d created, %d skipped', kind, created, skipped)
    return {'inserted': created, 'skipped': skipped, **extra}


def import_visits(rows: list[dict[str, Any]], user) -> dict[str, Any]:
    """Visits keep the token from the sheet; no daily counter is consumed."""
    objs, skipped = [], 0
    for idx, row in enumerate(rows, start=2):
        data = map_row(row, VISIT_COLUMNS)
        if not data['emp_no'] and not data['employee_name']:
            logger.debug('visit row %d skipped: no employee', idx)
            skipped += 1
            continue
        data['medicines'] = _medicines(row)
        data['follow_up_visits'] = _visit_follow_ups(row)
        data['location_id'] = _row_location(user, row, data['tr_location'])
        apply_referral_code(data, data['token_no'])
        objs.append(ClinicVisit(created_by=user, **data))
    with transaction.atomic():
        ClinicVisit.objects.bulk_create(objs, batch_size=BATCH_SIZE)
    return _summary('visit', len(objs), skipped)


def import_hospital_cases(rows: list[dict[str, Any]], user) -> dict[str, Any]:
    objs, skipped = [], 0
    for idx, row in enumerate(rows, start=2):
        data = map_row(row, HOSPITAL_COLUMNS)
        if not (data['emp_no'] and data['employee_name'] and data['emirates_id']):
            logger.debug('hospital row %d skipped: missing empNo/employeeName/emiratesId', idx)
            skipped += 1
            continue
        data['follow_up'] = _hospital_follow_ups(row)
        data['location_id'] = _row_location(user, row, data['tr_location'])
        objs.append(HospitalCase(created_by=user, **data))
    with transaction.atomic():
        HospitalCase.objects.bulk_create(objs, batch_size=BATCH_SIZE)
    return _summary('hospital', len(objs), skipped)


def import_isolations(rows: list[dict[str, Any]], user) -> dict[str, Any]:
    objs, skipped = [], 0
    for idx, row in enumerate(rows, start=2):
        data = map_row(row, ISOLATION_COLUMNS)
        if not (data['emp_no'] and data['employee_name'] and data['emirates_id']):
            logger.debug('isolation row %d skipped: missing empNo/employeeName/emiratesId', idx)
            skipped += 1
            continue
        data['location_id'] = _row_location(user, row, data['tr_location'])
        objs.append(Isolation(created_by=user, **data))
    with transaction.atomic():
        Isolation.objects.bulk_create(objs, batch_size=BATCH_SIZE)
    return _summary('isolation', len(objs), skipped)


def import_employee_doj(rows: list[dict[str, Any]], user) -> dict[str, Any]:
    """Upsert DOJ/leave rows by employee number."""
    created = updated = skipped = 0
    with transaction.atomic():
        for row in rows:
            data = map_row(row, EMP_DOJ_COLUMNS)
            emp_no = data.pop('emp_no')
            if not emp_no:
                skipped += 1
                continue
            if EmployeeDoj.objects.filter(emp_no=emp_no).update(**data):
                updated += 1
            else:
                EmployeeDoj.objects.create(emp_no=emp_no, created_by=user, **data)
                created += 1
    return _summary('emp-doj', created, skipped, updated=updated)


def import_patients(rows: list[dict[str, Any]], user) -> dict[str, Any]:
    """Create unknown employees; on known ones only fill fields still empty."""
    created = updated = skipped = 0
    existing = {p.emp_id: p for p in Patient.objects.filter(
        emp_id__in=[cell_text(row_value(r, EMP_NO_HEADERS)).upper() for r in rows]
    )}
    new_objs = []
    with transaction.atomic():
        for idx, row in enumerate(rows, start=2):
            data = map_row(row, PATIENT_COLUMNS)
            emp_id = data.pop('emp_id')
            patient = existing.get(emp_id)
            if patient is None:
                if not EMP_ID_RE.fullmatch(emp_id) or not data['patient_name']:
                    logger.debug('patient row %d skipped: invalid empId %r', idx, emp_id)
                    skipped += 1
                    continue
                patient = Patient(emp_id=emp_id, **data)
                existing[emp_id] = patient
                new_objs.append(patient)
                continue
            missing = [f for f, v in data.items() if v and not getattr(patient, f)]
            if missing:
                for field in missing:
                    setattr(patient, field, data[field])
                if patient.pk:
                    patient.save(update_fields=missing + ['updated_at'])
                    updated += 1
        Patient.objects.bulk_create(new_objs, batch_size=BATCH_SIZE)
        created = len(new_objs)
    return _summary('patient', created, skipped, updated=updated)


def import_professions(rows: list[dict[str, Any]], user) -> dict[str, Any]:
    objs, skipped = [], 0
    seen = set(Profession.objects.values_list('name', 'category'))
    for row in rows:
        data = map_row(row, PROFESSION_COLUMNS)
        key = (data['name'], data['category'])
        if not data['name'] or key in seen:
            skipped += 1
            continue
        seen.add(key)
        objs.append(Profession(**data))
    with transaction.atomic():
        Profession.objects.bulk_create(objs, batch_size=BATCH_SIZE)
    return _summary('profession', len(objs), skipped)
