"""
Hospital, isolation, H&I and employee master-data endpoints.
"""
from datetime import date

import pytest

from records.models import CaseResolution, EmployeeDoj, HospitalCase, IpAdmission, Isolation, Patient, Profession
from .conftest import QOZ, SONAPUR

pytestmark = pytest.mark.django_db


def make_case(location=QOZ, emp_no='AB1234', status='Admitted', **fields):
    return HospitalCase.objects.create(
        location_id=location,
        emp_no=emp_no,
        employee_name=fields.pop('employee_name', 'Ravi Kumar'),
        emirates_id=fields.pop('emirates_id', '784-1990-1234567-1'),
        hospital_name=fields.pop('hospital_name', 'Rashid Hospital'),
        date_of_admission=fields.pop('date_of_admission', date(2025, 12, 1)),
        status=status,
        **fields,
    )


# ---------------------------------------------------------------------
# Hospital
# ---------------------------------------------------------------------
def test_create_hospital_case_uses_nurse_location(nurse_client):
    r = nurse_client.post('/api/hospital', {
        'empNo': 'ab1234', 'employeeName': 'Ravi', 'emiratesId': '784', 'locationId': SONAPUR,
        'dateOfAdmission': '2025-12-01', 'followUp': [{'date': '2025-12-08', 'remarks': 'review'}],
    }, format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['locationId'] == QOZ
    assert r.data['data']['empNo'] == 'AB1234'
    assert r.data['data']['followUp'][0]['remarks'] == 'review'


def test_hospital_case_requires_identity(nurse_client):
    r = nurse_client.post('/api/hospital', {'empNo': 'AB1234'}, format='json')
    assert r.status_code == 400
    assert r.data['ok'] is False


def test_hospital_list_scoped_and_filtered(nurse_client):
    make_case(QOZ, 'AA0001', status='Admitted')
    make_case(QOZ, 'AA0002', status='Discharge')
    make_case(SONAPUR, 'BB0001')
    r = nurse_client.get('/api/hospital')
    assert r.data['meta']['total'] == 2
    r = nurse_client.get('/api/hospital', {'status': 'discharge'})
    assert [c['empNo'] for c in r.data['data']] == ['AA0002']


def test_hospital_employee_search(nurse_client):
    make_case(QOZ, 'AA0001', date_of_admission=date(2025, 12, 3))
    r = nurse_client.get('/api/hospital/employee/search', {'empNo': 'aa0001', 'date': '2025-12-03'})
    assert r.status_code == 200
    assert r.data['data']['empNo'] == 'AA0001'
    r = nurse_client.get('/api/hospital/employee/search', {'empNo': 'AA0001', 'date': '2025-12-04'})
    assert r.status_code == 404


def test_discharge_status_lists_open_cases_without_admission(manager_client):
    pending = make_case(QOZ, 'AA0001', status='Admitted')
    make_case(QOZ, 'AA0002', status='DISCHARGE')
    taken = make_case(QOZ, 'AA0003', status='Admitted')
    IpAdmission.objects.create(emp_no='AA0003', hospital_case=taken, tr_location=QOZ)
    make_case(SONAPUR, 'BB0001', status='Admitted')
    r = manager_client.get('/api/hospital/manager/discharge-status')
    assert r.status_code == 200
    assert [c['id'] for c in r.data['data']] == [pending.id]


def test_discharge_status_needs_manager_locations(super_client, nurse_client):
    assert super_client.get('/api/hospital/manager/discharge-status').status_code == 400
    assert nurse_client.get('/api/hospital/manager/discharge-status').status_code == 403


# ---------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------
def test_isolation_type_key_and_date_order(nurse_client):
    payload = {'empNo': 'AA0001', 'employeeName': 'Ali', 'emiratesId': '784', 'type': 'Chickenpox',
               'dateFrom': '2025-12-04', 'dateTo': '2025-12-10'}
    r = nurse_client.post('/api/isolation', payload, format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['type'] == 'Chickenpox'
    assert Isolation.objects.get().isolation_type == 'Chickenpox'

    payload['dateTo'] = '2025-12-01'
    r = nurse_client.post('/api/isolation', payload, format='json')
    assert r.status_code == 400


def test_isolation_detail_outside_location(nurse_client):
    other = Isolation.objects.create(location_id=SONAPUR, emp_no='BB0001', employee_name='B', emirates_id='1')
    assert nurse_client.get(f'/api/isolation/{other.id}').status_code == 403


# ---------------------------------------------------------------------
# H&I
# ---------------------------------------------------------------------
def test_ip_admission_requires_manager(nurse_client):
    assert nurse_client.get('/api/ip-admission').status_code == 403


def test_from_hospital_case_copies_case(manager_client):
    case = make_case(QOZ, 'AA0001')
    r = manager_client.post('/api/ip-admission/from-hospital-case', {
        'hospitalCase': case.id, 'hiManagers': 'Mr. Khan', 'caseTypeChange': 'Medical', 'admissionMode': 'Emergency',
    }, format='json')
    assert r.status_code == 201, r.data
    data = r.data['data']
    assert data['empNo'] == 'AA0001'
    assert data['hospitalName'] == 'Rashid Hospital'
    assert data['trLocation'] == QOZ
    assert data['source'] == IpAdmission.SOURCE_HOSPITAL
    assert data['admissionMode'] == 'Emergency'
    assert data['hospitalCase']['id'] == case.id


def test_from_hospital_case_errors(manager_client):
    r = manager_client.post('/api/ip-admission/from-hospital-case', {'hospitalCase': 1}, format='json')
    assert r.status_code == 422
    r = manager_client.post('/api/ip-admission/from-hospital-case', {
        'hospitalCase': 999999, 'hiManagers': 'X', 'caseTypeChange': 'Y',
    }, format='json')
    assert r.status_code == 404


def test_from_hospital_case_outside_managed_sites(manager_client):
    case = make_case(SONAPUR, 'BB0001')
    r = manager_client.post('/api/ip-admission/from-hospital-case', {
        'hospitalCase': case.id, 'hiManagers': 'Mr. Khan', 'caseTypeChange': 'Medical',
    }, format='json')
    assert r.status_code == 403
    assert not IpAdmission.objects.exists()


def test_manual_admission(manager_client):
    payload = {
        'empNo': 'zz0001', 'dateOfAdmission': '2025-12-02', 'hospitalName': 'NMC', 'trLocation': QOZ,
        'hiManagers': 'Mr. Khan', 'caseTypeChange': 'Injury',
        'technicianVisits': [{'technicianFeedback': 'stable'}],
    }
    r = manager_client.post('/api/ip-admission/employee-not-in-his', payload, format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['source'] == IpAdmission.SOURCE_MANUAL
    assert r.data['data']['empNo'] == 'ZZ0001'

    payload['technicianVisits'] = 'stable'
    r = manager_client.post('/api/ip-admission/employee-not-in-his', payload, format='json')
    assert r.status_code == 400
    del payload['hospitalName']
    payload['technicianVisits'] = []
    r = manager_client.post('/api/ip-admission/employee-not-in-his', payload, format='json')
    assert r.status_code == 400


def test_ip_admission_filters_and_scope(manager_client):
    IpAdmission.objects.create(emp_no='AA0001', tr_location=QOZ, fit_to_travel=True, no_of_visits=2,
                               treatment_undergone='knee surgery', dod_hi=date(2025, 12, 10))
    IpAdmission.objects.create(emp_no='AA0002', tr_location=QOZ, fit_to_travel=False, no_of_visits=1)
    IpAdmission.objects.create(emp_no='BB0001', tr_location=SONAPUR)
    r = manager_client.get('/api/ip-admission')
    assert r.data['meta']['total'] == 2
    r = manager_client.get('/api/ip-admission', {'fitToTravel': 'true'})
    assert [a['empNo'] for a in r.data['data']] == ['AA0001']
    r = manager_client.get('/api/ip-admission', {'noOfVisits': '1'})
    assert [a['empNo'] for a in r.data['data']] == ['AA0002']
    r = manager_client.get('/api/ip-admission', {'search': 'KNEE'})
    assert [a['empNo'] for a in r.data['data']] == ['AA0001']
    r = manager_client.get('/api/ip-admission', {'dodHIFrom': '2025-12-09', 'dodHITo': '2025-12-11'})
    assert [a['empNo'] for a in r.data['data']] == ['AA0001']


def test_resolution_flow(manager_client, manager):
    admission = IpAdmission.objects.create(emp_no='AA0001', tr_location=QOZ)
    assert manager_client.post('/api/resolution', {'empNo': 'AA0001'}, format='json').status_code == 400
    r = manager_client.post('/api/resolution', {
        'ipAdmission': admission.id, 'empNo': 'aa0001', 'resolutionStatus': 'Closed',
        'resolutionDate': '2025-12-20', 'outcome': 'Resumed work',
    }, format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['resolvedBy']['id'] == manager.id
    resolution = CaseResolution.objects.get()
    r = manager_client.get('/api/resolution', {'ipAdmission': admission.id})
    assert r.data['meta']['total'] == 1
    r = manager_client.patch(f'/api/resolution/{resolution.id}', {'remarks': 'done'}, format='json')
    assert r.data['data']['remarks'] == 'done'


# ---------------------------------------------------------------------
# Employee DOJ
# ---------------------------------------------------------------------
def test_emp_doj_crud_and_eligibility(nurse_client, nurse):
    r = nurse_client.post('/api/emp-doj', {'empNo': 'aa0001', 'doj': '2020-01-15', 'sl': 0, 'al': 0, 'el': 0,
                                           'lop': 0}, format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['createdBy']['id'] == nurse.id

    r = nurse_client.get('/api/emp-doj/emp/AA0001/leave-eligibility')
    assert r.status_code == 200
    assert r.data['data']['eligible'] is True
    assert r.data['data']['leave'] == 'eligible'

    EmployeeDoj.objects.create(emp_no='AA0001', doj=date(2021, 3, 1), sl=2)
    r = nurse_client.get('/api/emp-doj/emp/aa0001/leave-eligibility')
    assert r.data['data']['leave'] == 'Not eligible'
    assert r.data['data']['doj'] == date(2021, 3, 1)

    assert nurse_client.get('/api/emp-doj/emp/ZZ9999/leave-eligibility').status_code == 404


def test_emp_doj_list_filters(nurse_client):
    EmployeeDoj.objects.create(emp_no='AA0001', doj=date(2019, 5, 1))
    EmployeeDoj.objects.create(emp_no='AA0002', doj=date(2023, 5, 1))
    r = nurse_client.get('/api/emp-doj', {'dateFrom': '2020-01-01'})
    assert [d['empNo'] for d in r.data['data']] == ['AA0002']
    r = nurse_client.get('/api/emp-doj')
    assert [d['empNo'] for d in r.data['data']] == ['AA0002', 'AA0001']


# ---------------------------------------------------------------------
# Patients
# ---------------------------------------------------------------------
def test_patient_create_validation_and_conflict(nurse_client):
    payload = {'empId': 'ab12cd', 'patientName': 'Ravi', 'mobileNumber': '0501234567', 'trLocation': 'QOZ 4'}
    r = nurse_client.post('/api/patients', payload, format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['empId'] == 'AB12CD'

    r = nurse_client.post('/api/patients', payload, format='json')
    assert r.status_code == 409

    r = nurse_client.post('/api/patients', dict(payload, empId='AB12'), format='json')
    assert r.status_code == 400
    r = nurse_client.post('/api/patients', dict(payload, empId='XY9999', mobileNumber='12ab'), format='json')
    assert r.status_code == 400


def test_patient_lookups(nurse_client):
    Patient.objects.create(emp_id='AA0001', patient_name='Ravi Kumar', tr_location='QOZ 4', emirates_id='784-1')
    Patient.objects.create(emp_id='BB0002', patient_name='John Mathew', tr_location='SONAPUR CAMP')
    r = nurse_client.get('/api/patients/all', {'q': 'ravi'})
    assert r.data['total'] == 1
    assert r.data['items'][0]['empId'] == 'AA0001'
    r = nurse_client.get('/api/patients/table', {'trLocation': 'SONAPUR CAMP'})
    assert r.data['meta']['total'] == 1
    r = nurse_client.get('/api/patients/tr/QOZ 4')
    assert [p['empId'] for p in r.data['data']] == ['AA0001']
    r = nurse_client.get('/api/patients/emp/bb0002')
    assert r.data['data']['patientName'] == 'John Mathew'
    assert nurse_client.get('/api/patients/emp/ZZ0000').status_code == 404


def test_patient_update_to_existing_emp_id_conflicts(nurse_client):
    Patient.objects.create(emp_id='AA0001', patient_name='A')
    other = Patient.objects.create(emp_id='BB0002', patient_name='B')
    r = nurse_client.patch(f'/api/patients/{other.id}', {'empId': 'aa0001'}, format='json')
    assert r.status_code == 409
    r = nurse_client.patch(f'/api/patients/{other.id}', {'patientName': 'Bob'}, format='json')
    assert r.data['data']['patientName'] == 'Bob'


# ---------------------------------------------------------------------
# Professions
# ---------------------------------------------------------------------
def test_profession_search_matches_all_words(nurse_client):
    Profession.objects.create(name='Steel Fixer', category='Construction')
    Profession.objects.create(name='Steel Fabricator Helper', category='Construction')
    Profession.objects.create(name='Electrician', category='MEP')
    r = nurse_client.get('/api/professions', {'search': 'steel fix'})
    assert [p['name'] for p in r.data['data']] == ['Steel Fixer']
    assert r.data['count'] == 1
    r = nurse_client.get('/api/professions', {'search': ''})
    assert r.data['data'] == []
    r = nurse_client.get('/api/professions', {'search': 'steel', 'limit': 1})
    assert r.data['count'] == 1


def test_profession_categories(nurse_client):
    Profession.objects.create(name='Steel Fixer', category='Construction')
    Profession.objects.create(name='Electrician', category='MEP')
    Profession.objects.create(name='Plumber', category='MEP')
    Profession.objects.create(name='Visitor')
    r = nurse_client.get('/api/professions/categories')
    assert r.data['data'] == ['Construction', 'MEP']
    r = nurse_client.get('/api/professions/category/mep')
    assert r.data['count'] == 2
    assert r.data['category'] == 'mep'


def test_profession_create_is_superadmin_only(nurse_client, super_client):
    payload = {'name': 'Mason', 'category': 'Construction'}
    assert nurse_client.post('/api/professions', payload, format='json').status_code == 403
    r = super_client.post('/api/professions', payload, format='json')
    assert r.status_code == 201
    assert Profession.objects.filter(name='Mason').exists()
