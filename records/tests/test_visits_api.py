"""
Clinic visit endpoints: intake with token issuance, location scoping and
the manager roll-ups.
"""
from datetime import timedelta

import pytest
from django.utils import timezone

from records.models import ClinicVisit, MemberFeedback
from .conftest import QOZ, SONAPUR

pytestmark = pytest.mark.django_db


def visit_payload(**overrides):
    data = {
        'date': timezone.localdate().isoformat(),
        'time': '09:30',
        'empNo': 'ab1234',
        'employeeName': 'Ravi Kumar',
        'emiratesId': '784-1990-1234567-1',
        'trLocation': 'AL QOUZ CAMP 4',
        'mobileNumber': '0501234567',
        'natureOfCase': 'Illness',
        'caseCategory': 'General',
        'nurseAssessment': ['Fever', 'Headache'],
        'medicines': [{'name': 'Paracetamol', 'course': '3 days', 'expiryDate': '2026-08-01'}],
    }
    data.update(overrides)
    return data


def make_visit(location=QOZ, emp_no='AB1234', days_ago=0, **fields):
    return ClinicVisit.objects.create(
        location_id=location,
        emp_no=emp_no,
        employee_name=fields.pop('employee_name', 'Someone'),
        date=timezone.localdate() - timedelta(days=days_ago),
        token_no=fields.pop('token_no', f'T-{emp_no}-{days_ago}'),
        **fields,
    )


def test_create_visit_issues_token(nurse_client):
    r = nurse_client.post('/api/clinic', visit_payload(), format='json')
    assert r.status_code == 201, r.data
    data = r.data['data']
    today = timezone.localdate()
    assert data['tokenNo'] == f'QOZ-{today:%d%m}-0001'
    assert data['locationId'] == QOZ
    assert data['empNo'] == 'AB1234'
    assert data['createdBy']['name'] == 'nurse1'

    r = nurse_client.post('/api/clinic', visit_payload(), format='json')
    assert r.data['data']['tokenNo'].endswith('-0002')


def test_create_visit_token_prefix_follows_request(nurse_client):
    r = nurse_client.post('/api/clinic', visit_payload(sentTo='External Provider', eligibilityForSickLeave=True),
                          format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['tokenNo'].startswith('EL-QOZXT-')


def test_create_visit_keeps_client_token(nurse_client):
    r = nurse_client.post('/api/clinic', visit_payload(tokenNo='QOZ-0101-0042'), format='json')
    assert r.status_code == 201
    assert r.data['data']['tokenNo'] == 'QOZ-0101-0042'


def test_create_visit_requires_fields(nurse_client):
    payload = visit_payload()
    del payload['emiratesId']
    payload['caseCategory'] = ''
    r = nurse_client.post('/api/clinic', payload, format='json')
    assert r.status_code == 400
    assert 'emiratesId' in r.data['detail']
    assert 'caseCategory' in r.data['detail']
    assert not ClinicVisit.objects.exists()


def test_referral_code_defaults_to_token(nurse_client):
    r = nurse_client.post('/api/clinic', visit_payload(referral=True, referredToHospital='Rashid Hospital'),
                          format='json')
    data = r.data['data']
    assert data['referralCode'] == data['tokenNo']

    visit_id = nurse_client.post('/api/clinic', visit_payload(), format='json').data['data']['id']
    r = nurse_client.patch(f'/api/clinic/{visit_id}', {'referral': True}, format='json')
    assert r.status_code == 200
    assert r.data['data']['referralCode'] == r.data['data']['tokenNo']


def test_nurse_sees_only_own_location(nurse_client):
    mine = make_visit(QOZ, 'AA0001')
    other = make_visit(SONAPUR, 'BB0002')
    r = nurse_client.get('/api/clinic')
    assert r.status_code == 200
    assert [v['id'] for v in r.data['data']] == [mine.id]
    assert r.data['meta'] == {'total': 1, 'page': 1, 'limit': 50}

    assert nurse_client.get(f'/api/clinic/{other.id}').status_code == 403
    assert nurse_client.get('/api/clinic/999999').status_code == 404


def test_list_filters_and_limit_cap(nurse_client):
    make_visit(QOZ, 'AA0001', days_ago=3)
    make_visit(QOZ, 'AA0002', days_ago=0, visit_status='OPEN')
    r = nurse_client.get('/api/clinic', {'empNo': 'aa0001'})
    assert [v['empNo'] for v in r.data['data']] == ['AA0001']
    r = nurse_client.get('/api/clinic', {'visitStatus': 'open'})
    assert [v['empNo'] for v in r.data['data']] == ['AA0002']
    r = nurse_client.get('/api/clinic', {'limit': 1000})
    assert r.data['meta']['limit'] == 200


def test_my_location_requires_location(manager_client, nurse_client):
    make_visit(QOZ)
    assert nurse_client.get('/api/clinic/my-location').data['meta']['total'] == 1
    r = manager_client.get('/api/clinic/my-location')
    assert r.status_code == 400
    assert r.data['ok'] is False


def test_employee_info_by_token(nurse_client):
    make_visit(QOZ, 'AA0001', token_no='QOZ-0512-0009', employee_name='Ali')
    r = nurse_client.get('/api/clinic/employee/QOZ-0512-0009')
    assert r.status_code == 200
    assert r.data['data']['employeeName'] == 'Ali'
    assert nurse_client.get('/api/clinic/employee/NOPE').status_code == 404


def test_search_requires_a_filter(nurse_client):
    make_visit(QOZ, 'AA0001')
    assert nurse_client.get('/api/clinic/search').status_code == 400
    r = nurse_client.get('/api/clinic/search', {'empNo': 'AA0001'})
    assert r.data['meta']['count'] == 1


def test_emp_summary_and_history(nurse_client):
    make_visit(QOZ, 'AA0001', days_ago=1, provider_name='Dr Clinic', sick_leave_status='Approved')
    make_visit(QOZ, 'AA0001', days_ago=10, referral=True, visit_status='OPEN', sent_to='NMC')
    make_visit(QOZ, 'AA0001', days_ago=200)
    r = nurse_client.get('/api/clinic/emp-summary', {'empNo': 'aa0001'})
    data = r.data['data']
    assert data['allTimeTotalVisits'] == 3
    assert data['last90Days']['count'] == 2
    assert [v['provider'] for v in data['last90Days']['visits']] == ['Dr Clinic', 'NMC']
    assert data['sickLeaveApprovedCount'] == 1
    assert data['totalReferrals'] == 1
    assert data['openReferrals'] == 1

    r = nurse_client.get('/api/clinic/emp-history', {'empNo': 'AA0001'})
    assert len(r.data['data']) == 2
    assert nurse_client.get('/api/clinic/emp-summary').status_code == 400


def test_manager_endpoints_reject_nurses(nurse_client):
    assert nurse_client.get('/api/clinic/manager/prioritized').status_code == 403
    assert nurse_client.get('/api/clinic/manager/by-employee').status_code == 403


def test_manager_without_locations(super_client):
    assert super_client.get('/api/clinic/manager/prioritized').status_code == 403


def test_prioritized_ranking(manager_client, manager):
    # rank 1: repeat visitor with approved sick leave
    make_visit(QOZ, 'R1AAAA', days_ago=2, sick_leave_status='Approved')
    make_visit(QOZ, 'R1AAAA', days_ago=1)
    # rank 2: repeat visitor
    make_visit(QOZ, 'R2AAAA', days_ago=4)
    make_visit(QOZ, 'R2AAAA', days_ago=3)
    # rank 3: stale referral
    make_visit(QOZ, 'R3AAAA', days_ago=8, referral=True)
    # rank 4: single recent visit
    make_visit(QOZ, 'R4AAAA', days_ago=0)
    # excluded: already called back
    fb_visit = make_visit(QOZ, 'EXAAAA', days_ago=1)
    make_visit(QOZ, 'EXAAAA', days_ago=0)
    MemberFeedback.objects.create(employee_id='EXAAAA', clinic_visit=fb_visit, created_by=manager)
    # outside window or location
    make_visit(QOZ, 'OLDAAA', days_ago=45)
    make_visit(SONAPUR, 'SONAAA', days_ago=1)

    r = manager_client.get('/api/clinic/manager/prioritized')
    assert r.status_code == 200
    rows = r.data['data']
    assert [(row['empNo'], row['rank']) for row in rows] == [
        ('R1AAAA', 1), ('R2AAAA', 2), ('R3AAAA', 3), ('R4AAAA', 4),
    ]
    assert rows[0]['visitCount'] == 2
    assert rows[0]['date'] == (timezone.localdate() - timedelta(days=1)).isoformat()
    assert r.data['meta'] == {'returned': 4, 'excludedEmpNosCount': 1}


def test_by_employee_grouping(manager_client):
    make_visit(QOZ, 'AA0001', days_ago=3)
    make_visit(QOZ, 'AA0001', days_ago=1)
    make_visit(QOZ, 'BB0002', days_ago=2, sick_leave_status='Approved')
    r = manager_client.get('/api/clinic/manager/by-employee')
    groups = r.data['data']
    assert [g['empNo'] for g in groups] == ['BB0002', 'AA0001']
    assert groups[1]['visitCount'] == 2
    assert len(groups[1]['visits']) == 2


def test_member_feedback_create_and_list(manager_client, nurse_client):
    visit = make_visit(QOZ, 'AA0001')
    r = manager_client.post('/api/member-feedback', {
        'employeeId': 'aa0001', 'clinicId': visit.id, 'wasTreatmentEffective': 'Yes',
    }, format='json')
    assert r.status_code == 201, r.data
    r = manager_client.get('/api/member-feedback', {'employeeId': 'AA0001'})
    assert r.data['meta']['total'] == 1
    assert nurse_client.get('/api/member-feedback').status_code == 403


def test_delete_visit(nurse_client):
    visit = make_visit(QOZ)
    r = nurse_client.delete(f'/api/clinic/{visit.id}')
    assert r.status_code == 200
    assert not ClinicVisit.objects.filter(pk=visit.id).exists()
