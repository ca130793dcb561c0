"""
URL mappings for the records API.

Paths follow the front-end route table, so trailing slashes are
omitted.  Names are only given where tests or redirects reverse them.
"""
from django.urls import path

from .auth_views import jwt_logout_view, jwt_refresh_view, login_view, me_view
from .views import employees, handi, health, hospital, visits

urlpatterns = [
    path('healthz', health.healthz, name='healthz'),

    # auth
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', jwt_logout_view, name='jwt_logout_view'),
    path('api/auth/me', me_view, name='me_view'),

    # clinic visits
    path('api/clinic', visits.visits, name='clinic_visits'),
    path('api/clinic/my-location', visits.my_location_visits),
    path('api/clinic/employee/<str:token_no>', visits.employee_info),
    path('api/clinic/search', visits.search_visits),
    path('api/clinic/emp-summary', visits.emp_summary),
    path('api/clinic/emp-history', visits.emp_history),
    path('api/clinic/manager/by-employee', visits.manager_by_employee),
    path('api/clinic/manager/prioritized', visits.manager_prioritized, name='manager_prioritized'),
    path('api/clinic/export/excel', visits.export_excel),
    path('api/clinic/import/excel', visits.import_excel),
    path('api/clinic/<int:pk>', visits.visit_detail, name='clinic_visit_detail'),

    # hospital
    path('api/hospital', hospital.hospital_cases),
    path('api/hospital/my-location', hospital.hospital_my_location),
    path('api/hospital/employee/search', hospital.hospital_employee_search),
    path('api/hospital/manager/discharge-status', hospital.discharge_status),
    path('api/hospital/import/excel', hospital.hospital_import),
    path('api/hospital/<int:pk>', hospital.hospital_case_detail),

    # isolation
    path('api/isolation', hospital.isolations),
    path('api/isolation/my-location', hospital.isolation_my_location),
    path('api/isolation/import/excel', hospital.isolation_import),
    path('api/isolation/<int:pk>', hospital.isolation_detail),

    # H&I
    path('api/ip-admission', handi.ip_admissions),
    path('api/ip-admission/from-hospital-case', handi.ip_admission_from_hospital_case),
    path('api/ip-admission/employee-not-in-his', handi.ip_admission_manual),
    path('api/ip-admission/<int:pk>', handi.ip_admission_detail),
    path('api/resolution', handi.resolutions),
    path('api/resolution/<int:pk>', handi.resolution_detail),
    path('api/member-feedback', visits.member_feedback),

    # employee master data
    path('api/emp-doj', employees.emp_doj),
    path('api/emp-doj/import/excel', employees.emp_doj_import),
    path('api/emp-doj/emp/<str:emp_no>/leave-eligibility', employees.leave_eligibility),
    path('api/emp-doj/<int:pk>', employees.emp_doj_detail),
    path('api/patients', employees.patients),
    path('api/patients/all', employees.patients_all),
    path('api/patients/table', employees.patients_table),
    path('api/patients/import-excel', employees.patients_import),
    path('api/patients/emp/<str:emp_id>', employees.patient_by_emp_id),
    path('api/patients/tr/<str:tr_location>', employees.patients_by_tr),
    path('api/patients/<int:pk>', employees.patient_detail),
    path('api/professions', employees.professions),
    path('api/professions/categories', employees.profession_categories),
    path('api/professions/category/<str:category>', employees.professions_by_category),
    path('api/professions/upload-excel', employees.profession_upload),
]
