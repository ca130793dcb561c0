"""
Django admin registrations for the records models.

Superusers can inspect visits, token counters and the employee master
data at ``/admin/``.  Token counters are read-only there; they are only
ever advanced by the token sequencer.
"""

from django.contrib import admin

from .models import (
    AuditEvent,
    CaseResolution,
    ClinicVisit,
    DailyTokenCounter,
    EmployeeDoj,
    HospitalCase,
    IpAdmission,
    Isolation,
    MemberFeedback,
    Patient,
    Profession,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'location_id', 'is_staff', 'is_superuser')
    list_filter = ('role', 'location_id')
    search_fields = ('username', 'first_name', 'last_name', 'email')


@admin.register(DailyTokenCounter)
class DailyTokenCounterAdmin(admin.ModelAdmin):
    list_display = ('location_id', 'date_key', 'seq', 'updated_at')
    list_filter = ('location_id',)
    search_fields = ('location_id', 'date_key')
    readonly_fields = ('location_id', 'date_key', 'seq', 'created_at', 'updated_at')


@admin.register(ClinicVisit)
class ClinicVisitAdmin(admin.ModelAdmin):
    list_display = ('id', 'token_no', 'location_id', 'date', 'emp_no', 'employee_name', 'sick_leave_status')
    list_filter = ('location_id', 'referral', 'sick_leave_status')
    search_fields = ('token_no', 'emp_no', 'employee_name', 'emirates_id')
    date_hierarchy = 'date'


@admin.register(HospitalCase)
class HospitalCaseAdmin(admin.ModelAdmin):
    list_display = ('id', 'emp_no', 'employee_name', 'hospital_name', 'date_of_admission', 'status')
    list_filter = ('location_id', 'status')
    search_fields = ('emp_no', 'employee_name', 'emirates_id')


@admin.register(Isolation)
class IsolationAdmin(admin.ModelAdmin):
    list_display = ('id', 'emp_no', 'employee_name', 'isolation_type', 'date_from', 'date_to', 'current_status')
    list_filter = ('location_id', 'current_status')
    search_fields = ('emp_no', 'employee_name', 'emirates_id')


@admin.register(IpAdmission)
class IpAdmissionAdmin(admin.ModelAdmin):
    list_display = ('id', 'emp_no', 'hospital_name', 'tr_location', 'source', 'created_at')
    list_filter = ('source', 'tr_location')
    search_fields = ('emp_no', 'hospital_name')


@admin.register(CaseResolution)
class CaseResolutionAdmin(admin.ModelAdmin):
    list_display = ('id', 'emp_no', 'resolution_status', 'resolution_date', 'resolved_by')
    list_filter = ('resolution_status',)
    search_fields = ('emp_no',)


@admin.register(MemberFeedback)
class MemberFeedbackAdmin(admin.ModelAdmin):
    list_display = ('id', 'employee_id', 'clinic_visit', 'created_by', 'created_at')
    search_fields = ('employee_id',)


@admin.register(EmployeeDoj)
class EmployeeDojAdmin(admin.ModelAdmin):
    list_display = ('emp_no', 'doj', 'sl', 'al', 'el', 'lop')
    search_fields = ('emp_no',)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('emp_id', 'patient_name', 'tr_location', 'mobile_number')
    list_filter = ('tr_location',)
    search_fields = ('emp_id', 'patient_name', 'emirates_id')


@admin.register(Profession)
class ProfessionAdmin(admin.ModelAdmin):
    list_display = ('name', 'category')
    list_filter = ('category',)
    search_fields = ('name', 'category')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('object_id', 'user__username')
