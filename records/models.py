"""
Database models for the occupational-health records backend.

These models capture the clinic's working records: staff users scoped
to locations, clinic visits with their daily visit tokens, hospital
admissions, isolation cases, H&I (hospitalisation and injury) follow-up
records and the employee master data used to pre-fill forms.  Field
names follow Django conventions; the API exposes them in camelCase.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import RegexValidator
from django.db import models


class User(AbstractUser):
    """Clinic staff account.

    ``maleNurse`` users work at a single clinic (``location_id``);
    managers and superadmins supervise the sites listed in
    ``manager_locations``.
    """
    ROLE_NURSE = 'maleNurse'
    ROLE_MANAGER = 'manager'
    ROLE_SUPERADMIN = 'superadmin'
    ROLE_CHOICES = [
        (ROLE_NURSE, 'Male nurse'),
        (ROLE_MANAGER, 'Manager'),
        (ROLE_SUPERADMIN, 'Super administrator'),
    ]
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_NURSE)
    location_id = models.CharField(max_length=100, blank=True, default='', db_index=True)
    manager_locations = models.JSONField(default=list, blank=True)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class DailyTokenCounter(models.Model):
    """Per-location, per-day sequence backing visit token numbers."""
    location_id = models.CharField(max_length=100)
    date_key = models.CharField(max_length=10, help_text="YYYY-MM-DD in server-local time")
    seq = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['location_id', 'date_key'], name='uniq_token_counter_location_day'),
        ]

    def __str__(self) -> str:
        return f"{self.location_id} {self.date_key}: {self.seq}"


class ClinicVisit(models.Model):
    """A single walk-in visit recorded by the clinic nurse."""
    location_id = models.CharField(max_length=100, blank=True, default='', db_index=True)
    date = models.DateField(null=True, blank=True, db_index=True)
    time = models.CharField(max_length=20, blank=True, default='')
    emp_no = models.CharField(max_length=50, blank=True, default='', db_index=True)
    employee_name = models.CharField(max_length=255, blank=True, default='')
    date_of_joining = models.CharField(max_length=50, blank=True, default='')
    eligibility_for_sick_leave = models.BooleanField(null=True, blank=True)
    emirates_id = models.CharField(max_length=50, blank=True, default='', db_index=True)
    insurance_id = models.CharField(max_length=100, blank=True, default='')
    tr_location = models.CharField(max_length=100, blank=True, default='')
    mobile_number = models.CharField(max_length=30, blank=True, default='')

    # assessment
    nature_of_case = models.CharField(max_length=255, blank=True, default='')
    case_category = models.CharField(max_length=255, blank=True, default='')
    nurse_assessment = models.JSONField(default=list, blank=True)
    symptom_duration = models.CharField(max_length=100, blank=True, default='')
    temperature = models.CharField(max_length=20, blank=True, default='')
    blood_pressure = models.CharField(max_length=20, blank=True, default='')
    heart_rate = models.CharField(max_length=20, blank=True, default='')
    others = models.TextField(blank=True, default='')

    # routing & diagnosis
    token_no = models.CharField(max_length=40, blank=True, default='', db_index=True)
    sent_to = models.CharField(max_length=100, blank=True, default='')
    provider_name = models.CharField(max_length=255, blank=True, default='')
    doctor_name = models.CharField(max_length=255, blank=True, default='')
    primary_diagnosis = models.CharField(max_length=255, blank=True, default='')
    secondary_diagnosis = models.JSONField(default=list, blank=True)
    medicines = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)

    # sick leave
    sick_leave_status = models.CharField(max_length=50, blank=True, default='', db_index=True)
    sick_leave_start_date = models.DateField(null=True, blank=True)
    sick_leave_end_date = models.DateField(null=True, blank=True)
    total_sick_leave_days = models.CharField(max_length=20, blank=True, default='')
    remarks = models.TextField(blank=True, default='')

    # referral
    referral = models.BooleanField(default=False, db_index=True)
    referral_code = models.CharField(max_length=40, blank=True, default='')
    referral_type = models.CharField(max_length=100, blank=True, default='')
    referred_to_hospital = models.CharField(max_length=255, blank=True, default='')
    visit_date_referral = models.DateField(null=True, blank=True)
    specialist_type = models.CharField(max_length=255, blank=True, default='')
    doctor_name_referral = models.CharField(max_length=255, blank=True, default='')
    investigation_reports = models.TextField(blank=True, default='')
    primary_diagnosis_referral = models.CharField(max_length=255, blank=True, default='')
    secondary_diagnosis_referral = models.JSONField(default=list, blank=True)
    nurse_remarks_referral = models.TextField(blank=True, default='')
    insurance_approval_requested = models.BooleanField(default=False)
    follow_up_required = models.BooleanField(default=False)
    follow_up_visits = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)

    # closure
    visit_status = models.CharField(max_length=30, blank=True, default='', db_index=True)
    final_remarks = models.TextField(blank=True, default='')
    ip_admission_required = models.BooleanField(default=False)

    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='clinic_visits'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-date', '-id']
        indexes = [
            models.Index(fields=['location_id', 'date'], name='visit_location_date_idx'),
            models.Index(fields=['emp_no', 'date'], name='visit_emp_date_idx'),
        ]

    def save(self, *args, **kwargs):
        self.emp_no = (self.emp_no or '').strip().upper()
        self.visit_status = (self.visit_status or '').strip().upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.token_no or self.pk} {self.emp_no}"


class HospitalCase(models.Model):
    """Hospital admission raised from a clinic visit, tracked to discharge."""
    location_id = models.CharField(max_length=100, blank=True, default='', db_index=True)
    clinic_visit_token = models.CharField(max_length=40, blank=True, default='')
    emp_no = models.CharField(max_length=50, db_index=True)
    employee_name = models.CharField(max_length=255)
    emirates_id = models.CharField(max_length=50)
    insurance_id = models.CharField(max_length=100, blank=True, default='')
    tr_location = models.CharField(max_length=100, blank=True, default='')
    mobile_number = models.CharField(max_length=30, blank=True, default='')
    hospital_name = models.CharField(max_length=255, blank=True, default='')
    date_of_admission = models.DateField(null=True, blank=True, db_index=True)
    nature_of_case = models.CharField(max_length=255, blank=True, default='')
    case_category = models.CharField(max_length=255, blank=True, default='')
    primary_diagnosis = models.CharField(max_length=255, blank=True, default='')
    secondary_diagnosis = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=50, blank=True, default='', db_index=True)
    discharge_summary_received = models.BooleanField(default=False)
    date_of_discharge = models.DateField(null=True, blank=True)
    days_hospitalized = models.PositiveIntegerField(null=True, blank=True)
    follow_up = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)
    fitness_status = models.CharField(max_length=100, blank=True, default='')
    isolation_required = models.BooleanField(default=False)
    final_remarks = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='hospital_cases'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.emp_no} @ {self.hospital_name or '-'}"


class Isolation(models.Model):
    """Employee isolated at a facility after a clinic or hospital visit."""
    location_id = models.CharField(max_length=100, blank=True, default='', db_index=True)
    clinic_visit_token = models.CharField(max_length=40, blank=True, default='')
    emp_no = models.CharField(max_length=50, db_index=True)
    isolation_type = models.CharField(max_length=100, blank=True, default='')
    employee_name = models.CharField(max_length=255)
    emirates_id = models.CharField(max_length=50)
    insurance_id = models.CharField(max_length=100, blank=True, default='')
    mobile_number = models.CharField(max_length=30, blank=True, default='')
    tr_location = models.CharField(max_length=100, blank=True, default='')
    isolated_in = models.CharField(max_length=255, blank=True, default='')
    isolation_reason = models.CharField(max_length=255, blank=True, default='')
    nationality = models.CharField(max_length=100, blank=True, default='')
    sl_upto = models.CharField(max_length=50, blank=True, default='')
    date_from = models.DateField(null=True, blank=True, db_index=True)
    date_to = models.DateField(null=True, blank=True)
    current_status = models.CharField(max_length=100, blank=True, default='')
    remarks = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='isolations'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.emp_no} isolated in {self.isolated_in or '-'}"


class IpAdmission(models.Model):
    """H&I in-patient admission follow-up, optionally linked to a hospital case."""
    emp_no = models.CharField(max_length=50, db_index=True)
    date_of_admission = models.DateField(null=True, blank=True)
    hospital_name = models.CharField(max_length=255, blank=True, default='')
    tr_location = models.CharField(max_length=100, blank=True, default='', db_index=True)
    hospital_case = models.ForeignKey(
        HospitalCase, null=True, blank=True, on_delete=models.SET_NULL, related_name='ip_admissions'
    )
    hi_managers = models.CharField(max_length=255, blank=True, default='')
    admission_mode = models.CharField(max_length=100, blank=True, default='')
    admission_type = models.CharField(max_length=100, blank=True, default='')
    insurance_approval_status = models.CharField(max_length=100, blank=True, default='')
    treatment_undergone = models.TextField(blank=True, default='')
    im_visit_status = models.CharField(max_length=100, blank=True, default='')
    no_of_visits = models.PositiveIntegerField(null=True, blank=True)
    technician_visits = models.JSONField(default=list, blank=True)
    treatment_location = models.CharField(max_length=255, blank=True, default='')
    place_of_location = models.CharField(max_length=255, blank=True, default='')
    post_recovery_location = models.CharField(max_length=255, blank=True, default='')
    fit_to_travel = models.BooleanField(null=True, blank=True)
    post_rehab_required = models.BooleanField(null=True, blank=True)
    duration_of_rehab = models.PositiveIntegerField(null=True, blank=True)
    follow_up_required = models.BooleanField(null=True, blank=True)
    rehab_extension = models.BooleanField(null=True, blank=True)
    rehab_extension_duration = models.PositiveIntegerField(null=True, blank=True)
    member_resume_to_work = models.DateField(null=True, blank=True)
    technician_feedback_form = models.TextField(blank=True, default='')
    discharged_hi = models.BooleanField(null=True, blank=True)
    dod_hi = models.DateField(null=True, blank=True)
    source = models.CharField(max_length=50, blank=True, default='')
    case_type_change = models.CharField(max_length=100, blank=True, default='')
    discharge_comments = models.TextField(blank=True, default='')
    case_type_change_comments = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    SOURCE_HOSPITAL = 'HOSPITAL'
    SOURCE_MANUAL = 'MANUAL'

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"IP {self.emp_no} ({self.source or '-'})"


class CaseResolution(models.Model):
    """Closure record for an H&I case."""
    ip_admission = models.ForeignKey(
        IpAdmission, null=True, blank=True, on_delete=models.CASCADE, related_name='resolutions'
    )
    hospital_case = models.ForeignKey(
        HospitalCase, null=True, blank=True, on_delete=models.SET_NULL, related_name='resolutions'
    )
    emp_no = models.CharField(max_length=50, blank=True, default='', db_index=True)
    resolution_status = models.CharField(max_length=50, blank=True, default='')
    resolution_date = models.DateField(null=True, blank=True)
    outcome = models.CharField(max_length=255, blank=True, default='')
    remarks = models.TextField(blank=True, default='')
    resolved_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='case_resolutions'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']


class MemberFeedback(models.Model):
    """Manager's follow-up call with an employee after treatment."""
    employee_id = models.CharField(max_length=50, blank=True, default='', db_index=True)
    clinic_visit = models.ForeignKey(
        ClinicVisit, null=True, blank=True, on_delete=models.SET_NULL, related_name='feedback'
    )
    manager = models.CharField(max_length=255, blank=True, default='')
    date_of_call = models.DateField(null=True, blank=True)
    was_treatment_effective = models.CharField(max_length=50, blank=True, default='')
    technician_feedback = models.TextField(blank=True, default='')
    was_treatment_effective1 = models.CharField(max_length=50, blank=True, default='')
    technician_feedback1 = models.TextField(blank=True, default='')
    ref_req_to_specialist = models.CharField(max_length=50, blank=True, default='')
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='member_feedback'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']


class EmployeeDoj(models.Model):
    """Date of joining and recent leave balances per employee."""
    emp_no = models.CharField(max_length=50, db_index=True)
    doj = models.DateField(null=True, blank=True)
    sl = models.FloatField(null=True, blank=True, help_text="sick leave days, last 3 months")
    al = models.FloatField(null=True, blank=True, help_text="annual leave days, last 6 months")
    el = models.FloatField(null=True, blank=True, help_text="emergency leave days, last 6 months")
    lop = models.FloatField(null=True, blank=True, help_text="loss-of-pay days, last 3 months")
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='employee_doj_records'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at', '-id']

    def __str__(self) -> str:
        return f"{self.emp_no} DOJ {self.doj}"


emp_id_validator = RegexValidator(r'^[A-Z0-9]{6}$', 'empId must be 6 uppercase letters or digits')
mobile_validator = RegexValidator(r'^[0-9]{10,15}$', 'mobileNumber must be 10-15 digits')


class Patient(models.Model):
    """Employee master record used to pre-fill visit forms."""
    emp_id = models.CharField(max_length=6, unique=True, validators=[emp_id_validator])
    patient_name = models.CharField(max_length=255)
    emirates_id = models.CharField(max_length=50, blank=True, default='', db_index=True)
    insurance_id = models.CharField(max_length=100, blank=True, default='')
    tr_location = models.CharField(max_length=100, blank=True, default='', db_index=True)
    mobile_number = models.CharField(max_length=15, blank=True, default='', validators=[mobile_validator])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.emp_id} {self.patient_name}"


class Profession(models.Model):
    """Profession lookup entry, grouped by category."""
    name = models.CharField(max_length=255, db_index=True)
    category = models.CharField(max_length=255, blank=True, default='', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']
        indexes = [models.Index(fields=['category', 'name'], name='profession_category_name_idx')]

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]
