from rest_framework import serializers

from records.models import ClinicVisit, MemberFeedback
from .common import CamelModelSerializer, DateRangeQuerySerializer, UserRefField, clean_text

REQUIRED_VISIT_FIELDS = (
    'date',
    'time',
    'empNo',
    'employeeName',
    'emiratesId',
    'trLocation',
    'mobileNumber',
    'natureOfCase',
    'caseCategory',
)


class MedicineSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True)
    course = serializers.CharField(required=False, allow_blank=True, default='')
    expiryDate = serializers.DateField(required=False, allow_null=True, default=None)


class FollowUpVisitSerializer(serializers.Serializer):
    visitDate = serializers.DateField(required=False, allow_null=True, default=None)
    visitRemarks = serializers.CharField(required=False, allow_blank=True, default='')


class ClinicVisitSerializer(CamelModelSerializer):
    nurse_assessment = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    secondary_diagnosis = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    secondary_diagnosis_referral = serializers.ListField(
        child=serializers.CharField(allow_blank=True), required=False
    )
    medicines = serializers.ListField(child=MedicineSerializer(), required=False)
    follow_up_visits = serializers.ListField(child=FollowUpVisitSerializer(), required=False)
    created_by = UserRefField()

    class Meta:
        model = ClinicVisit
        exclude = ['updated_at']
        read_only_fields = ['id', 'created_by', 'created_at']

    def validate_employee_name(self, v):
        return clean_text(v)

    def validate_emp_no(self, v):
        return (v or '').strip().upper()

    def validate_visit_status(self, v):
        return (v or '').strip().upper()


class VisitListQuerySerializer(DateRangeQuerySerializer):
    emiratesId = serializers.CharField(required=False, allow_blank=True)
    empNo = serializers.CharField(required=False, allow_blank=True)
    visitStatus = serializers.CharField(required=False, allow_blank=True)
    tokenNo = serializers.CharField(required=False, allow_blank=True)


class VisitSearchQuerySerializer(serializers.Serializer):
    empNo = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateField(required=False)

    def validate(self, attrs):
        if not attrs.get('empNo') and not attrs.get('date'):
            raise serializers.ValidationError('Provide empNo, date, or both')
        return attrs


class EmpNoQuerySerializer(serializers.Serializer):
    empNo = serializers.CharField()

    def validate_empNo(self, v):
        v = (v or '').strip().upper()
        if not v:
            raise serializers.ValidationError('empNo is required')
        return v


class MemberFeedbackSerializer(CamelModelSerializer):
    field_aliases = {'clinic_visit': 'clinicId'}
    created_by = UserRefField()

    class Meta:
        model = MemberFeedback
        fields = [
            'id', 'employee_id', 'clinic_visit', 'manager', 'date_of_call',
            'was_treatment_effective', 'technician_feedback',
            'was_treatment_effective1', 'technician_feedback1',
            'ref_req_to_specialist', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def validate_employee_id(self, v):
        return (v or '').strip().upper()
