from rest_framework import serializers

from records.models import HospitalCase, Isolation
from .common import CamelModelSerializer, DateRangeQuerySerializer, UserRefField, clean_text


class HospitalFollowUpSerializer(serializers.Serializer):
    date = serializers.DateField(required=False, allow_null=True, default=None)
    remarks = serializers.CharField(required=False, allow_blank=True, default='')


class HospitalCaseSerializer(CamelModelSerializer):
    secondary_diagnosis = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    follow_up = serializers.ListField(child=HospitalFollowUpSerializer(), required=False)
    created_by = UserRefField()

    class Meta:
        model = HospitalCase
        exclude = ['updated_at']
        read_only_fields = ['id', 'created_by', 'created_at']

    def validate_emp_no(self, v):
        return (v or '').strip().upper()

    def validate_employee_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('employeeName is required')
        return v


class HospitalListQuerySerializer(DateRangeQuerySerializer):
    empNo = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)
    hospitalName = serializers.CharField(required=False, allow_blank=True)


class EmployeeDateQuerySerializer(serializers.Serializer):
    empNo = serializers.CharField()
    date = serializers.DateField()

    def validate_empNo(self, v):
        return (v or '').strip().upper()


class IsolationSerializer(CamelModelSerializer):
    field_aliases = {'isolation_type': 'type'}
    created_by = UserRefField()

    class Meta:
        model = Isolation
        exclude = ['updated_at']
        read_only_fields = ['id', 'created_by', 'created_at']

    def validate_emp_no(self, v):
        return (v or '').strip().upper()

    def validate_employee_name(self, v):
        return clean_text(v)

    def validate(self, attrs):
        date_from, date_to = attrs.get('date_from'), attrs.get('date_to')
        if date_from and date_to and date_to < date_from:
            raise serializers.ValidationError({'dateTo': 'dateTo must not be before dateFrom'})
        return attrs


class IsolationListQuerySerializer(DateRangeQuerySerializer):
    empNo = serializers.CharField(required=False, allow_blank=True)
    currentStatus = serializers.CharField(required=False, allow_blank=True)
