from rest_framework import serializers

from records.models import EmployeeDoj, Patient, Profession, emp_id_validator
from .common import CamelModelSerializer, PageQuerySerializer, UserRefField, clean_text


class EmployeeDojSerializer(CamelModelSerializer):
    created_by = UserRefField()

    class Meta:
        model = EmployeeDoj
        fields = ['id', 'emp_no', 'doj', 'sl', 'al', 'el', 'lop', 'created_by', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def validate_emp_no(self, v):
        v = (v or '').strip().upper()
        if not v:
            raise serializers.ValidationError('empNo is required')
        return v


class EmpDojListQuerySerializer(PageQuerySerializer):
    empNo = serializers.CharField(required=False, allow_blank=True)
    dateFrom = serializers.DateField(required=False)
    dateTo = serializers.DateField(required=False)


class PatientSerializer(CamelModelSerializer):

    class Meta:
        model = Patient
        fields = [
            'id', 'emp_id', 'patient_name', 'emirates_id', 'insurance_id',
            'tr_location', 'mobile_number', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        # duplicates are reported as 409 by the view
        extra_kwargs = {'emp_id': {'validators': [emp_id_validator]}}

    def to_internal_value(self, data):
        data = dict(data.items())
        if 'empId' in data and isinstance(data['empId'], str):
            data['empId'] = data['empId'].strip().upper()
        return super().to_internal_value(data)

    def validate_patient_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('patientName is required')
        return v


class PatientListQuerySerializer(PageQuerySerializer):
    trLocation = serializers.CharField(required=False, allow_blank=True)
    q = serializers.CharField(required=False, allow_blank=True)


class ProfessionSerializer(CamelModelSerializer):

    class Meta:
        model = Profession
        fields = ['id', 'name', 'category', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_name(self, v):
        return clean_text(v)

    def validate_category(self, v):
        return clean_text(v)


class ProfessionSearchQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, default='')
    limit = serializers.IntegerField(required=False, min_value=1, max_value=200, default=10)
    category = serializers.CharField(required=False, allow_blank=True)
