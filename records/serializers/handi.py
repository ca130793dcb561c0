from rest_framework import serializers

from records.models import CaseResolution, IpAdmission
from .common import CamelModelSerializer, PageQuerySerializer, UserRefField


class TechnicianVisitSerializer(serializers.Serializer):
    technicianFeedback = serializers.CharField(required=False, allow_blank=True, default='')
    physicianFeedback = serializers.CharField(required=False, allow_blank=True, default='')


class IpAdmissionSerializer(CamelModelSerializer):
    field_aliases = {'discharged_hi': 'dischargedHI', 'dod_hi': 'dodHI'}
    technician_visits = serializers.ListField(child=TechnicianVisitSerializer(), required=False)

    class Meta:
        model = IpAdmission
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_emp_no(self, v):
        return (v or '').strip().upper()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        case = instance.hospital_case
        if case is not None:
            data['hospitalCase'] = {
                'id': case.id,
                'employeeName': case.employee_name,
                'hospitalName': case.hospital_name,
                'status': case.status,
                'locationId': case.location_id,
            }
        return data


class FromHospitalCaseSerializer(serializers.Serializer):
    hospitalCase = serializers.IntegerField()
    hiManagers = serializers.CharField()
    caseTypeChange = serializers.CharField()


class ManualAdmissionSerializer(serializers.Serializer):
    empNo = serializers.CharField()
    dateOfAdmission = serializers.DateField()
    hospitalName = serializers.CharField()
    trLocation = serializers.CharField()
    hiManagers = serializers.CharField()
    caseTypeChange = serializers.CharField()
    technicianVisits = serializers.ListField(child=TechnicianVisitSerializer(), required=False)


# exact-match filters accepted by the admission list
IP_EXACT_FILTERS = {
    'empNo': 'emp_no',
    'hospitalName': 'hospital_name',
    'trLocation': 'tr_location',
    'hiManagers': 'hi_managers',
    'admissionMode': 'admission_mode',
    'admissionType': 'admission_type',
    'insuranceApprovalStatus': 'insurance_approval_status',
    'imVisitStatus': 'im_visit_status',
    'treatmentLocation': 'treatment_location',
    'placeOfLocation': 'place_of_location',
    'postRecoveryLocation': 'post_recovery_location',
    'source': 'source',
    'caseTypeChange': 'case_type_change',
    'hospitalCase': 'hospital_case_id',
}
IP_BOOLEAN_FILTERS = {
    'fitToTravel': 'fit_to_travel',
    'postRehabRequired': 'post_rehab_required',
    'followUpRequired': 'follow_up_required',
    'rehabExtension': 'rehab_extension',
    'dischargedHI': 'discharged_hi',
}
IP_NUMBER_FILTERS = {
    'noOfVisits': 'no_of_visits',
    'durationOfRehab': 'duration_of_rehab',
    'rehabExtensionDuration': 'rehab_extension_duration',
}
IP_DATE_RANGES = {
    'memberResumeToWork': 'member_resume_to_work',
    'dodHI': 'dod_hi',
    'createdAt': 'created_at__date',
}
IP_SEARCH_FIELDS = (
    'emp_no', 'hospital_name', 'tr_location', 'hi_managers', 'treatment_undergone',
    'technician_feedback_form', 'discharge_comments', 'case_type_change_comments',
)


class IpAdmissionListQuerySerializer(PageQuerySerializer):
    search = serializers.CharField(required=False, allow_blank=True)
    locationId = serializers.CharField(required=False, allow_blank=True)


class CaseResolutionSerializer(CamelModelSerializer):
    resolved_by = UserRefField()

    class Meta:
        model = CaseResolution
        fields = '__all__'
        read_only_fields = ['id', 'resolved_by', 'created_at', 'updated_at']

    def validate_emp_no(self, v):
        return (v or '').strip().upper()

    def validate(self, attrs):
        if self.instance is None and not attrs.get('ip_admission') and not attrs.get('hospital_case'):
            raise serializers.ValidationError('ipAdmission or hospitalCase is required')
        return attrs


class ResolutionListQuerySerializer(PageQuerySerializer):
    empNo = serializers.CharField(required=False, allow_blank=True)
    resolutionStatus = serializers.CharField(required=False, allow_blank=True)
    ipAdmission = serializers.IntegerField(required=False)
