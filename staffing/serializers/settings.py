from rest_framework import serializers

from .common import clean_text


class HospitalSettingSerializer(serializers.Serializer):
    hospital_name = serializers.CharField(max_length=255)
    hospital_logo = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    contact_number = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    max_weekly_hours = serializers.IntegerField(min_value=1, max_value=168, required=False, allow_null=True)
    email_notifications = serializers.BooleanField(required=False)
    sms_notifications = serializers.BooleanField(required=False)

    def validate_hospital_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Hospital name is required.')
        return v

    def validate_address(self, v):
        return clean_text(v) or ''
