from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from staffing.models import Department, StaffMember

from .common import clean_text


class DepartmentSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=100,
        validators=[UniqueValidator(queryset=Department.objects.all(), message='A department with this name already exists.')],
    )
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    head_id = serializers.PrimaryKeyRelatedField(
        queryset=StaffMember.objects.all(), source='head', required=False, allow_null=True,
    )
    max_hours_per_doctor = serializers.IntegerField(min_value=1, required=False)
    color = serializers.RegexField(
        r'^#[0-9a-fA-F]{6}$', required=False,
        error_messages={'invalid': 'Color must be a hex value like #3b82f6.'},
    )
    is_active = serializers.BooleanField(required=False)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required.')
        return v

    def validate_description(self, v):
        return clean_text(v) or ''
