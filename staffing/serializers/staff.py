from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from staffing.models import Department, Role, Specialty, StaffMember

from .common import clean_text


class StaffSerializer(serializers.Serializer):
    """Create/update payload for ``/users``.

    Foreign keys arrive as ``role_id``/``specialty_id``/``department_id``
    and come out of validation as model instances under ``role`` etc.
    """
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(
        validators=[UniqueValidator(queryset=StaffMember.objects.all(), message='This email is already in use.')],
    )
    password = serializers.CharField(min_length=6, trim_whitespace=False, write_only=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    role_id = serializers.PrimaryKeyRelatedField(queryset=Role.objects.all(), source='role')
    specialty_id = serializers.PrimaryKeyRelatedField(
        queryset=Specialty.objects.all(), source='specialty', required=False, allow_null=True,
    )
    department_id = serializers.PrimaryKeyRelatedField(
        queryset=Department.objects.all(), source='department', required=False, allow_null=True,
    )
    status = serializers.ChoiceField(choices=StaffMember.STATUS_CHOICES, required=False)
    avatar = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    join_date = serializers.DateField(required=False, allow_null=True)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance is not None:
            self.fields['password'] = serializers.CharField(
                min_length=6, required=False, allow_blank=True, allow_null=True,
                trim_whitespace=False, write_only=True,
            )

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required.')
        return v

    def validate_phone(self, v):
        return clean_text(v) or ''

    def validate_avatar(self, v):
        return v or ''


class StaffQuerySerializer(serializers.Serializer):
    role = serializers.CharField(required=False)
    department_id = serializers.IntegerField(required=False)
    status = serializers.ChoiceField(choices=StaffMember.STATUS_CHOICES, required=False)
    search = serializers.CharField(required=False, allow_blank=True)
