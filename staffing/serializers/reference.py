from django.utils.text import slugify
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from staffing.models import Role, Specialty

from .common import clean_text


def role_key(display_name: str) -> str:
    """``"Department Head"`` -> ``"department_head"``."""
    return slugify(display_name).replace('-', '_')


class RoleSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    is_active = serializers.BooleanField(required=False)

    def validate_display_name(self, v):
        v = clean_text(v)
        name = role_key(v)
        if not name:
            raise serializers.ValidationError('Display name must contain letters or digits.')
        clash = Role.objects.filter(name=name)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError('A role with this name already exists.')
        return v

    def validate_description(self, v):
        return clean_text(v) or ''

    def validate(self, attrs):
        if 'display_name' in attrs:
            attrs['name'] = role_key(attrs['display_name'])
        return attrs


class SpecialtySerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=100,
        validators=[UniqueValidator(queryset=Specialty.objects.all(), message='A specialty with this name already exists.')],
    )
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    is_active = serializers.BooleanField(required=False)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required.')
        return v

    def validate_description(self, v):
        return clean_text(v) or ''
