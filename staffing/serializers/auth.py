from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from staffing.models import Account

from .common import clean_text


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(
        validators=[UniqueValidator(queryset=Account.objects.all(), message='This email is already registered.')],
    )
    password = serializers.CharField(min_length=8, trim_whitespace=False, write_only=True)
    password_confirmation = serializers.CharField(trim_whitespace=False, write_only=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required.')
        return v

    def validate(self, attrs):
        if attrs['password'] != attrs.pop('password_confirmation'):
            raise serializers.ValidationError({'password': 'The password confirmation does not match.'})
        return attrs


class AccountProfileSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    email = serializers.EmailField(
        required=False,
        validators=[UniqueValidator(queryset=Account.objects.all(), message='This email is already registered.')],
    )
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    avatar = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    password = serializers.CharField(min_length=8, required=False, allow_blank=True, allow_null=True,
                                     trim_whitespace=False, write_only=True)
    password_confirmation = serializers.CharField(required=False, allow_blank=True, allow_null=True,
                                                  trim_whitespace=False, write_only=True)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required.')
        return v

    def validate(self, attrs):
        confirmation = attrs.pop('password_confirmation', None)
        if attrs.get('password') and attrs['password'] != confirmation:
            raise serializers.ValidationError({'password': 'The password confirmation does not match.'})
        return attrs
