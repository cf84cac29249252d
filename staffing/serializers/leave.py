from rest_framework import serializers

from staffing.models import LeaveRequest, StaffMember

from .common import RangeQuerySerializer, clean_text


class LeaveRequestSerializer(serializers.Serializer):
    user_id = serializers.PrimaryKeyRelatedField(
        queryset=StaffMember.objects.all(), source='staff', required=False,
        error_messages={'does_not_exist': 'Selected user does not exist.'},
    )
    start_date = serializers.DateField(error_messages={'required': 'Start date is required.'})
    end_date = serializers.DateField(error_messages={'required': 'End date is required.'})
    reason = serializers.CharField(
        max_length=500, error_messages={'required': 'Please provide a reason for leave.'},
    )

    def validate_reason(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Please provide a reason for leave.')
        return v


class LeaveUpdateSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    reason = serializers.CharField(max_length=500, required=False)

    def validate_reason(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Please provide a reason for leave.')
        return v


class RejectSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(
        max_length=500, error_messages={'required': 'Please provide a reason for rejection.'},
    )

    def validate_rejection_reason(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Please provide a reason for rejection.')
        return v


class LeaveQuerySerializer(RangeQuerySerializer):
    status = serializers.ChoiceField(choices=LeaveRequest.STATUS_CHOICES, required=False)
    user_id = serializers.IntegerField(required=False)
