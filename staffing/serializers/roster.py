from rest_framework import serializers

from staffing.models import Department, ScheduleEntry, ShiftTemplate, StaffMember

from .common import RangeQuerySerializer


class ScheduleEntrySerializer(serializers.Serializer):
    user_id = serializers.PrimaryKeyRelatedField(
        queryset=StaffMember.objects.all(), source='staff',
        error_messages={'required': 'Please select a user.', 'does_not_exist': 'Selected user does not exist.'},
    )
    shift_id = serializers.PrimaryKeyRelatedField(
        queryset=ShiftTemplate.objects.all(), source='shift', required=False, allow_null=True,
    )
    date = serializers.DateField(error_messages={'required': 'Date is required.'})
    department_id = serializers.PrimaryKeyRelatedField(
        queryset=Department.objects.all(), source='department',
        error_messages={'required': 'Please select a department.'},
    )
    shift_type = serializers.ChoiceField(
        choices=ShiftTemplate.TYPE_CHOICES,
        error_messages={'required': 'Please select a shift type.', 'invalid_choice': 'Invalid shift type selected.'},
    )
    status = serializers.ChoiceField(choices=ScheduleEntry.STATUS_CHOICES, required=False)
    is_on_call = serializers.BooleanField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_notes(self, v):
        return v or ''


class ScheduleQuerySerializer(RangeQuerySerializer):
    department_id = serializers.IntegerField(required=False)
    user_id = serializers.IntegerField(required=False)
    status = serializers.ChoiceField(choices=ScheduleEntry.STATUS_CHOICES, required=False)
