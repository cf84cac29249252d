from rest_framework import serializers

from staffing.models import Notification, StaffMember


class NotificationSerializer(serializers.Serializer):
    user_id = serializers.PrimaryKeyRelatedField(queryset=StaffMember.objects.all(), source='staff')
    title = serializers.CharField(max_length=200)
    message = serializers.CharField()
    type = serializers.ChoiceField(choices=Notification.TYPE_CHOICES, required=False)
    related_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class NotificationUpdateSerializer(serializers.Serializer):
    is_read = serializers.BooleanField()


class NotificationQuerySerializer(serializers.Serializer):
    user_id = serializers.IntegerField(required=False)
    is_read = serializers.BooleanField(required=False, allow_null=True)
    type = serializers.ChoiceField(choices=Notification.TYPE_CHOICES, required=False)


class NotificationScopeSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(required=False, allow_null=True)
