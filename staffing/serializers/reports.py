from rest_framework import serializers

from staffing.services.reports import REPORT_TYPES

from .common import RangeQuerySerializer


class ExportQuerySerializer(RangeQuerySerializer):
    report_type = serializers.ChoiceField(choices=REPORT_TYPES, default='department_duty_hours')
