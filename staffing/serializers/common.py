import bleach
from rest_framework import serializers


def clean_text(value):
    """Strip markup from free text typed into dashboard forms."""
    if value is None:
        return value
    return bleach.clean(value.strip(), strip=True)


class RangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date must be on or after start date.'})
        return attrs
