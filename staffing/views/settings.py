from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..models import HospitalSetting
from ..permissions import IsAdminRole, ReadOnly
from ..responses import ok
from ..serializers.settings import HospitalSettingSerializer


def _serialize(s: HospitalSetting) -> dict:
    return {
        'id': s.id,
        'hospital_name': s.hospital_name,
        'hospital_logo': s.hospital_logo,
        'address': s.address,
        'contact_number': s.contact_number,
        'max_weekly_hours': s.max_weekly_hours,
        'email_notifications': s.email_notifications,
        'sms_notifications': s.sms_notifications,
        'updated_at': s.updated_at.isoformat() if s.updated_at else None,
    }


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsAdminRole | ReadOnly])
def hospital_settings(request):
    """Hospital wide settings; the row is created with defaults on first read."""
    settings_row = HospitalSetting.load()
    if request.method == 'GET':
        return ok(_serialize(settings_row))

    s = HospitalSettingSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    settings_row.hospital_name = vd['hospital_name']
    settings_row.address = vd.get('address') or ''
    settings_row.contact_number = vd.get('contact_number') or ''
    settings_row.max_weekly_hours = vd.get('max_weekly_hours') or HospitalSetting.DEFAULTS['max_weekly_hours']
    if vd.get('hospital_logo'):
        settings_row.hospital_logo = vd['hospital_logo']
    for flag in ('email_notifications', 'sms_notifications'):
        if flag in vd:
            setattr(settings_row, flag, vd[flag])
    settings_row.save()
    return ok(_serialize(settings_row), 'Hospital settings updated successfully')
