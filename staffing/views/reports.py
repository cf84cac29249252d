"""
Reporting endpoints and the CSV export.
"""
from __future__ import annotations

import csv

from django.http import HttpResponse
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes

from ..permissions import IsStaffMember
from ..responses import ok
from ..serializers.common import RangeQuerySerializer
from ..serializers.reports import ExportQuerySerializer
from ..services import reports


def _range(request):
    q = RangeQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return q.validated_data.get('start_date'), q.validated_data.get('end_date')


@api_view(['GET'])
@permission_classes([IsStaffMember])
def overview(request):
    return ok(reports.overview(*_range(request)))


@api_view(['GET'])
@permission_classes([IsStaffMember])
def department_duty_hours(request):
    return ok(reports.department_duty_hours(*_range(request)))


@api_view(['GET'])
@permission_classes([IsStaffMember])
def staff_attendance(request):
    return ok(reports.staff_attendance(*_range(request)))


@api_view(['GET'])
@permission_classes([IsStaffMember])
def leave_summary(request):
    return ok(reports.leave_summary(*_range(request)))


@api_view(['GET'])
@permission_classes([IsStaffMember])
def export(request):
    q = ExportQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    report_type = vd['report_type']
    header, rows = reports.export_rows(report_type, vd.get('start_date'), vd.get('end_date'))

    filename = f'{report_type}_{timezone.localdate().isoformat()}.csv'
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    writer = csv.writer(response)
    writer.writerow(header)
    writer.writerows(rows)
    return response
