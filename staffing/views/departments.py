"""
Department registry endpoints.

Only active departments are listed.  Deleting a department is a hard
delete: its roster entries and shift templates go with it, while its
staff stay on file without a department.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes

from ..models import Department
from ..permissions import IsAdminRole, IsStaffMember, ReadOnly
from ..responses import created, ok
from ..serializers.departments import DepartmentSerializer
from ..services import departments as department_service


@api_view(['GET', 'POST'])
@permission_classes([IsStaffMember, IsAdminRole | ReadOnly])
def departments(request):
    if request.method == 'GET':
        return ok([department_service.format_department(d) for d in department_service.list_departments()])

    s = DepartmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    department = department_service.create_department(**s.validated_data)
    return created(department_service.format_department(department), 'Department created successfully')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaffMember, IsAdminRole | ReadOnly])
def department_detail(request, pk: int):
    department = get_object_or_404(Department.objects.select_related('head__role', 'head__specialty'), pk=pk)
    if request.method == 'GET':
        return ok(department_service.format_department(department))

    if request.method == 'PUT':
        s = DepartmentSerializer(department, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        department = department_service.update_department(department, **s.validated_data)
        return ok(department_service.format_department(department), 'Department updated successfully')

    department_service.delete_department(department)
    return ok(message='Department deleted successfully')
