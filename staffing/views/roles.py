from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes

from ..exceptions import ReferentialError
from ..models import Role
from ..permissions import IsAdminRole, IsStaffMember, ReadOnly
from ..responses import created, ok
from ..serializers.reference import RoleSerializer
from ..services.departments import refresh_all_doctor_counts


def _serialize(role: Role) -> dict:
    return {
        'id': role.id,
        'name': role.name,
        'displayName': role.display_name,
        'description': role.description,
        'isActive': role.is_active,
        'usersCount': role.staff.count(),
    }


@api_view(['GET', 'POST'])
@permission_classes([IsStaffMember, IsAdminRole | ReadOnly])
def roles(request):
    if request.method == 'GET':
        return ok([_serialize(r) for r in Role.objects.order_by('display_name')])
    s = RoleSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    role = Role.objects.create(**s.validated_data)
    return created(_serialize(role), 'Role created successfully')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaffMember, IsAdminRole | ReadOnly])
def role_detail(request, pk: int):
    role = get_object_or_404(Role, pk=pk)
    if request.method == 'GET':
        return ok(_serialize(role))

    if request.method == 'PUT':
        s = RoleSerializer(role, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        old_name = role.name
        for field, value in s.validated_data.items():
            setattr(role, field, value)
        role.save()
        # The headcount rule keys on role names.
        if role.name != old_name:
            refresh_all_doctor_counts()
        return ok(_serialize(role), 'Role updated successfully')

    if role.staff.exists():
        raise ReferentialError('Cannot delete role that is assigned to users')
    role.delete()
    return ok(message='Role deleted successfully')
