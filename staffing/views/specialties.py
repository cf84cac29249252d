from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes

from ..exceptions import ReferentialError
from ..models import Specialty
from ..permissions import IsAdminRole, IsStaffMember, ReadOnly
from ..responses import created, ok
from ..serializers.reference import SpecialtySerializer


def _serialize(specialty: Specialty) -> dict:
    return {
        'id': specialty.id,
        'name': specialty.name,
        'description': specialty.description,
        'isActive': specialty.is_active,
        'doctorsCount': specialty.staff.count(),
    }


@api_view(['GET', 'POST'])
@permission_classes([IsStaffMember, IsAdminRole | ReadOnly])
def specialties(request):
    if request.method == 'GET':
        return ok([_serialize(s) for s in Specialty.objects.order_by('name')])
    s = SpecialtySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    specialty = Specialty.objects.create(**s.validated_data)
    return created(_serialize(specialty), 'Specialty created successfully')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaffMember, IsAdminRole | ReadOnly])
def specialty_detail(request, pk: int):
    specialty = get_object_or_404(Specialty, pk=pk)
    if request.method == 'GET':
        return ok(_serialize(specialty))

    if request.method == 'PUT':
        s = SpecialtySerializer(specialty, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        for field, value in s.validated_data.items():
            setattr(specialty, field, value)
        specialty.save()
        return ok(_serialize(specialty), 'Specialty updated successfully')

    if specialty.staff.exists():
        raise ReferentialError('Cannot delete specialty that is assigned to doctors')
    specialty.delete()
    return ok(message='Specialty deleted successfully')
