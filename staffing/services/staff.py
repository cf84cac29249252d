from typing import Optional

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from staffing.models import StaffMember

from .notifications import notify, notify_admins


def list_staff(*, role: Optional[str] = None, department_id=None, status: Optional[str] = None,
               search: Optional[str] = None):
    qs = StaffMember.objects.select_related('role', 'specialty', 'department')
    if role:
        qs = qs.filter(role__name=role)
    if department_id:
        qs = qs.filter(department_id=department_id)
    if status:
        qs = qs.filter(status=status)
    if search:
        qs = qs.filter(
            Q(name__icontains=search) | Q(email__icontains=search) | Q(specialty__name__icontains=search)
        )
    return qs


def create_staff(*, password: str, **fields) -> StaffMember:
    fields.setdefault('status', StaffMember.STATUS_ACTIVE)
    if not fields.get('join_date'):
        fields['join_date'] = timezone.localdate()
    with transaction.atomic():
        staff = StaffMember(**fields)
        staff.set_password(password)
        staff.save()
    notify(
        staff.id,
        'Welcome to the System',
        f"Your account has been created successfully. Welcome to the Hospital Management System, {staff.name}!",
    )
    return staff


def update_staff(staff: StaffMember, *, password: Optional[str] = None, **changes) -> StaffMember:
    with transaction.atomic():
        for field, value in changes.items():
            setattr(staff, field, value)
        if password:
            staff.set_password(password)
        staff.save()
    notify(staff.id, 'Profile Updated', 'Your profile information has been updated successfully.')
    return staff


def delete_staff(staff: StaffMember) -> None:
    label = f"{staff.name} ({staff.role.display_name if staff.role_id else 'Unknown'})"
    staff.delete()
    notify_admins('Staff Member Removed', f"{label} has been removed from the system.")


def format_staff(s: StaffMember, *, with_department: bool = True) -> dict:
    data = {
        'id': s.id,
        'name': s.name,
        'email': s.email,
        'phone': s.phone,
        'role': s.role.name if s.role_id else None,
        'roleId': s.role_id,
        'roleDisplay': s.role.display_name if s.role_id else None,
        'specialty': s.specialty.name if s.specialty_id else None,
        'specialtyId': s.specialty_id,
        'departmentId': s.department_id,
        'status': s.status,
        'avatar': s.avatar,
        'joinDate': s.join_date.isoformat() if s.join_date else None,
        'createdAt': s.created_at.isoformat() if s.created_at else None,
        'updatedAt': s.updated_at.isoformat() if s.updated_at else None,
    }
    if with_department:
        from .departments import format_department

        data['department'] = format_department(s.department, with_head=False) if s.department_id else None
    return data
