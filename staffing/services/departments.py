"""
Department registry: CRUD helpers, the stored doctor headcount and the
department head batch assignment.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from staffing.models import Department, StaffMember

from .notifications import notify_admins, notify_many

logger = logging.getLogger(__name__)


def refresh_doctor_count(department_id: int) -> int:
    count = StaffMember.objects.doctors().filter(department_id=department_id).count()
    Department.objects.filter(pk=department_id).update(doctor_count=count)
    return count


def refresh_all_doctor_counts() -> int:
    updated = 0
    for department_id in Department.objects.values_list('id', flat=True):
        refresh_doctor_count(department_id)
        updated += 1
    return updated


def pick_head(department: Department) -> Optional[StaffMember]:
    """Active ``department_head`` first, else the longest-serving active doctor."""
    active = StaffMember.objects.filter(department=department, status=StaffMember.STATUS_ACTIVE)
    head = active.filter(role__name='department_head').order_by('join_date', 'id').first()
    if head is None:
        head = active.filter(role__name='doctor').order_by('join_date', 'id').first()
    return head


def assign_missing_heads() -> list[tuple[Department, StaffMember]]:
    """Fill ``head`` for departments that have none; existing heads are left alone."""
    assigned = []
    for department in Department.objects.filter(head__isnull=True).order_by('id'):
        head = pick_head(department)
        if head is None:
            logger.info('No head candidate for department %s', department.name)
            continue
        Department.objects.filter(pk=department.pk, head__isnull=True).update(head=head)
        department.head = head
        logger.info('Assigned %s as head of %s', head.name, department.name)
        assigned.append((department, head))
    return assigned


def list_departments(*, include_inactive: bool = False):
    qs = Department.objects.select_related('head__role', 'head__specialty')
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return qs.order_by('name')


def create_department(**fields) -> Department:
    department = Department.objects.create(**fields)
    notify_admins('New Department Created', f"A new department '{department.name}' has been created.")
    return department


def update_department(department: Department, **changes) -> Department:
    with transaction.atomic():
        for field, value in changes.items():
            setattr(department, field, value)
        department.save()
    staff_ids = list(department.staff.values_list('id', flat=True))
    notify_many(
        staff_ids,
        'Department Updated',
        f"Your department '{department.name}' information has been updated.",
    )
    return department


def delete_department(department: Department) -> None:
    """Hard delete; staff stay on file without a department and are told so."""
    name = department.name
    with transaction.atomic():
        staff_ids = list(department.staff.values_list('id', flat=True))
        department.delete()
    notify_many(
        staff_ids,
        'Department Removed',
        f"The department '{name}' has been removed. Please contact administration for reassignment.",
    )
    notify_admins('Department Deleted', f"Department '{name}' has been deleted from the system.")


def format_department(d: Department, *, with_head: bool = True) -> dict:
    data = {
        'id': d.id,
        'name': d.name,
        'description': d.description,
        'headId': d.head_id,
        'maxHoursPerDoctor': d.max_hours_per_doctor,
        'doctorCount': d.doctor_count,
        'actualDoctorCount': d.actual_doctor_count(),
        'color': d.color,
        'isActive': d.is_active,
        'createdAt': d.created_at.isoformat() if d.created_at else None,
        'updatedAt': d.updated_at.isoformat() if d.updated_at else None,
    }
    if with_head:
        from .staff import format_staff

        data['head'] = format_staff(d.head, with_department=False) if d.head_id else None
    return data
