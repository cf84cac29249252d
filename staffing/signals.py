"""
Keep ``Department.doctor_count`` in step with the staff directory.

A ``pre_save`` handler snapshots the fields that influence the count
(department, role, status) so that ``post_save`` can tell which
departments were affected: both the old and the new one when a staff
member moves.  Deletions recount the department the staff member
belonged to.
"""
from __future__ import annotations

from django.db.models.signals import post_delete, post_save, pre_save

from .models import StaffMember
from .services.departments import refresh_doctor_count

_TRACKED_FIELDS = ('department_id', 'role_id', 'status')


def snapshot_headcount_fields(sender, instance: StaffMember, raw=False, **kwargs) -> None:
    instance._headcount_snapshot = None
    if raw or instance.pk is None:
        return
    instance._headcount_snapshot = (
        StaffMember.objects.filter(pk=instance.pk).values(*_TRACKED_FIELDS).first()
    )


def recount_after_save(sender, instance: StaffMember, created=False, raw=False, **kwargs) -> None:
    if raw:
        return
    before = getattr(instance, '_headcount_snapshot', None)
    affected = {instance.department_id}
    if not created and before is not None:
        if all(before[f] == getattr(instance, f) for f in _TRACKED_FIELDS):
            return
        affected.add(before['department_id'])
    for department_id in affected - {None}:
        refresh_doctor_count(department_id)


def recount_after_delete(sender, instance: StaffMember, **kwargs) -> None:
    if instance.department_id is not None:
        refresh_doctor_count(instance.department_id)


def connect() -> None:
    pre_save.connect(snapshot_headcount_fields, sender=StaffMember, dispatch_uid='staff_headcount_snapshot')
    post_save.connect(recount_after_save, sender=StaffMember, dispatch_uid='staff_headcount_save')
    post_delete.connect(recount_after_delete, sender=StaffMember, dispatch_uid='staff_headcount_delete')
