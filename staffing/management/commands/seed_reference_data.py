"""
Management command to load the reference data the dashboard expects:
roles, specialties, standard shift templates and the hospital settings
row.  Safe to run repeatedly; existing rows are left untouched.
"""
from datetime import time

from django.core.management.base import BaseCommand
from django.db import transaction

from staffing.models import Department, HospitalSetting, Role, ShiftTemplate, Specialty

ROLES = [
    ('admin', 'Administrator', 'Full system access and management'),
    ('doctor', 'Doctor', 'Medical professional with patient care responsibilities'),
    ('nurse', 'Nurse', 'Nursing staff providing patient care'),
    ('department_head', 'Department Head', 'Head of a department with management responsibilities'),
    ('staff', 'Staff', 'General hospital staff'),
]

SPECIALTIES = [
    ('Cardiology', 'Heart and cardiovascular system'),
    ('Neurology', 'Brain and nervous system'),
    ('Pediatrics', 'Medical care for children'),
    ('Orthopedics', 'Bones, joints, and muscles'),
    ('Dermatology', 'Skin conditions and diseases'),
    ('Oncology', 'Cancer treatment and care'),
    ('Emergency Medicine', 'Emergency and critical care'),
    ('General Surgery', 'Surgical procedures'),
]

SHIFT_TEMPLATES = [
    ('morning', time(7), time(15), 3),
    ('evening', time(15), time(23), 2),
    ('night', time(23), time(7), 2),
]


class Command(BaseCommand):
    help = 'Seed roles, specialties, shift templates and hospital settings'

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for name, display_name, description in ROLES:
            _, was_created = Role.objects.get_or_create(
                name=name, defaults={'display_name': display_name, 'description': description},
            )
            created += was_created

        for name, description in SPECIALTIES:
            _, was_created = Specialty.objects.get_or_create(name=name, defaults={'description': description})
            created += was_created

        for department in Department.objects.all():
            for shift_type, start, end, required in SHIFT_TEMPLATES:
                _, was_created = ShiftTemplate.objects.get_or_create(
                    department=department, type=shift_type,
                    defaults={'start_time': start, 'end_time': end, 'required_staff': required},
                )
                created += was_created

        HospitalSetting.load()
        self.stdout.write(self.style.SUCCESS(f'Reference data ready ({created} rows created)'))
