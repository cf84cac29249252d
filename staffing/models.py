"""
Database models for the staff scheduling backend.

The staff directory doubles as the Django auth user model so that the
admin site and password helpers work out of the box.  Public (non
staff) accounts live in their own table; both kinds of identity share
the bearer tokens stored in :class:`AccessToken`.
"""
from __future__ import annotations

import secrets

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import PermissionsMixin
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

DOCTOR_ROLE_NAMES = ('doctor', 'department_head')


class Role(models.Model):
    """A staff role such as ``doctor`` or ``nurse``.

    ``name`` is the machine key derived from ``display_name``; it is
    what permission checks and the head-count rule compare against.
    """
    name = models.CharField(max_length=50, unique=True)
    display_name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default='')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.display_name


class Specialty(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default='')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'specialties'

    def __str__(self) -> str:
        return self.name


class Department(models.Model):
    """An organisational unit staff are rostered into.

    ``doctor_count`` is a denormalised counter maintained by the staff
    signals in :mod:`staffing.signals`; it is never edited by hand.
    :meth:`actual_doctor_count` computes the same figure from the staff
    table for callers that want the live value.
    """
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default='')
    head = models.ForeignKey(
        'StaffMember', null=True, blank=True, on_delete=models.SET_NULL, related_name='headed_departments'
    )
    max_hours_per_doctor = models.PositiveIntegerField(default=40, validators=[MinValueValidator(1)])
    doctor_count = models.PositiveIntegerField(default=0, editable=False)
    color = models.CharField(
        max_length=7,
        default='#3b82f6',
        validators=[RegexValidator(r'^#[0-9a-fA-F]{6}$', 'Color must be a hex value like #3b82f6.')],
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name

    def actual_doctor_count(self) -> int:
        return StaffMember.objects.doctors().filter(department_id=self.pk).count()


class StaffMemberManager(BaseUserManager):
    use_in_migrations = True

    def doctors(self):
        """Active staff whose role counts towards a department's headcount."""
        return self.filter(role__name__in=DOCTOR_ROLE_NAMES, status=StaffMember.STATUS_ACTIVE)

    def admins(self):
        return self.filter(role__name='admin')

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email address must be set')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        if extra_fields.get('role') is None and extra_fields.get('role_id') is None:
            extra_fields['role'], _ = Role.objects.get_or_create(
                name='admin', defaults={'display_name': 'Administrator'}
            )
        return self._create_user(email, password, **extra_fields)


class StaffMember(AbstractBaseUser, PermissionsMixin):
    """A person who can be rostered: doctors, nurses, administrators.

    Staff are disabled through ``status`` rather than deleted; only
    ``active`` staff may authenticate.  Deleting a staff member removes
    their roster entries, leave requests, notifications and tokens.
    """
    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_ON_LEAVE = 'on_leave'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
        (STATUS_ON_LEAVE, 'On leave'),
    ]

    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True, default='')
    role = models.ForeignKey(Role, on_delete=models.PROTECT, related_name='staff')
    specialty = models.ForeignKey(
        Specialty, null=True, blank=True, on_delete=models.PROTECT, related_name='staff'
    )
    department = models.ForeignKey(
        Department, null=True, blank=True, on_delete=models.SET_NULL, related_name='staff'
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    avatar = models.TextField(blank=True, default='')
    join_date = models.DateField(default=timezone.localdate)
    is_staff = models.BooleanField(default=False, help_text='Can log into the Django admin site.')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StaffMemberManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role_id else None

    def get_full_name(self) -> str:
        return self.name

    def get_short_name(self) -> str:
        return self.name


class ShiftTemplate(models.Model):
    """Standard shift definition for a department (times and staffing)."""
    TYPE_MORNING = 'morning'
    TYPE_EVENING = 'evening'
    TYPE_NIGHT = 'night'
    TYPE_CHOICES = [
        (TYPE_MORNING, 'Morning'),
        (TYPE_EVENING, 'Evening'),
        (TYPE_NIGHT, 'Night'),
    ]

    department = models.ForeignKey(Department, on_delete=models.CASCADE, related_name='shift_templates')
    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    start_time = models.TimeField()
    end_time = models.TimeField()
    required_staff = models.PositiveIntegerField(default=1)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['department', 'type'], name='uniq_shift_template_per_department'),
        ]

    def __str__(self) -> str:
        return f"{self.department} {self.type}"


class ScheduleEntry(models.Model):
    """One staff member on one shift type on one date.

    A staff member holds at most one non-cancelled entry per date; the
    partial unique constraint mirrors the check in
    :func:`staffing.services.roster.create_entry`.
    """
    STATUS_SCHEDULED = 'scheduled'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_SWAPPED = 'swapped'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_SWAPPED, 'Swapped'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    staff = models.ForeignKey(StaffMember, on_delete=models.CASCADE, related_name='schedule_entries')
    department = models.ForeignKey(Department, on_delete=models.CASCADE, related_name='schedule_entries')
    shift = models.ForeignKey(
        ShiftTemplate, null=True, blank=True, on_delete=models.SET_NULL, related_name='schedule_entries'
    )
    date = models.DateField(db_index=True)
    shift_type = models.CharField(max_length=10, choices=ShiftTemplate.TYPE_CHOICES)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_SCHEDULED)
    is_on_call = models.BooleanField(default=False)
    notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['date', 'shift_type']
        verbose_name_plural = 'schedule entries'
        constraints = [
            models.UniqueConstraint(
                fields=['staff', 'date'],
                condition=~Q(status='cancelled'),
                name='uniq_active_shift_per_staff_day',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.staff_id} {self.date} {self.shift_type}"


class LeaveRequest(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
    ]

    staff = models.ForeignKey(StaffMember, on_delete=models.CASCADE, related_name='leave_requests')
    start_date = models.DateField()
    end_date = models.DateField()
    reason = models.CharField(max_length=500)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    approved_by = models.ForeignKey(
        StaffMember, null=True, blank=True, on_delete=models.SET_NULL, related_name='approved_leave_requests'
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=Q(start_date__lte=models.F('end_date')), name='leave_start_before_end'
            ),
        ]

    def __str__(self) -> str:
        return f"{self.staff_id} {self.start_date}..{self.end_date} ({self.status})"

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1


class Notification(models.Model):
    TYPE_CHOICES = [
        ('shift', 'Shift'),
        ('swap', 'Swap'),
        ('leave', 'Leave'),
        ('emergency', 'Emergency'),
        ('general', 'General'),
    ]

    staff = models.ForeignKey(StaffMember, on_delete=models.CASCADE, related_name='notifications')
    title = models.CharField(max_length=200)
    message = models.TextField()
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default='general', db_index=True)
    is_read = models.BooleanField(default=False, db_index=True)
    related_id = models.PositiveBigIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.title} -> {self.staff_id}"


class Account(models.Model):
    """A public (non staff) account that signs up through ``/register``."""
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('suspended', 'Suspended'),
    ]

    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128)
    phone = models.CharField(max_length=20, blank=True, default='')
    account_type = models.CharField(max_length=20, default='patient')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active')
    avatar = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    @property
    def is_active(self) -> bool:
        return self.status == 'active'

    def set_password(self, raw_password: str) -> None:
        self.password = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password(raw_password, self.password)


def _generate_key() -> str:
    return secrets.token_hex(20)


class AccessToken(models.Model):
    """Bearer token owned by exactly one staff member or account."""
    key = models.CharField(max_length=40, primary_key=True, default=_generate_key, editable=False)
    staff = models.ForeignKey(
        StaffMember, null=True, blank=True, on_delete=models.CASCADE, related_name='access_tokens'
    )
    account = models.ForeignKey(
        Account, null=True, blank=True, on_delete=models.CASCADE, related_name='access_tokens'
    )
    name = models.CharField(max_length=50, default='auth_token')
    created_at = models.DateTimeField(auto_now_add=True)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(staff__isnull=False, account__isnull=True) | Q(staff__isnull=True, account__isnull=False)
                ),
                name='access_token_single_owner',
            ),
        ]

    def __str__(self) -> str:
        owner = f"staff:{self.staff_id}" if self.staff_id else f"account:{self.account_id}"
        return f"{self.name} ({owner})"


class HospitalSetting(models.Model):
    """Singleton row holding hospital wide configuration."""
    hospital_name = models.CharField(max_length=255, default='MedScheduler')
    hospital_logo = models.TextField(blank=True, default='')
    address = models.TextField(blank=True, default='')
    contact_number = models.CharField(max_length=20, blank=True, default='')
    max_weekly_hours = models.PositiveIntegerField(
        default=48, validators=[MinValueValidator(1), MaxValueValidator(168)]
    )
    email_notifications = models.BooleanField(default=True)
    sms_notifications = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    DEFAULTS = {
        'hospital_name': 'MedScheduler',
        'address': '123 Medical Center Blvd, Suite 100',
        'contact_number': '+1-555-0000',
        'max_weekly_hours': 48,
    }

    def __str__(self) -> str:
        return self.hospital_name

    @classmethod
    def load(cls) -> 'HospitalSetting':
        obj = cls.objects.order_by('pk').first()
        if obj is None:
            obj = cls.objects.create(**cls.DEFAULTS)
        return obj
