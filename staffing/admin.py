"""
Django admin registrations for the scheduling models.

Staff members are edited through a plain ``ModelAdmin``; passwords are
set through the API or ``manage.py changepassword``.
"""

from django.contrib import admin

from .models import (
    AccessToken,
    Account,
    Department,
    HospitalSetting,
    LeaveRequest,
    Notification,
    Role,
    ScheduleEntry,
    ShiftTemplate,
    Specialty,
    StaffMember,
)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ('name', 'display_name', 'is_active')
    search_fields = ('name', 'display_name')


@admin.register(Specialty)
class SpecialtyAdmin(admin.ModelAdmin):
    list_display = ('name', 'is_active')
    search_fields = ('name',)


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ('name', 'head', 'doctor_count', 'max_hours_per_doctor', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('name',)
    readonly_fields = ('doctor_count',)


@admin.register(StaffMember)
class StaffMemberAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'role', 'department', 'status', 'join_date')
    list_filter = ('status', 'role', 'department')
    search_fields = ('name', 'email')
    exclude = ('password', 'last_login', 'groups', 'user_permissions')


@admin.register(ShiftTemplate)
class ShiftTemplateAdmin(admin.ModelAdmin):
    list_display = ('department', 'type', 'start_time', 'end_time', 'required_staff')
    list_filter = ('type',)


@admin.register(ScheduleEntry)
class ScheduleEntryAdmin(admin.ModelAdmin):
    list_display = ('date', 'shift_type', 'staff', 'department', 'status', 'is_on_call')
    list_filter = ('status', 'shift_type', 'department')
    date_hierarchy = 'date'


@admin.register(LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ('staff', 'start_date', 'end_date', 'status', 'approved_by')
    list_filter = ('status',)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('title', 'staff', 'type', 'is_read', 'created_at')
    list_filter = ('type', 'is_read')


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'account_type', 'status')
    search_fields = ('name', 'email')
    exclude = ('password',)


@admin.register(AccessToken)
class AccessTokenAdmin(admin.ModelAdmin):
    list_display = ('name', 'staff', 'account', 'created_at', 'last_used_at')


admin.site.register(HospitalSetting)
