"""
URL mappings for the scheduling API.

Every endpoint lives under ``/api`` and, like the dashboard's client,
omits the trailing slash.
"""
from django.urls import include, path

from .views import accounts, auth, departments, health, leave, notifications, reports, roles, schedules, specialties, users
from .views.settings import hospital_settings

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    path('api/health', health.health, name='health'),

    # Authentication
    path('api/register', auth.register, name='register'),
    path('api/login', auth.login, name='login'),
    path('api/logout', auth.logout, name='logout'),
    path('api/me', auth.me, name='me'),
    path('api/account/profile', accounts.account_profile, name='account-profile'),

    # Staff directory and reference data
    path('api/users', users.users, name='users'),
    path('api/users/<int:pk>', users.user_detail, name='user-detail'),
    path('api/roles', roles.roles, name='roles'),
    path('api/roles/<int:pk>', roles.role_detail, name='role-detail'),
    path('api/specialties', specialties.specialties, name='specialties'),
    path('api/specialties/<int:pk>', specialties.specialty_detail, name='specialty-detail'),

    # Departments
    path('api/departments', departments.departments, name='departments'),
    path('api/departments/<int:pk>', departments.department_detail, name='department-detail'),

    # Shift roster
    path('api/schedules', schedules.schedules, name='schedules'),
    path('api/schedules/<int:pk>', schedules.schedule_detail, name='schedule-detail'),
    path('api/schedules-stats', schedules.schedule_stats, name='schedule-stats'),

    # Leave ledger
    path('api/leave-requests', leave.leave_requests, name='leave-requests'),
    path('api/leave-requests/<int:pk>', leave.leave_request_detail, name='leave-request-detail'),
    path('api/leave-requests/<int:pk>/approve', leave.approve_leave_request, name='leave-request-approve'),
    path('api/leave-requests/<int:pk>/reject', leave.reject_leave_request, name='leave-request-reject'),
    path('api/leave-requests-stats', leave.leave_request_stats, name='leave-request-stats'),

    # Notifications
    path('api/notifications', notifications.notifications, name='notifications'),
    path('api/notifications/read-all', notifications.mark_all_notifications_read, name='notifications-read-all'),
    path('api/notifications/clear-read', notifications.clear_read_notifications, name='notifications-clear-read'),
    path('api/notifications/<int:pk>', notifications.notification_detail, name='notification-detail'),
    path('api/notifications/<int:pk>/read', notifications.mark_notification_read, name='notification-read'),
    path('api/notifications-stats', notifications.notification_stats, name='notification-stats'),

    # Reports
    path('api/reports/overview', reports.overview, name='reports-overview'),
    path('api/reports/department-duty-hours', reports.department_duty_hours, name='reports-department-duty-hours'),
    path('api/reports/staff-attendance', reports.staff_attendance, name='reports-staff-attendance'),
    path('api/reports/leave-summary', reports.leave_summary, name='reports-leave-summary'),
    path('api/reports/export', reports.export, name='reports-export'),

    # Hospital settings
    path('api/hospital-settings', hospital_settings, name='hospital-settings'),
]
