"""
Django admin registrations for users, patients, reports and the audit trail.
"""

from django.contrib import admin

from .models import AuditEvent, Patient, Report, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'first_name', 'role', 'license_number', 'institution_name', 'is_staff')
    list_filter = ('role',)
    search_fields = ('username', 'first_name', 'email', 'license_number')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'record_number', 'gender', 'date_of_birth', 'created_by', 'created_at')
    list_filter = ('gender',)
    search_fields = ('full_name', 'record_number', 'email', 'phone_number')


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'report_type', 'examination_type', 'examination_date')
    list_filter = ('report_type', 'examination_type')
    search_fields = ('id', 'patient__full_name', 'doctor__username')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'action', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('user__username', 'object_id')
