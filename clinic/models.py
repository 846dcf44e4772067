"""
Database models for the ultrasound reporting backend.

Doctors (and other staff) are users with a role and the institution
details that are printed on every report.  Patients are plain records
owned by the doctor who registered them, and reports hold one
abdominal or carotid examination for a patient.
"""
from __future__ import annotations

import datetime
import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Staff account with a role and institution details.

    Only ``DOCTOR`` users may register patients and author reports;
    nurses and administrators can sign in and read records.
    """
    ROLE_DOCTOR = 'DOCTOR'
    ROLE_NURSE = 'NURSE'
    ROLE_ADMIN = 'ADMIN'
    ROLE_CHOICES = [
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_NURSE, 'Nurse'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_DOCTOR, db_index=True)
    license_number = models.CharField(max_length=64, blank=True)
    institution_name = models.CharField(max_length=255, blank=True)
    institution_address = models.CharField(max_length=255, blank=True)
    institution_phone = models.CharField(max_length=32, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def display_name(self) -> str:
        return self.get_full_name() or self.username

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Patient(models.Model):
    GENDER_CHOICES = [
        ('MALE', 'Male'),
        ('FEMALE', 'Female'),
        ('OTHER', 'Other'),
    ]
    full_name = models.CharField(max_length=255, db_index=True)
    # 환자번호: hospital-issued chart number, optional
    record_number = models.CharField(max_length=64, blank=True, db_index=True)
    date_of_birth = models.DateField()
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    phone_number = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    address = models.CharField(max_length=255, blank=True)
    medical_history = models.TextField(blank=True)
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='patients_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['created_by', 'created_at'], name='patient_creator_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.record_number or self.id})"


class Report(models.Model):
    """A single ultrasound examination report.

    ``report_type`` selects which block of examination fields is
    meaningful: the abdominal fields (liver, gallbladder, bile duct,
    spleen, pancreas) or the carotid fields (IMT, stenosis, plaque and
    flow for each side).  The narrative fields are shared.
    """
    TYPE_ABDOMINAL = 'ABDOMINAL'
    TYPE_CAROTID = 'CAROTID'
    TYPE_CHOICES = [
        (TYPE_ABDOMINAL, 'Abdominal'),
        (TYPE_CAROTID, 'Carotid'),
    ]
    EXAM_CHOICES = [
        ('GENERAL', 'General'),
        ('DETAILED', 'Detailed'),
        ('LIMITED', 'Limited'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='reports')
    doctor = models.ForeignKey(User, on_delete=models.CASCADE, related_name='reports')
    report_type = models.CharField(max_length=16, choices=TYPE_CHOICES, default=TYPE_ABDOMINAL, db_index=True)

    institution_name = models.CharField(max_length=255, blank=True)
    institution_address = models.CharField(max_length=255, blank=True)
    institution_phone = models.CharField(max_length=32, blank=True)

    examination_type = models.CharField(max_length=16, choices=EXAM_CHOICES, default='GENERAL')
    examination_date = models.DateTimeField()
    interpretation_date = models.DateTimeField(null=True, blank=True)

    # Abdominal ultrasound
    liver_echo = models.CharField(max_length=255, blank=True)
    liver_mass = models.CharField(max_length=255, blank=True)
    gallbladder_abnormal = models.CharField(max_length=255, blank=True)
    bile_duct_dilation = models.CharField(max_length=255, blank=True)
    spleen_enlargement = models.CharField(max_length=255, blank=True)
    pancreas_abnormal = models.CharField(max_length=255, blank=True)

    # Carotid ultrasound (IMT in millimetres)
    right_carotid_imt = models.FloatField(null=True, blank=True)
    left_carotid_imt = models.FloatField(null=True, blank=True)
    right_carotid_stenosis = models.CharField(max_length=255, blank=True)
    left_carotid_stenosis = models.CharField(max_length=255, blank=True)
    right_carotid_plaque = models.CharField(max_length=255, blank=True)
    left_carotid_plaque = models.CharField(max_length=255, blank=True)
    right_carotid_flow = models.CharField(max_length=255, blank=True)
    left_carotid_flow = models.CharField(max_length=255, blank=True)

    findings = models.TextField(blank=True)
    impression = models.TextField(blank=True)
    recommendations = models.TextField(blank=True)
    conclusion = models.TextField(blank=True)
    additional_notes = models.TextField(blank=True)
    images = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['doctor', 'examination_date'], name='report_doctor_exam_idx'),
            models.Index(fields=['patient', 'examination_date'], name='report_patient_exam_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.report_type} report #{self.id} for {self.patient_id}"


def upload_path(extension: str) -> str:
    """Storage name for an upload; ``extension`` comes from the accepted content type."""
    return f"uploads/{datetime.date.today().strftime('%Y/%m')}/{uuid.uuid4().hex}{extension}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
