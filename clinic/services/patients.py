from django.db.models import Q
from rest_framework.exceptions import NotFound
from clinic.models import Patient
from clinic.services.text import plain_text

# API field -> model field
PATIENT_FIELDS = {
    'fullName': 'full_name',
    'recordNumber': 'record_number',
    'dateOfBirth': 'date_of_birth',
    'gender': 'gender',
    'phoneNumber': 'phone_number',
    'email': 'email',
    'address': 'address',
    'medicalHistory': 'medical_history',
}

FREE_TEXT_FIELDS = {'medical_history', 'address'}


def _apply(patient: Patient, data: dict) -> Patient:
    for api_name, field in PATIENT_FIELDS.items():
        if api_name not in data:
            continue
        value = data[api_name]
        if field in FREE_TEXT_FIELDS and value:
            value = plain_text(value)
        setattr(patient, field, value if value is not None else '')
    return patient


def serialize_patient(p: Patient) -> dict:
    return {
        'id': p.id,
        'fullName': p.full_name,
        'recordNumber': p.record_number,
        'dateOfBirth': p.date_of_birth.isoformat() if p.date_of_birth else None,
        'gender': p.gender,
        'phoneNumber': p.phone_number,
        'email': p.email,
        'address': p.address,
        'medicalHistory': p.medical_history,
        'createdBy': p.created_by_id,
        'createdAt': p.created_at.isoformat() if p.created_at else None,
        'updatedAt': p.updated_at.isoformat() if p.updated_at else None,
    }


def serialize_patient_summary(p: Patient) -> dict:
    return {
        'id': p.id,
        'fullName': p.full_name,
        'recordNumber': p.record_number,
        'dateOfBirth': p.date_of_birth.isoformat() if p.date_of_birth else None,
        'gender': p.gender,
    }


def visible_patients(doctor, *, search=None):
    """Patients the doctor registered or has written at least one report for."""
    qs = Patient.objects.filter(Q(created_by=doctor) | Q(reports__doctor=doctor)).distinct()
    if search:
        qs = qs.filter(
            Q(full_name__icontains=search) | Q(email__icontains=search) | Q(record_number__icontains=search)
        )
    return qs.order_by('-created_at', '-id')


def get_patient_or_404(pk) -> Patient:
    patient = Patient.objects.filter(id=pk).first()
    if not patient:
        raise NotFound('Patient not found')
    return patient


def create_patient(doctor, data: dict) -> Patient:
    patient = _apply(Patient(created_by=doctor), data)
    patient.save()
    return patient


def update_patient(patient: Patient, data: dict) -> Patient:
    _apply(patient, data)
    patient.save()
    return patient
