"""
Report persistence and serialization.

Input arrives already validated by ``ReportWriteSerializer`` with the
camelCase names used on the wire; ``REPORT_FIELDS`` maps them onto model
fields.  Narrative fields have markup stripped (``clinic.services.text``) but
keep the characters as typed; the print page escapes them on render.
"""
from typing import Optional

from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from clinic.models import Patient, Report
from clinic.services.patients import serialize_patient, serialize_patient_summary
from clinic.services.text import plain_text

INSTITUTION_FIELDS = {
    'institutionName': 'institution_name',
    'institutionAddress': 'institution_address',
    'institutionPhone': 'institution_phone',
}

ABDOMINAL_FIELDS = {
    'liverEcho': 'liver_echo',
    'liverMass': 'liver_mass',
    'gallbladderAbnormal': 'gallbladder_abnormal',
    'bileDuctDilation': 'bile_duct_dilation',
    'spleenEnlargement': 'spleen_enlargement',
    'pancreasAbnormal': 'pancreas_abnormal',
}

CAROTID_FIELDS = {
    'rightCarotidImt': 'right_carotid_imt',
    'leftCarotidImt': 'left_carotid_imt',
    'rightCarotidStenosis': 'right_carotid_stenosis',
    'leftCarotidStenosis': 'left_carotid_stenosis',
    'rightCarotidPlaque': 'right_carotid_plaque',
    'leftCarotidPlaque': 'left_carotid_plaque',
    'rightCarotidFlow': 'right_carotid_flow',
    'leftCarotidFlow': 'left_carotid_flow',
}

NARRATIVE_FIELDS = {
    'findings': 'findings',
    'impression': 'impression',
    'recommendations': 'recommendations',
    'conclusion': 'conclusion',
    'additionalNotes': 'additional_notes',
}

REPORT_FIELDS = {
    'reportType': 'report_type',
    'examinationType': 'examination_type',
    'examinationDate': 'examination_date',
    'interpretationDate': 'interpretation_date',
    'images': 'images',
    **INSTITUTION_FIELDS,
    **ABDOMINAL_FIELDS,
    **CAROTID_FIELDS,
    **NARRATIVE_FIELDS,
}

NULLABLE_FIELDS = {'interpretation_date', 'right_carotid_imt', 'left_carotid_imt'}


def _apply(report: Report, data: dict) -> Report:
    narrative = set(NARRATIVE_FIELDS.values())
    for api_name, field in REPORT_FIELDS.items():
        if api_name not in data:
            continue
        value = data[api_name]
        if value is None and field not in NULLABLE_FIELDS:
            value = [] if field == 'images' else ''
        if field in narrative and value:
            value = plain_text(value)
        setattr(report, field, value)
    return report


def _iso(dt) -> Optional[str]:
    return dt.isoformat() if dt else None


def serialize_report(r: Report, *, full_patient: bool = True) -> dict:
    data = {
        'id': r.id,
        'patientId': r.patient_id,
        'doctorId': r.doctor_id,
        'reportType': r.report_type,
        'examinationType': r.examination_type,
        'examinationDate': _iso(r.examination_date),
        'interpretationDate': _iso(r.interpretation_date),
        'images': list(r.images or []),
        'createdAt': _iso(r.created_at),
        'updatedAt': _iso(r.updated_at),
    }
    for group in (INSTITUTION_FIELDS, ABDOMINAL_FIELDS, CAROTID_FIELDS, NARRATIVE_FIELDS):
        for api_name, field in group.items():
            data[api_name] = getattr(r, field)
    patient = r.patient
    data['patient'] = serialize_patient(patient) if full_patient else serialize_patient_summary(patient)
    data['doctor'] = {
        'id': r.doctor.id,
        'name': r.doctor.display_name,
        'licenseNumber': r.doctor.license_number,
    }
    return data


def doctor_reports(doctor, *, patient_id=None, report_type=None, start=None, end=None):
    qs = Report.objects.filter(doctor=doctor).select_related('patient', 'doctor')
    if patient_id:
        qs = qs.filter(patient_id=patient_id)
    if report_type:
        qs = qs.filter(report_type=report_type)
    # both bounds required, as in the list filter UI
    if start and end:
        qs = qs.filter(examination_date__gte=start, examination_date__lte=end)
    return qs.order_by('-examination_date', '-id')


def get_report_or_404(pk) -> Report:
    report = Report.objects.select_related('patient', 'doctor').filter(id=pk).first()
    if not report:
        raise NotFound('Report not found')
    return report


def ensure_author(user, report: Report) -> None:
    if report.doctor_id != getattr(user, 'id', None):
        raise PermissionDenied('Only the authoring doctor can modify this report')


def create_report(doctor, data: dict) -> Report:
    patient = Patient.objects.filter(id=data['patientId']).first()
    if not patient:
        raise ValidationError({'patientId': ['Patient not found']})
    report = Report(patient=patient, doctor=doctor)
    # institution block defaults to the doctor's own profile
    for api_name, field in INSTITUTION_FIELDS.items():
        if not data.get(api_name):
            setattr(report, field, getattr(doctor, field))
    _apply(report, {k: v for k, v in data.items() if not (k in INSTITUTION_FIELDS and not v)})
    report.save()
    return report


def update_report(report: Report, data: dict) -> Report:
    _apply(report, data)
    report.save()
    return report
