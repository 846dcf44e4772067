"""
Ultrasound report views.

Reports are listed per authoring doctor.  Creation fills the
institution block from the doctor's profile when the form leaves it
empty, so printed reports carry the clinic header by default.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.models import Report
from clinic.permissions import IsDoctorRole, IsDoctorOrReadOnly
from clinic.serializers.report import ReportWriteSerializer, ReportListQuerySerializer
from clinic.services.audit import log_action
from clinic.services.reports import (
    create_report,
    doctor_reports,
    ensure_author,
    get_report_or_404,
    serialize_report,
    update_report,
)

RECENT_LIMIT = 5


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def reports(request):
    if request.method == 'GET':
        q = ReportListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        v = q.validated_data
        qs = doctor_reports(
            request.user,
            patient_id=v.get('patientId'),
            report_type=v.get('reportType'),
            start=v.get('startDate'),
            end=v.get('endDate'),
        )
        return Response([serialize_report(r) for r in qs])

    s = ReportWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    report = create_report(request.user, s.validated_data)
    log_action(user=request.user, action='report_create', object_type='report', object_id=report.id,
               detail={'patientId': report.patient_id, 'reportType': report.report_type})
    return Response(serialize_report(report), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def recent_reports(request):
    qs = (
        Report.objects.filter(doctor=request.user)
        .select_related('patient', 'doctor')
        .order_by('-examination_date', '-id')[:RECENT_LIMIT]
    )
    return Response([serialize_report(r, full_patient=False) for r in qs])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsDoctorOrReadOnly])
def report_detail(request, pk: int):
    report = get_report_or_404(pk)
    if request.method == 'GET':
        return Response(serialize_report(report))

    ensure_author(request.user, report)
    if request.method == 'PUT':
        s = ReportWriteSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        update_report(report, s.validated_data)
        log_action(user=request.user, action='report_update', object_type='report', object_id=report.id)
        return Response(serialize_report(report))

    report_id = report.id
    report.delete()
    log_action(user=request.user, action='report_delete', object_type='report', object_id=report_id)
    return Response(status=status.HTTP_204_NO_CONTENT)
