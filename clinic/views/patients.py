"""
Patient management views.

Doctors register patients and see the ones they registered or have
written reports for.  Any signed-in staff member may open a single
patient record; only doctors may change or delete one.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.permissions import IsDoctorRole, IsDoctorOrReadOnly
from clinic.serializers.patient import PatientWriteSerializer, PatientListQuerySerializer
from clinic.services.audit import log_action
from clinic.services.patients import (
    create_patient,
    get_patient_or_404,
    serialize_patient,
    update_patient,
    visible_patients,
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def patients(request):
    if request.method == 'GET':
        q = PatientListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = visible_patients(request.user, search=q.validated_data.get('search'))
        return Response([serialize_patient(p) for p in qs])

    s = PatientWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = create_patient(request.user, s.validated_data)
    log_action(user=request.user, action='patient_create', object_type='patient', object_id=patient.id)
    return Response(serialize_patient(patient), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsDoctorOrReadOnly])
def patient_detail(request, pk: int):
    patient = get_patient_or_404(pk)
    if request.method == 'GET':
        return Response(serialize_patient(patient))

    if request.method == 'PUT':
        s = PatientWriteSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        update_patient(patient, s.validated_data)
        log_action(user=request.user, action='patient_update', object_type='patient', object_id=patient.id,
                   detail={'fields': sorted(s.validated_data)})
        return Response(serialize_patient(patient))

    patient_id = patient.id
    patient.delete()
    log_action(user=request.user, action='patient_delete', object_type='patient', object_id=patient_id)
    return Response(status=status.HTTP_204_NO_CONTENT)
