"""
Dashboard statistics endpoint.

Returns report and patient counts for the signed-in doctor: totals,
month-over-month growth, a six month trend and breakdowns by
examination type and patient gender.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.services.stats import dashboard_stats


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def stats(request):
    return Response(dashboard_stats(request.user))
