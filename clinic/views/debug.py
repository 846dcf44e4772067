"""
Diagnostics for the per-process user profile cache.
"""
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.services.profiles import compare_profiles, serialize_profile
from clinic.services.user_cache import get_profile_cache

User = get_user_model()


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cache_stats(request):
    """Entry counts; ``expiredEntries`` are stale entries not yet read again."""
    return Response({
        'ok': True,
        'data': {
            'cache': get_profile_cache().stats().as_dict(),
            'timestamp': timezone.now().isoformat(),
        },
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cache_vs_db(request):
    """Compare what the cache would serve for the current user with the database row."""
    user = User.objects.filter(id=request.user.id).first()
    if not user:
        return Response({'ok': False, 'detail': 'User not found in database'}, status=404)
    cached = get_profile_cache().peek(user.id)
    return Response(compare_profiles(cached, serialize_profile(user)))
