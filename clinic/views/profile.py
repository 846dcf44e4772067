"""
Current user profile endpoint.

``GET`` reads straight from the database; it is the collaborator the
profile cache retrieves through when it is used over HTTP.  ``PUT``
invalidates the cached entry as soon as the write commits so the next
dashboard or profile page render refetches.
"""
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.serializers.auth import ProfileUpdateSerializer
from clinic.services.audit import log_action
from clinic.services.profiles import serialize_profile, update_profile
from clinic.services.user_cache import invalidate_user_cache

User = get_user_model()


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def profile(request):
    user = User.objects.filter(id=request.user.id).first()
    if not user:
        return Response({'ok': False, 'detail': 'User not found'}, status=404)
    if request.method == 'GET':
        return Response(serialize_profile(user))

    s = ProfileUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    with transaction.atomic():
        update_profile(
            user,
            name=v['name'],
            email=v['email'],
            license_number=v.get('licenseNumber', ''),
            institution_name=v.get('institutionName', ''),
            institution_address=v.get('institutionAddress', ''),
            institution_phone=v.get('institutionPhone', ''),
            current_password=v.get('currentPassword') or None,
            new_password=v.get('newPassword') or None,
        )
        log_action(user=user, action='profile_update', object_type='user', object_id=user.id,
                   detail={'passwordChanged': bool(v.get('newPassword'))})
    invalidate_user_cache(user.id)
    return Response(serialize_profile(user))
