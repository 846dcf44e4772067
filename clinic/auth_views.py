"""
Authentication views.

Username/password login issues both a legacy DRF token (used by
``clinic.client.ClinicClient`` and older frontends) and a JWT pair.
``refresh_session_view`` is the explicit "my profile changed elsewhere,
give me the current one" entry point: it drops the cached profile and
re-reads it from the database.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.serializers.auth import LoginSerializer
from clinic.services.audit import log_action, client_ip
from clinic.services.profiles import serialize_profile
from clinic.services.user_cache import get_profile_cache
from clinic.throttling import LoginRateThrottle

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']
    password = s.validated_data['password']

    user = authenticate(request, username=username, password=password)
    if not user:
        log_action(user=None, action='login', object_type='user', object_id=None,
                   detail={'result': 'fail', 'username': username, 'ip': client_ip(request)})
        logger.info("failed login for %s", username)
        return Response({'ok': False, 'detail': 'Invalid username or password'}, status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': client_ip(request)})

    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)

    return Response({
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'role': user.role,
        'user': serialize_profile(user),
    }, status=200)


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from refresh token."""
    view = TokenRefreshView.as_view()
    resp = view(request._request)
    if isinstance(resp, Response):
        data = dict(resp.data)
        if 'access' in data and 'jwt_access' not in data:
            data['jwt_access'] = data.pop('access')
        return Response(data, status=resp.status_code)
    return resp


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist current user's refresh tokens (all or a given one)."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            return Response({'ok': False, 'detail': str(e)}, status=400)
        count = 1
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    get_profile_cache().invalidate(request.user.id)
    return Response({'ok': True, 'blacklisted': count})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def refresh_session_view(request):
    """Drop the cached profile and return a fresh copy from the database."""
    cache = get_profile_cache()
    cache.invalidate(request.user.id)
    profile = cache.fetch(request.user.id)
    if profile is None:
        return Response({'ok': False, 'detail': 'User not found'}, status=404)
    resp = Response({'ok': True, 'data': {'user': profile, 'message': 'Fresh user data retrieved from database'}})
    resp['Cache-Control'] = 'private, max-age=300'
    return resp
