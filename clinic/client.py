"""
Thin HTTP client for the reporting API.

Used by scripts and other services that talk to a running backend.  The
client keeps its own :class:`~clinic.services.user_cache.UserProfileCache`
in front of ``GET /api/profile`` so repeated "who am I" lookups within
``USER_CACHE_TTL`` cost a single request.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from clinic.cache import ExpiringCache
from clinic.services.user_cache import ProfileUnavailable, UserProfileCache

logger = logging.getLogger(__name__)


class ClinicAPIError(Exception):
    def __init__(self, status_code: int, detail: Any = None):
        super().__init__(f"API error {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class ClinicClient:

    def __init__(self, base_url: Optional[str] = None, *, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None, ttl: Optional[float] = None):
        self.base_url = (base_url or settings.CLINIC_API_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.CLINIC_API_TIMEOUT
        self.session = session or requests.Session()
        self.user_cache = UserProfileCache(
            ExpiringCache(ttl=ttl if ttl is not None else settings.USER_CACHE_TTL),
            retrieve=self._retrieve_profile,
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        r = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        if not 200 <= r.status_code < 300:
            try:
                detail = r.json()
            except ValueError:
                detail = r.text
            raise ClinicAPIError(r.status_code, detail)
        return r.json()

    def login(self, username: str, password: str) -> Dict[str, Any]:
        data = self._request('POST', '/api/auth/login', json={'username': username, 'password': password})
        self.session.headers['Authorization'] = f"Token {data['token']}"
        profile = data.get('user')
        if profile:
            self.user_cache.prime(profile['id'], profile)
        return data

    def get_profile(self) -> Dict[str, Any]:
        return self._request('GET', '/api/profile')

    def update_profile(self, **fields) -> Dict[str, Any]:
        profile = self._request('PUT', '/api/profile', json=fields)
        self.user_cache.invalidate(profile['id'])
        return profile

    def _retrieve_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        # the API only exposes the signed-in user's profile
        try:
            profile = self.get_profile()
        except ClinicAPIError as exc:
            raise ProfileUnavailable(str(exc)) from exc
        if str(profile.get('id')) != user_id:
            logger.info("signed-in profile %s does not match requested user %s", profile.get('id'), user_id)
            return None
        return profile

    def fetch_user_with_cache(self, user_id) -> Optional[Dict[str, Any]]:
        return self.user_cache.fetch(user_id)

    def invalidate_user_cache(self, user_id) -> None:
        self.user_cache.invalidate(user_id)

    def cache_stats(self) -> Dict[str, Any]:
        return self._request('GET', '/api/debug/cache-stats')['data']['cache']
