"""
Read-through cache for the current user's profile.

Pages and API clients ask for "the current user" far more often than the
profile actually changes, so the profile is kept in an
:class:`~clinic.cache.ExpiringCache` for ``USER_CACHE_TTL`` seconds.
Anything that writes the user must call :meth:`UserProfileCache.invalidate`
right after the write succeeds, otherwise readers may see the old profile
until the entry expires.

The check-cache / retrieve / populate sequence is not locked.  Two
concurrent misses for the same user both retrieve and the last write wins.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import requests
from django.apps import apps

from clinic.cache import CacheStats, ExpiringCache

logger = logging.getLogger(__name__)

USER_CACHE_PREFIX = 'user_'

Profile = Dict[str, Any]


class ProfileUnavailable(Exception):
    """Raised by a retriever when the profile could not be read."""


def user_cache_key(user_id) -> str:
    return f"{USER_CACHE_PREFIX}{user_id}"


class UserProfileCache:

    def __init__(self, cache: ExpiringCache[Profile], retrieve: Callable[[str], Optional[Profile]]):
        self.cache = cache
        self.retrieve = retrieve

    def fetch(self, user_id) -> Optional[Profile]:
        """Return the cached profile, retrieving it on a miss.

        A failed retrieval returns ``None`` and leaves the cache untouched so
        the next call tries again.  Callers decide whether to retry or fall
        back to data they already hold.
        """
        key = user_cache_key(user_id)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            profile = self.retrieve(str(user_id))
        except (ProfileUnavailable, requests.RequestException) as exc:
            logger.warning("profile retrieval failed for user %s: %s", user_id, exc)
            return None
        if profile is None:
            logger.info("no profile found for user %s", user_id)
            return None

        self.cache.set(key, profile)
        return profile

    def prime(self, user_id, profile: Profile) -> None:
        """Store a profile obtained some other way, e.g. from a login response."""
        self.cache.set(user_cache_key(user_id), profile)

    def invalidate(self, user_id) -> None:
        self.cache.invalidate(user_cache_key(user_id))

    def peek(self, user_id) -> Optional[Profile]:
        """Cached profile or ``None``; never retrieves."""
        return self.cache.get(user_cache_key(user_id))

    def clear(self) -> None:
        self.cache.clear()

    def stats(self) -> CacheStats:
        return self.cache.stats()


def get_profile_cache() -> UserProfileCache:
    """The process-wide cache built by :class:`clinic.apps.ClinicConfig`."""
    return apps.get_app_config('clinic').profile_cache


def invalidate_user_cache(user_id) -> None:
    get_profile_cache().invalidate(user_id)
