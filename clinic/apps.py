from django.apps import AppConfig
from django.conf import settings


class ClinicConfig(AppConfig):
    """App config; also the owner of the per-process user profile cache."""
    name = 'clinic'
    default_auto_field = 'django.db.models.BigAutoField'

    profile_cache = None

    def ready(self) -> None:
        from clinic.cache import ExpiringCache
        from clinic.services.profiles import load_profile
        from clinic.services.user_cache import UserProfileCache

        self.profile_cache = UserProfileCache(
            ExpiringCache(ttl=getattr(settings, 'USER_CACHE_TTL', 300)),
            retrieve=load_profile,
        )
