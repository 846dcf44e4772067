# clinic/management/commands/ensure_test_users.py
from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password

from clinic.models import User
from clinic.services.user_cache import invalidate_user_cache

TEST_SET = [
    ("doctor1", User.ROLE_DOCTOR),
    ("nurse1", User.ROLE_NURSE),
    ("admin1", User.ROLE_ADMIN),
]

PASSWORD = "sono-test-2024"


class Command(BaseCommand):
    help = f"Ensure test users exist with password={PASSWORD} (idempotent)."

    def handle(self, *args, **opts):
        for username, role in TEST_SET:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "role": role,
                    "password": make_password(PASSWORD),
                    "email": f"{username}@example.com",
                    "is_active": True,
                },
            )
            if not created:
                # reset password, role and active flag
                u.password = make_password(PASSWORD)
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active", "updated_at"])
                invalidate_user_cache(u.id)
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
