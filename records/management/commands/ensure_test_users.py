# records/management/commands/ensure_test_users.py
from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password
from records.models import User

# username, role, clinic location, manager locations
TEST_SET = [
    ("nurse_qoz", "maleNurse", "AL QOUZ", []),
    ("nurse_sonapur", "maleNurse", "SONAPUR 1", []),
    ("manager1", "manager", "", ["AL QOUZ", "SONAPUR 1"]),
    ("super", "superadmin", "", []),
]


class Command(BaseCommand):
    help = "Ensure test users exist and password=123456 (idempotent)."

    def handle(self, *args, **opts):
        for username, role, location, managed in TEST_SET:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "role": role,
                    "location_id": location,
                    "manager_locations": managed,
                    "password": make_password("123456"),
                    "is_active": True,
                },
            )
            if not created:
                # reset password, activation, role and locations
                u.password = make_password("123456")
                u.role = role
                u.location_id = location
                u.manager_locations = managed
                u.is_active = True
                u.save(update_fields=["password", "role", "location_id", "manager_locations", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
