from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from farmhub.core.roles import Role
from farmhub.core.session import DEMO_ACCOUNTS, DEMO_PASSWORDS

User = get_user_model()

DEMO_PROFILES = {
    'admin': {'role': Role.ADMIN, 'full_name': 'System Administrator', 'phone': '+260971000001'},
    'manager': {'role': Role.MANAGER, 'full_name': 'Farm Manager', 'phone': '+260971000002'},
    'staff': {'role': Role.STAFF, 'full_name': 'Farm Worker', 'phone': '+260971000003'},
    'customer': {'role': Role.CUSTOMER, 'full_name': 'Demo Customer', 'phone': '+260971000004'},
}


class Command(BaseCommand):
    help = 'Create or update the demo profiles (admin, manager, staff, customer) for the orm backend'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset-passwords', action='store_true',
            help='Reset existing demo accounts to their documented passwords',
        )

    def handle(self, *args, **options):
        created_count = 0
        updated_count = 0

        for username, email in DEMO_ACCOUNTS.items():
            profile = DEMO_PROFILES[username]
            user, created = User.objects.update_or_create(
                username=username,
                defaults={
                    'email': email,
                    'role': profile['role'],
                    'full_name': profile['full_name'],
                    'phone': profile['phone'],
                    'is_active': True,
                    'is_staff': profile['role'] == Role.ADMIN,
                    'is_superuser': profile['role'] == Role.ADMIN,
                },
            )
            if created or options['reset_passwords']:
                user.set_password(DEMO_PASSWORDS[username])
                user.save(update_fields=['password'])

            if created:
                created_count += 1
                self.stdout.write(f'  ✓ Created {username} ({email}) as {profile["role"].label}')
            else:
                updated_count += 1
                self.stdout.write(f'  - Updated {username} ({email})')

        self.stdout.write(self.style.SUCCESS(
            f'\nCompleted: {created_count} demo users created, {updated_count} updated'
        ))
