from django.core.management.base import BaseCommand

from accounts.repositories import DEFAULT_ADMIN, UserRepository
from core.repositories import EntityStore


class Command(BaseCommand):
    help = 'Seed the default administrator if the users collection is empty'

    def handle(self, *args, **options):
        users = UserRepository(EntityStore.from_settings())

        # Check if the collection has been written before
        if users.is_seeded() and users.all():
            self.stdout.write(self.style.WARNING('Users already exist'))
            return

        users.save_all([DEFAULT_ADMIN])

        self.stdout.write(self.style.SUCCESS(
            f'Administrator created: {DEFAULT_ADMIN.username} / {DEFAULT_ADMIN.password}'
        ))
