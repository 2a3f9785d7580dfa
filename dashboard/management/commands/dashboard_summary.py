from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from accounts.repositories import UserRepository
from core.constants import UserRole
from core.repositories import EntityStore
from dashboard.services import DashboardService


class Command(BaseCommand):
    help = 'Print dashboard metrics as seen by an administrator'

    def add_arguments(self, parser):
        parser.add_argument('--username', help='Administrator to report as (default: first admin)')

    def handle(self, *args, **options):
        store = EntityStore.from_settings()
        admins = UserRepository(store).filter(role=UserRole.ADMIN)
        if options['username']:
            admins = [user for user in admins if user.username == options['username']]
        if not admins:
            raise CommandError('No matching administrator found')

        stats = DashboardService(store).get_dashboard(admins[0])
        currency = getattr(settings, 'RMS_CURRENCY', '')

        self.stdout.write(self.style.MIGRATE_HEADING('Rooms'))
        self.stdout.write(f'  Total:       {stats.total_rooms}')
        self.stdout.write(f'  Available:   {stats.available_rooms}')
        self.stdout.write(f'  Occupied:    {stats.occupied_rooms}')
        self.stdout.write(f'  Maintenance: {stats.maintenance_rooms}')
        self.stdout.write(f'  Reserved:    {stats.reserved_rooms}')

        self.stdout.write(self.style.MIGRATE_HEADING('Finance'))
        self.stdout.write(f'  Projected revenue: {currency} {stats.projected_revenue:,}')
        self.stdout.write(f'  Total expenses:    {currency} {stats.total_expenses:,}')
        self.stdout.write(f'  Net profit:        {currency} {stats.net_profit:,}')

        if stats.overdue_rooms:
            self.stdout.write(self.style.WARNING(f'{stats.overdue_count} overdue rooms'))
            for room in stats.overdue_rooms:
                self.stdout.write(f'  {room.room_number}: {currency} {room.current_balance:,}')

        if stats.reminders:
            self.stdout.write(self.style.MIGRATE_HEADING('Open-ended stays'))
            for room in stats.reminders:
                self.stdout.write(f'  {room.room_number} since {room.occupancy_start_date or "-"}')

        self.stdout.write(self.style.MIGRATE_HEADING(f'Leaderboard ({stats.active_employees} employees)'))
        for rank, employee in enumerate(stats.leaderboard, start=1):
            self.stdout.write(f'  {rank}. {employee.full_name}: {employee.coins} coins')

        self.stdout.write(self.style.SUCCESS('Dashboard summary complete'))
