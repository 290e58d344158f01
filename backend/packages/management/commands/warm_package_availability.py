"""
Django management command to recompute package availability.
Useful at startup, and as a quick report of packages that cannot be sold.
"""

from django.core.management.base import BaseCommand, CommandError

from packages.services import AvailabilityStatus, get_availability_service
from packages.tasks import warm_package_availability_cache


class Command(BaseCommand):
    help = 'Recompute availability for every package and refill the availability cache'

    def add_arguments(self, parser):
        parser.add_argument(
            '--include-inactive',
            action='store_true',
            help='Also compute archived packages and those outside their validity window',
        )
        parser.add_argument(
            '--show-stats',
            action='store_true',
            help='Show availability cache statistics after warming',
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('🔥 Warming package availability...'))

        result = warm_package_availability_cache(include_inactive=options['include_inactive'])
        if result['status'] != 'completed':
            raise CommandError(f"Package availability warming failed: {result.get('error')}")

        counts = result['counts']
        self.stdout.write(
            self.style.SUCCESS(f"✅ Computed availability for {result['packages']} packages")
        )
        self.stdout.write(f"   Available: {counts[AvailabilityStatus.AVAILABLE]}")
        self.stdout.write(f"   Low stock: {counts[AvailabilityStatus.LOW_STOCK]}")
        if counts[AvailabilityStatus.OUT_OF_STOCK]:
            self.stdout.write(
                self.style.WARNING(f"   Out of stock: {counts[AvailabilityStatus.OUT_OF_STOCK]}")
            )
        else:
            self.stdout.write("   Out of stock: 0")

        if options['show_stats']:
            stats = get_availability_service().get_cache_stats()
            self.stdout.write(self.style.SUCCESS('\n📊 Availability Cache Statistics:'))
            self.stdout.write(f"   Entries: {stats['size']}")
            self.stdout.write(f"   Version: {stats['version']}")
            self.stdout.write(f"   Hit Rate: {stats['hit_rate']:.1%}")
