"""
Management command to expire stale payment requests.

Pending requests are also expired whenever payment requests are listed;
run this from cron so they expire even when nobody is polling.

Usage:
    python manage.py expire_payment_requests
    python manage.py expire_payment_requests --dry-run
"""

from django.core.management.base import BaseCommand
from apps.trips.services import expire_payment_requests


class Command(BaseCommand):
    help = 'Mark pending payment requests past their expiry as expired'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show how many requests would expire without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        count = expire_payment_requests(dry_run=dry_run)

        if count == 0:
            self.stdout.write(self.style.SUCCESS('No payment requests to expire.'))
            return

        if dry_run:
            self.stdout.write(
                self.style.WARNING(f'--dry-run mode: {count} payment request(s) would expire.')
            )
            return

        self.stdout.write(self.style.SUCCESS(f'Expired {count} payment request(s).'))
