"""
Management command to reconcile derived project finances.

Reports every project whose received/pending/profit fields disagree with
its ledger, and optionally rewrites them.

Usage:
    python manage.py reconcile_finances --dry-run
    python manage.py reconcile_finances
"""

from django.core.management.base import BaseCommand

from apps.lifecycle.services import (
    validate_financial_consistency,
    perform_automated_corrections,
)


class Command(BaseCommand):
    help = 'Check derived project finances against the ledger and correct them'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show inconsistencies without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        validation = validate_financial_consistency()

        for warning in validation.warnings:
            self.stdout.write(self.style.WARNING(warning))

        if validation.is_valid:
            self.stdout.write(
                self.style.SUCCESS('All project finances are consistent.')
            )
            return

        self.stdout.write(
            f'\nFound {len(validation.inconsistent_project_ids)} inconsistent project(s):\n'
        )
        for issue in validation.issues:
            self.stdout.write(f'  - {issue}')

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        result = perform_automated_corrections()

        for detail in result.details:
            self.stdout.write(f'  {detail}')

        if result.errors:
            self.stdout.write(
                self.style.ERROR(f'\n{result.errors} project(s) could not be corrected.')
            )
        self.stdout.write(
            self.style.SUCCESS(f'\nApplied {result.corrections_applied} correction(s).')
        )
