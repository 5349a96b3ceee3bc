from django.core.management.base import BaseCommand
from apps.points.services import PointsService


class Command(BaseCommand):
    help = 'Compare cached points balances with the points ledger'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Rewrite drifted balances from the ledger',
        )

    def handle(self, *args, **options):
        fix = options.get('fix', False)
        self.stdout.write('Reconciling points balances...')

        drifted = PointsService.reconcile_balances(fix=fix)

        for user_id, cached, replayed in drifted:
            self.stdout.write(
                self.style.WARNING(f'User {user_id}: cached={cached} ledger={replayed}')
            )

        if not drifted:
            self.stdout.write(self.style.SUCCESS('All balances match the ledger'))
        elif fix:
            self.stdout.write(self.style.SUCCESS(f'Rewrote {len(drifted)} balance(s) from the ledger'))
        else:
            self.stdout.write(self.style.ERROR(f'{len(drifted)} balance(s) drifted; rerun with --fix'))
