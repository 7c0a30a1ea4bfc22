from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from rest_framework.exceptions import APIException

from core.application import FinanceApplication
from finance.constants import (DEFAULT_PAGE_SIZE, DEFAULT_SORT_DIRECTION,
                               DEFAULT_SORT_FIELD, EXPENSE, SORT_DIRECTIONS,
                               SORT_FIELDS, TRANSACTION_TYPE_LABELS)
from finance.exceptions import get_error_message
from finance.services.transaction_service import (format_amount, format_date,
                                                  format_datetime)

ACTIONS = ('list', 'recent', 'summary', 'categories', 'trends', 'add', 'delete')


class Command(BaseCommand):
    help = 'List, add and delete transactions of the signed-in user'

    def add_arguments(self, parser):
        parser.add_argument('action', nargs='?', default='list', choices=ACTIONS)

        listing = parser.add_argument_group('list options')
        listing.add_argument('--page', type=int, default=0)
        listing.add_argument('--size', type=int, default=DEFAULT_PAGE_SIZE)
        listing.add_argument('--sort-by', default=DEFAULT_SORT_FIELD, choices=SORT_FIELDS)
        listing.add_argument('--sort-dir', default=DEFAULT_SORT_DIRECTION, choices=SORT_DIRECTIONS)
        listing.add_argument('--type', dest='filter_type', choices=list(TRANSACTION_TYPE_LABELS))
        listing.add_argument('--category', dest='filter_category')
        listing.add_argument('--months', type=int, default=12, help='Months of trends to show')

        draft = parser.add_argument_group('add options')
        draft.add_argument('--description')
        draft.add_argument('--amount')
        draft.add_argument('--transaction-type', default=EXPENSE, choices=list(TRANSACTION_TYPE_LABELS))
        draft.add_argument('--date', help='ISO-8601 date-time (defaults to now)')
        draft.add_argument('--set-category', dest='draft_category')
        draft.add_argument('--notes')

        parser.add_argument('--id', type=int, help='Transaction id (delete)')

    def handle(self, *args, **options):
        app = FinanceApplication()
        app.start()
        if not app.session.is_authenticated():
            raise CommandError('Not signed in. Run "manage.py login <username>" first.')

        handler = getattr(self, f"handle_{options['action']}")
        try:
            handler(app, options)
        except APIException as e:
            raise CommandError(get_error_message(e))

    def _require_loaded(self, state, result):
        if result is None and state.error:
            raise CommandError(state.error)
        return result

    def _write_transactions(self, transactions):
        if not transactions:
            self.stdout.write(self.style.WARNING('No transactions found'))
            return
        for t in transactions:
            style = self.style.SUCCESS if t.is_income else self.style.ERROR
            self.stdout.write(
                f"#{t.id:<5} {format_date(t.transaction_date):<13} "
                f"{t.description[:30]:<30} {t.category or 'Uncategorized':<16} "
                + style(f"{format_amount(t.signed_amount):>14}")
            )

    def handle_list(self, app, options):
        state = app.transactions
        changes = {
            'page': options['page'],
            'size': options['size'],
            'sort_by': options['sort_by'],
            'sort_dir': options['sort_dir'],
        }
        if options['filter_type']:
            changes['type'] = options['filter_type']
        if options['filter_category']:
            changes['category'] = options['filter_category']

        page = self._require_loaded(state, state.load_query(**changes))
        self._write_transactions(state.transactions)
        self.stdout.write(
            f"Page {page.page + 1} of {max(page.total_pages, 1)} "
            f"({page.total_elements} transactions)"
        )

    def handle_recent(self, app, options):
        state = app.transactions
        self._write_transactions(self._require_loaded(state, state.load_recent()))

    def handle_summary(self, app, options):
        state = app.transactions
        summary = self._require_loaded(state, state.load_summary())
        self.stdout.write(
            self.style.SUCCESS(
                f"Income:   {format_amount(summary.total_income)} ({summary.income_count})"
            )
        )
        self.stdout.write(
            self.style.ERROR(
                f"Expenses: {format_amount(summary.total_expenses)} ({summary.expense_count})"
            )
        )
        self.stdout.write(f"Net:      {format_amount(summary.net_worth)}")

    def handle_categories(self, app, options):
        state = app.transactions
        for category in self._require_loaded(state, state.load_categories()):
            self.stdout.write(f"- {category}")

    def handle_trends(self, app, options):
        for trend in app.transaction_service.get_monthly_trends(months=options['months']):
            self.stdout.write(
                f"{trend.month}: +{format_amount(trend.income)} "
                f"-{format_amount(trend.expenses)} = {format_amount(trend.net)}"
            )

    def handle_add(self, app, options):
        form = app.transaction_form()
        draft = dict(form.initial)
        draft.update({
            'description': options['description'] or '',
            'amount': options['amount'] or '',
            'type': options['transaction_type'],
            'category': options['draft_category'] or '',
            'notes': options['notes'] or '',
        })
        if options['date']:
            draft['transactionDate'] = options['date']

        result = form.submit(draft)
        if form.errors:
            for field, message in form.errors.items():
                self.stdout.write(self.style.ERROR(f"❌ {field}: {message}"))
            raise CommandError('Transaction was not saved')

        self.stdout.write(
            self.style.SUCCESS(
                f"✅ Saved #{result.id} {result.description} "
                f"{format_amount(result.amount)} on {format_datetime(result.transaction_date or timezone.now())}"
            )
        )

    def handle_delete(self, app, options):
        if options['id'] is None:
            raise CommandError('--id is required to delete a transaction')
        app.transactions.delete(options['id'])
        self.stdout.write(self.style.SUCCESS(f"✅ Deleted transaction #{options['id']}"))
