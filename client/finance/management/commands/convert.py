from django.core.management.base import BaseCommand, CommandError
from rest_framework.exceptions import APIException

from core.application import FinanceApplication
from finance.converter import CurrencyConverter
from finance.exceptions import get_error_message
from finance.utils.currency_utils import SUPPORTED_CURRENCIES


class Command(BaseCommand):
    help = 'Convert an amount between currencies using the backend exchange rates'

    def add_arguments(self, parser):
        parser.add_argument('amount', help='Amount to convert')
        parser.add_argument('from_currency', type=str.upper, help='Source currency code')
        parser.add_argument(
            'to_currencies',
            nargs='*',
            type=str.upper,
            help='Target currency code(s)',
        )
        parser.add_argument(
            '--rates',
            action='store_true',
            help='List all exchange rates for the source currency instead',
        )

    def handle(self, *args, **options):
        app = FinanceApplication()
        app.start()
        if not app.session.is_authenticated():
            raise CommandError('Not signed in. Run "manage.py login <username>" first.')

        service = app.currency_service
        source = options['from_currency']

        if options['rates']:
            try:
                rates = service.get_exchange_rates(source)
            except APIException as e:
                raise CommandError(get_error_message(e))
            for code in sorted(rates):
                self.stdout.write(f"{service.get_currency_flag(code)} 1 {source} = {rates[code]} {code}")
            return

        targets = options['to_currencies']
        if not targets:
            raise CommandError(
                f"Give at least one target currency: {', '.join(SUPPORTED_CURRENCIES)}"
            )

        converter = CurrencyConverter(service, session=app.session)
        failures = 0
        for target in targets:
            result = converter.convert(options['amount'], source, target)
            if result is None:
                failures += 1
                self.stdout.write(self.style.ERROR(f"❌ {source} -> {target}: {converter.error}"))
                continue
            self.stdout.write(
                self.style.SUCCESS(
                    f"{service.get_currency_flag(target)} "
                    f"{service.format_amount_with_currency(options['amount'], source)} = "
                    f"{service.format_amount_with_currency(result.converted_amount, target)} "
                    f"(rate {service.format_amount(result.exchange_rate, decimals=4)})"
                )
            )

        if failures:
            raise CommandError(f"{failures} conversion(s) failed")
