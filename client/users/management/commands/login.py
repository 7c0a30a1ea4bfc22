from getpass import getpass

from django.core.management.base import BaseCommand, CommandError
from rest_framework.exceptions import APIException

from core.application import FinanceApplication
from finance.exceptions import get_error_message


class Command(BaseCommand):
    help = 'Sign in to the finance backend and persist the session'

    def add_arguments(self, parser):
        parser.add_argument('username', help='Account username')
        parser.add_argument(
            '--password',
            help='Account password (prompted for when omitted)',
        )
        parser.add_argument(
            '--register',
            metavar='EMAIL',
            help='Create the account with this email address before signing in',
        )

    def handle(self, *args, **options):
        password = options.get('password') or getpass('Password: ')
        app = FinanceApplication()

        try:
            if options.get('register'):
                user = app.register(options['username'], options['register'], password)
            else:
                user = app.login(options['username'], password)
        except APIException as e:
            raise CommandError(get_error_message(e))

        self.stdout.write(
            self.style.SUCCESS(f"✅ Signed in as {user.get('username')} ({user.get('email', '-')})")
        )
