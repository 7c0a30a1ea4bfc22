from django.core.management.base import BaseCommand

from core.application import FinanceApplication


class Command(BaseCommand):
    help = 'Forget the stored session token and user'

    def handle(self, *args, **options):
        app = FinanceApplication()
        user = app.start()
        app.logout()

        if user:
            self.stdout.write(self.style.SUCCESS(f"✅ Signed out {user.get('username')}"))
        else:
            self.stdout.write(self.style.WARNING("No active session"))
