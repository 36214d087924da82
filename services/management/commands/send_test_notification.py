"""
Django management command to verify the notification setup
"""
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from services.chat_webhook import ChatWebhookError, is_valid_webhook_url, post_chat_message
from services.mailer import MailError, send_mail


class Command(BaseCommand):
    help = 'Send a test mail and chat message using the configured providers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--to',
            type=str,
            help='Recipient of the test mail (skipped when omitted)'
        )
        parser.add_argument(
            '--skip-chat',
            action='store_true',
            help='Do not post to the chat webhook'
        )

    def handle(self, *args, **options):
        failures = 0

        if options['to']:
            self.stdout.write(f"Sending test mail to {options['to']}...")
            try:
                backend = send_mail(
                    options['to'],
                    'Test notification',
                    'This is a test message from the property inquiry service.',
                )
                self.stdout.write(self.style.SUCCESS(f"  - Mail sent via {backend}"))
            except MailError as e:
                failures += 1
                self.stdout.write(self.style.ERROR(f"  - Mail failed: {e}"))

        if not options['skip_chat']:
            url = settings.CHAT_WEBHOOK_URL
            self.stdout.write("Posting test chat message...")
            if not is_valid_webhook_url(url):
                failures += 1
                self.stdout.write(self.style.ERROR("  - Chat webhook URL is missing or invalid"))
            else:
                try:
                    post_chat_message(url, 'Test notification from the property inquiry service.')
                    self.stdout.write(self.style.SUCCESS("  - Chat message posted"))
                except ChatWebhookError as e:
                    failures += 1
                    self.stdout.write(self.style.ERROR(f"  - Chat failed: {e}"))

        if failures:
            raise CommandError(f"{failures} test notification(s) failed")
