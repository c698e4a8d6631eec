from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from chat.services import ConversationService


class Command(BaseCommand):
    help = "Create a group conversation from member emails"

    def add_arguments(self, parser):
        parser.add_argument("name", help="Group name")
        parser.add_argument("creator", help="Email of the creating user")
        parser.add_argument("members", nargs="+", help="Emails of the other members")

    def handle(self, *args, **options):
        User = get_user_model()
        emails = [options["creator"], *options["members"]]
        users = {u.email: u for u in User.objects.filter(email__in=emails)}

        missing = [email for email in emails if email not in users]
        if missing:
            raise CommandError(f"Unknown users: {', '.join(missing)}")

        result = ConversationService.create_group(
            users[options["creator"]],
            options["name"],
            [users[email] for email in options["members"]],
        )
        if not result.success:
            raise CommandError(result.error)

        self.stdout.write(
            self.style.SUCCESS(f"Created group conversation {result.data.id}")
        )
