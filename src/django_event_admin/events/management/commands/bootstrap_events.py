"""Management command to bootstrap accounts and events from a TOML configuration file."""

from typing import Any

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError, CommandParser
from django.db import transaction

from django_event_admin.config_loader import load_event_config
from django_event_admin.events.models import Event
from django_event_admin.events.services import EventService, Success, ValidationFailure


class Command(BaseCommand):
    """Bootstrap accounts and events from a TOML configuration file.

    Events go through :class:`~django_event_admin.events.services.EventService`
    so they are validated exactly like dashboard submissions.  Account
    passwords are hashed by ``create_user``.  Everything runs in a single
    transaction: one invalid event leaves the database untouched.

    Usage::

        manage.py bootstrap_events --config events.toml
        manage.py bootstrap_events --config events.toml --update
        manage.py bootstrap_events --config events.toml --dry-run
    """

    help = "Create or update accounts and events from a TOML config file."

    def add_arguments(self, parser: CommandParser) -> None:
        """Define the command-line arguments accepted by this command.

        Args:
            parser: The argument parser to configure.
        """
        parser.add_argument(
            "--config",
            required=True,
            help="Path to the bootstrap TOML configuration file.",
        )
        parser.add_argument(
            "--update",
            action="store_true",
            default=False,
            help="Update existing accounts and events instead of skipping them.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            default=False,
            help="Validate the config and print what would be created without saving.",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the bootstrap command.

        Args:
            *args: Positional arguments (unused).
            **options: Parsed command-line options.
        """
        try:
            conf = load_event_config(options["config"])
        except (FileNotFoundError, TypeError, ValueError) as exc:
            raise CommandError(str(exc)) from exc

        if options["dry_run"]:
            self._print_dry_run(conf)
            return

        with transaction.atomic():
            accounts = self._bootstrap_accounts(conf["accounts"], update=options["update"])
            events = self._bootstrap_events(conf["events"], update=options["update"])

        self.stdout.write(self.style.SUCCESS(f"Bootstrapped {accounts} account(s) and {events} event(s)."))

    def _print_dry_run(self, conf: dict[str, list[dict[str, Any]]]) -> None:
        self.stdout.write(self.style.NOTICE("Dry run: nothing will be saved."))
        for account in conf["accounts"]:
            role = "admin" if account.get("admin") else "user"
            self.stdout.write(f"  Account: {account['username']} ({role})")
        for event in conf["events"]:
            self.stdout.write(f"  Event: {event['name']} -> /{event['slug']}/")

    def _bootstrap_accounts(self, accounts_data: list[dict[str, Any]], *, update: bool) -> int:
        """Create or update accounts.

        Args:
            accounts_data: Account mappings from the config file.
            update: When ``True``, reset the password and profile of
                accounts that already exist instead of skipping them.

        Returns:
            The number of accounts created or updated.
        """
        user_model = get_user_model()
        touched = 0

        for data in accounts_data:
            admin = bool(data.get("admin", False))
            existing = user_model.objects.filter(username=data["username"]).first()

            if existing and not update:
                self.stdout.write(self.style.WARNING(f"  Account '{existing.username}' already exists, skipping."))
                continue

            if existing:
                existing.name = data.get("name", existing.name)
                existing.is_admin = admin
                existing.is_staff = admin
                existing.set_password(data["password"])
                existing.save()
                self.stdout.write(self.style.SUCCESS(f"  Updated account: {existing.username}"))
            else:
                account = user_model.objects.create_user(
                    username=data["username"],
                    password=data["password"],
                    name=data.get("name", ""),
                    is_admin=admin,
                    is_staff=admin,
                )
                self.stdout.write(self.style.SUCCESS(f"  Created account: {account.username}"))
            touched += 1

        return touched

    def _bootstrap_events(self, events_data: list[dict[str, Any]], *, update: bool) -> int:
        """Create or update events through the event service.

        Args:
            events_data: Event mappings from the config file.
            update: When ``True``, overwrite existing events matched by slug
                instead of skipping them.

        Returns:
            The number of events created or updated.

        Raises:
            CommandError: If the service rejects an event.
        """
        touched = 0

        for data in events_data:
            submission = {"name": data["name"], "description": data.get("description", "")}
            exists = Event.objects.filter(slug=data["slug"]).exists()

            if exists and not update:
                self.stdout.write(self.style.WARNING(f"  Event '{data['slug']}' already exists, skipping."))
                continue

            if exists:
                result = EventService.update(data["slug"], submission, principal=None)
            else:
                result = EventService.create(submission, principal=None)

            if isinstance(result, ValidationFailure):
                details = "; ".join(f"{error.field}: {error.message}" for error in result.errors)
                raise CommandError(f"Event '{data['name']}' rejected: {details}")
            if not isinstance(result, Success):
                raise CommandError(f"Event '{data['name']}' could not be saved.")

            verb = "Updated" if exists else "Created"
            self.stdout.write(self.style.SUCCESS(f"  {verb} event: {result.event.name}"))
            touched += 1

        return touched
