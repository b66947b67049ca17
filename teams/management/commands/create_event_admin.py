from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.core.validators import validate_email
from django.core.exceptions import ValidationError

User = get_user_model()


class Command(BaseCommand):
    help = "Create or update a staff account that can use the admin review API"

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", required=True)
        parser.add_argument("--name", default="", help="Display name (first name)")

    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        password = options["password"]

        try:
            validate_email(email)
        except ValidationError:
            raise CommandError(f"Invalid email: {email}")
        if len(password) < 6:
            raise CommandError("Password must be at least 6 characters")

        user = User.objects.filter(email__iexact=email).first()
        created = user is None
        if created:
            user = User(username=email, email=email)

        user.is_staff = True
        user.is_active = True
        if options["name"]:
            user.first_name = options["name"]
        user.set_password(password)
        user.save()

        verb = "Created" if created else "Updated"
        self.stdout.write(self.style.SUCCESS(f"{verb} admin {email} (id={user.id})"))
