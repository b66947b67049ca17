from django.db import migrations, models
import django.db.models.deletion


DEPARTMENT_CHOICES = [
    ("CSPIT - AIML", "CSPIT - AIML"),
    ("CSPIT - CSE", "CSPIT - CSE"),
    ("CSPIT - IT", "CSPIT - IT"),
    ("CSPIT - CE", "CSPIT - CE"),
    ("CSPIT - EE", "CSPIT - EE"),
    ("CSPIT - EC", "CSPIT - EC"),
    ("CSPIT - ME", "CSPIT - ME"),
    ("CSPIT - CL", "CSPIT - CL"),
    ("DEPSTAR - IT", "DEPSTAR - IT"),
    ("DEPSTAR - CE", "DEPSTAR - CE"),
    ("DEPSTAR - CSE", "DEPSTAR - CSE"),
    ("PDPIAS", "PDPIAS"),
    ("BDIAS", "BDIAS"),
    ("IIIM", "IIIM"),
    ("CLASS", "CLASS"),
    ("RPCP", "RPCP"),
    ("CMPICA", "CMPICA"),
    ("MTIN", "MTIN"),
    ("ARIP", "ARIP"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="RateLimitRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("ip", models.CharField(max_length=64)),
                ("endpoint", models.CharField(max_length=128)),
                ("count", models.PositiveIntegerField(default=1)),
                ("window_start", models.DateTimeField()),
            ],
            options={
                "indexes": [models.Index(fields=["window_start"], name="ratelimit_window_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("ip", "endpoint"), name="ratelimit_ip_endpoint_uniq"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("registration_id", models.CharField(max_length=40, unique=True)),
                ("team_name", models.CharField(max_length=50, unique=True)),
                ("department", models.CharField(choices=DEPARTMENT_CHOICES, max_length=32)),
                ("leader_email", models.EmailField(max_length=254)),
                ("leader_phone", models.CharField(max_length=10)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("APPROVED", "Approved"),
                            ("REJECTED", "Rejected"),
                            ("WAITLIST", "Waitlist"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                ("agreed_to_rules", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status"], name="team_status_idx"),
                    models.Index(fields=["department"], name="team_department_idx"),
                    models.Index(fields=["created_at"], name="team_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Member",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("phone", models.CharField(max_length=10)),
                ("roll_no", models.CharField(max_length=20)),
                (
                    "year",
                    models.CharField(
                        choices=[("1st Year", "1st Year"), ("2nd Year", "2nd Year")],
                        max_length=16,
                    ),
                ),
                ("is_leader", models.BooleanField(default=False)),
                ("position", models.PositiveSmallIntegerField(default=0)),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="members",
                        to="teams.team",
                    ),
                ),
            ],
            options={
                "ordering": ["-is_leader", "position"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_leader", True)),
                        fields=("team",),
                        name="member_one_leader_per_team",
                    ),
                    models.UniqueConstraint(fields=("team", "position"), name="member_team_position_uniq"),
                ],
            },
        ),
    ]
