import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
        ("partners", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "email",
                    models.EmailField(
                        error_messages={"unique": "En användare med denna e-postadress finns redan."},
                        max_length=254,
                        unique=True,
                        verbose_name="e-postadress",
                    ),
                ),
                ("first_name", models.CharField(blank=True, default="", max_length=150, verbose_name="förnamn")),
                ("last_name", models.CharField(blank=True, default="", max_length=150, verbose_name="efternamn")),
                ("phone", models.CharField(blank=True, default="", max_length=30, verbose_name="telefon")),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("admin", "Administratör"),
                            ("teamleader", "Teamledare"),
                            ("opener", "Opener"),
                            ("closer", "Closer"),
                            ("organization", "Partner"),
                        ],
                        db_index=True,
                        default="opener",
                        max_length=20,
                        verbose_name="roll",
                    ),
                ),
                (
                    "opener_commission_per_lead",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True,
                        verbose_name="provision per kvalificerat lead",
                    ),
                ),
                (
                    "opener_commission_per_deal",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True,
                        verbose_name="provision per stängd affär",
                    ),
                ),
                (
                    "closer_base_commission",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True,
                        verbose_name="grundprovision",
                    ),
                ),
                (
                    "closer_markup_percentage",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=5, null=True,
                        verbose_name="påslag (%)",
                    ),
                ),
                (
                    "closer_company_markup_share",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=5, null=True,
                        verbose_name="företagets andel av påslag (%)",
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="aktiv")),
                ("is_staff", models.BooleanField(default=False, verbose_name="personal")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="registrerad")),
                (
                    "organization",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="members",
                        to="partners.organization",
                        verbose_name="organisation",
                    ),
                ),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text=(
                            "The groups this user belongs to. A user will get all permissions "
                            "granted to each of their groups."
                        ),
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "användare",
                "verbose_name_plural": "användare",
                "ordering": ["last_name", "first_name", "email"],
            },
        ),
        migrations.CreateModel(
            name="CloserCommissionType",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=120, verbose_name="namn")),
                ("commission_amount", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="provision")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "closer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="commission_types",
                        to="accounts.user",
                        verbose_name="closer",
                    ),
                ),
            ],
            options={
                "verbose_name": "provisionstyp",
                "verbose_name_plural": "provisionstyper",
                "ordering": ["name"],
                "unique_together": {("closer", "name")},
            },
        ),
    ]
