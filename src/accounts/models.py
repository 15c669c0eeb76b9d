import uuid

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Custom manager for the User model that uses email as the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("E-postadress är obligatorisk.")
        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Role.ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superanvändaren måste ha is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superanvändaren måste ha is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Staff profile for the CRM.

    Uses email as the unique identifier instead of a username. The role
    decides which commission parameters apply: openers and team leaders
    are paid per qualifying lead and per closed deal, closers per deal.
    Partner users belong to an organization and may only submit credit
    requests on its behalf.
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "Administratör"
        TEAMLEADER = "teamleader", "Teamledare"
        OPENER = "opener", "Opener"
        CLOSER = "closer", "Closer"
        ORGANIZATION = "organization", "Partner"

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        "e-postadress",
        unique=True,
        error_messages={
            "unique": "En användare med denna e-postadress finns redan.",
        },
    )
    first_name = models.CharField("förnamn", max_length=150, blank=True, default="")
    last_name = models.CharField("efternamn", max_length=150, blank=True, default="")
    phone = models.CharField("telefon", max_length=30, blank=True, default="")
    role = models.CharField(
        "roll",
        max_length=20,
        choices=Role.choices,
        default=Role.OPENER,
        db_index=True,
    )
    organization = models.ForeignKey(
        "partners.Organization",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="members",
        verbose_name="organisation",
    )

    # Opener / team leader parameters
    opener_commission_per_lead = models.DecimalField(
        "provision per kvalificerat lead",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    opener_commission_per_deal = models.DecimalField(
        "provision per stängd affär",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )

    # Closer parameters
    closer_base_commission = models.DecimalField(
        "grundprovision",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    closer_markup_percentage = models.DecimalField(
        "påslag (%)",
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
    )
    closer_company_markup_share = models.DecimalField(
        "företagets andel av påslag (%)",
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
    )

    is_active = models.BooleanField("aktiv", default=True, db_index=True)
    is_staff = models.BooleanField("personal", default=False)
    date_joined = models.DateTimeField("registrerad", default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = "användare"
        verbose_name_plural = "användare"
        ordering = ["last_name", "first_name", "email"]

    def __str__(self):
        return self.get_full_name() or self.email

    def clean(self):
        super().clean()
        if self.role == self.Role.ORGANIZATION and not self.organization_id:
            raise ValidationError(
                {"organization": "En partneranvändare måste tillhöra en organisation."}
            )
        if self.role != self.Role.ORGANIZATION and self.organization_id:
            raise ValidationError(
                {"organization": "Endast partneranvändare kan kopplas till en organisation."}
            )

    def get_full_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name

    def get_short_name(self):
        return self.first_name

    # ------------------------------------------------------------------
    # Role helper properties
    # ------------------------------------------------------------------

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN

    @property
    def is_teamleader(self):
        return self.role == self.Role.TEAMLEADER

    @property
    def is_opener(self):
        return self.role == self.Role.OPENER

    @property
    def is_closer(self):
        return self.role == self.Role.CLOSER

    @property
    def is_partner(self):
        return self.role == self.Role.ORGANIZATION


class CloserCommissionType(models.Model):
    """Named fixed commission a closer earns for a given kind of deal."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    closer = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="commission_types",
        verbose_name="closer",
    )
    name = models.CharField("namn", max_length=120)
    commission_amount = models.DecimalField("provision", max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [("closer", "name")]
        ordering = ["name"]
        verbose_name = "provisionstyp"
        verbose_name_plural = "provisionstyper"

    def __str__(self):
        return f"{self.name} ({self.commission_amount})"
