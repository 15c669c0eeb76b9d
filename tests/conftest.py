from decimal import Decimal

import pytest

from accounts.models import User
from partners.models import Organization, OrganizationCommissionSettings


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@test.se",
        password="testpass123",
        first_name="Admin",
        last_name="Användare",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def teamleader_user(db):
    return User.objects.create_user(
        email="teamleader@test.se",
        password="testpass123",
        first_name="Tina",
        last_name="Teamledare",
        role=User.Role.TEAMLEADER,
    )


@pytest.fixture
def opener_user(db):
    return User.objects.create_user(
        email="opener@test.se",
        password="testpass123",
        first_name="Olle",
        last_name="Opener",
        role=User.Role.OPENER,
    )


@pytest.fixture
def closer_user(db):
    return User.objects.create_user(
        email="closer@test.se",
        password="testpass123",
        first_name="Clara",
        last_name="Closer",
        role=User.Role.CLOSER,
    )


@pytest.fixture
def organization(db):
    return Organization.objects.create(
        name="SunBro",
        price_per_solar_deal=Decimal("1000.00"),
        price_per_battery_deal=Decimal("1500.00"),
        credit_deadline_days=14,
    )


@pytest.fixture
def second_organization(db):
    return Organization.objects.create(
        name="Hyllinge Solkraft",
        price_per_solar_deal=Decimal("800.00"),
        price_per_battery_deal=Decimal("1200.00"),
        credit_deadline_days=14,
    )


@pytest.fixture
def archived_organization(db):
    return Organization.objects.create(
        name="Gamla Sol AB",
        status=Organization.Status.ARCHIVED,
        price_per_solar_deal=Decimal("500.00"),
    )


@pytest.fixture
def commission_settings(organization):
    return OrganizationCommissionSettings.objects.create(
        organization=organization,
        base_cost=Decimal("23000.00"),
        eur_to_sek_rate=Decimal("11.0000"),
        lf_finans_percent=Decimal("3.00"),
    )


@pytest.fixture
def partner_user(organization):
    return User.objects.create_user(
        email="partner@sunbro.se",
        password="testpass123",
        first_name="Per",
        last_name="Partner",
        role=User.Role.ORGANIZATION,
        organization=organization,
    )
