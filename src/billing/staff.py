"""Staff roles as a closed set of variants.

Each variant carries exactly the commission parameters that make sense for
it, so an opener can never be paid with closer parameters and a partner
user never carries commission rates at all.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class OpenerParams:
    commission_per_lead: Decimal | None = None
    commission_per_deal: Decimal | None = None


@dataclass(frozen=True)
class CloserParams:
    base_commission: Decimal | None = None
    markup_percentage: Decimal | None = None
    company_markup_share: Decimal | None = None
    # (name, amount) pairs, sorted by name
    commission_types: tuple[tuple[str, Decimal], ...] = ()


@dataclass(frozen=True)
class OpenerRole:
    params: OpenerParams


@dataclass(frozen=True)
class TeamLeaderRole:
    params: OpenerParams


@dataclass(frozen=True)
class CloserRole:
    params: CloserParams


@dataclass(frozen=True)
class AdminRole:
    pass


@dataclass(frozen=True)
class PartnerUserRole:
    organization_id: str


StaffRole = Union[OpenerRole, TeamLeaderRole, CloserRole, AdminRole, PartnerUserRole]


@dataclass(frozen=True)
class StaffProfile:
    id: str
    email: str
    name: str
    role: StaffRole

    @property
    def display_name(self) -> str:
        return self.name or self.email


def staff_role_for(user) -> StaffRole:
    """Convert an ``accounts.User`` row into its role variant."""
    from accounts.models import User

    opener_params = OpenerParams(
        commission_per_lead=user.opener_commission_per_lead,
        commission_per_deal=user.opener_commission_per_deal,
    )
    if user.role == User.Role.OPENER:
        return OpenerRole(opener_params)
    if user.role == User.Role.TEAMLEADER:
        return TeamLeaderRole(opener_params)
    if user.role == User.Role.CLOSER:
        commission_types = tuple(
            sorted((t.name, t.commission_amount) for t in user.commission_types.all())
        )
        return CloserRole(
            CloserParams(
                base_commission=user.closer_base_commission,
                markup_percentage=user.closer_markup_percentage,
                company_markup_share=user.closer_company_markup_share,
                commission_types=commission_types,
            )
        )
    if user.role == User.Role.ORGANIZATION:
        return PartnerUserRole(organization_id=str(user.organization_id))
    return AdminRole()


def staff_profile_for(user) -> StaffProfile:
    return StaffProfile(
        id=str(user.pk),
        email=user.email,
        name=user.get_full_name(),
        role=staff_role_for(user),
    )
