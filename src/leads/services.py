"""Business-logic / service functions for the leads app."""
from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from billing.config import CommissionConfig
from billing.deal_pricing import DealPricingInput, compute_deal_pricing
from billing.eligibility import check_new_credit_request
from billing.exceptions import InvalidCreditTransition, InvalidPipelineTransition
from billing.repository import lead_record, organization_record
from billing.staff import staff_role_for
from leads.models import Contact, CreditRequest, InterestType, Sale

logger = logging.getLogger("crm")


# ---------------------------------------------------------------------------
# create_lead
# ---------------------------------------------------------------------------

@transaction.atomic
def create_lead(
    *,
    email: str,
    interest: str,
    opener,
    organizations=(),
    name: str = "",
    phone: str = "",
    address: str = "",
    postal_code: str = "",
    date_sent=None,
    actor=None,
) -> Contact:
    """Register a lead and offer it to the given organizations.

    Parameters
    ----------
    email : str
    interest : str
        One of ``InterestType`` values.
    opener : accounts.models.User
        Opener or team leader credited with the lead.
    organizations : iterable of partners.models.Organization
        Must all be active.
    date_sent : date, optional
        Defaults to today (local time).

    Returns
    -------
    Contact
    """
    if interest not in InterestType.values:
        raise ValueError(f"Okänd intressetyp: {interest!r}.")
    if opener.role not in ("opener", "teamleader"):
        raise ValueError("Leadet måste tilldelas en opener eller teamledare.")

    organizations = list(organizations)
    inactive = [org.name for org in organizations if not org.is_active]
    if inactive:
        raise ValueError(f"Arkiverade organisationer kan inte ta emot leads: {', '.join(inactive)}.")

    contact = Contact.objects.create(
        email=email,
        interest=interest,
        opener=opener,
        name=name,
        phone=phone,
        address=address,
        postal_code=postal_code,
        date_sent=date_sent or timezone.localdate(),
    )
    if organizations:
        contact.organizations.set(organizations)

    logger.info(
        "Lead %s created for opener %s with %d organizations (by %s)",
        contact.pk, opener.pk, len(organizations), actor,
    )
    return contact


# ---------------------------------------------------------------------------
# Credit requests
# ---------------------------------------------------------------------------

@transaction.atomic
def submit_credit_request(
    contact: Contact,
    organization,
    requested_by,
    reason: str = "",
    confirmed: bool = False,
    now=None,
) -> CreditRequest:
    """Create a pending credit request after the eligibility checks.

    Raises ``DeadlinePassed``, ``ConfirmationRequired`` or
    ``CreditsNotAllowed`` (all ``ValueError``) when the request is refused.
    """
    check_new_credit_request(
        lead_record(contact),
        organization_record(organization),
        requester_role=staff_role_for(requested_by),
        now=now,
        confirmed=confirmed,
    )

    existing = CreditRequest.objects.filter(
        contact=contact,
        organization=organization,
        status__in=(CreditRequest.Status.PENDING, CreditRequest.Status.APPROVED),
    ).exists()
    if existing:
        raise ValueError("Det finns redan en kreditförfrågan för detta lead och denna organisation.")

    credit = CreditRequest.objects.create(
        contact=contact,
        organization=organization,
        requested_by=requested_by,
        reason=reason,
    )
    logger.info(
        "Credit request %s submitted for lead %s / organization %s by %s",
        credit.pk, contact.pk, organization.pk, requested_by.pk,
    )
    return credit


def _handle_credit_request(credit: CreditRequest, target: str, actor) -> CreditRequest:
    credit = CreditRequest.objects.select_for_update().get(pk=credit.pk)
    if credit.is_terminal:
        raise InvalidCreditTransition(credit.status, target)
    credit.status = target
    credit.handled_by = actor
    credit.handled_at = timezone.now()
    credit.save(update_fields=["status", "handled_by", "handled_at", "updated_at"])
    return credit


@transaction.atomic
def approve_credit_request(credit: CreditRequest, actor) -> CreditRequest:
    credit = _handle_credit_request(credit, CreditRequest.Status.APPROVED, actor)

    contact = credit.contact
    linked = contact.organizations.count()
    credited = (
        contact.credit_requests
        .filter(status=CreditRequest.Status.APPROVED)
        .values("organization_id")
        .distinct()
        .count()
    )
    logger.info(
        "Credit request %s approved by %s; lead %s now qualifies for %d organizations",
        credit.pk, getattr(actor, "pk", None), contact.pk, linked - credited,
    )
    return credit


@transaction.atomic
def deny_credit_request(credit: CreditRequest, actor) -> CreditRequest:
    credit = _handle_credit_request(credit, CreditRequest.Status.DENIED, actor)
    logger.info("Credit request %s denied by %s", credit.pk, getattr(actor, "pk", None))
    return credit


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------

@transaction.atomic
def set_pipeline_status(sale: Sale, status: str, actor=None) -> Sale:
    """Move a sale through the pipeline.

    ``closed_won`` and ``closed_lost`` are terminal: ``closed_at`` is
    stamped when the sale enters one and never changes afterwards.
    Won deals with a price are priced.

    Raises ``InvalidPipelineTransition`` when a closed sale is moved to
    another status.
    """
    if status not in Sale.PipelineStatus.values:
        raise ValueError(f"Okänd pipelinestatus: {status!r}.")

    sale = Sale.objects.select_for_update().get(pk=sale.pk)
    if sale.is_closed:
        if sale.pipeline_status != status:
            raise InvalidPipelineTransition(sale.pipeline_status, status)
        return sale

    sale.pipeline_status = status
    if sale.is_closed:
        sale.closed_at = timezone.now()
    sale.save(update_fields=["pipeline_status", "closed_at", "updated_at"])

    if status == Sale.PipelineStatus.CLOSED_WON and sale.price_to_customer_incl_moms is not None:
        price_sale(sale)

    logger.info("Sale %s moved to %s by %s", sale.pk, status, getattr(actor, "pk", None))
    return sale


def build_pricing_input(
    price_to_customer_incl_moms,
    *,
    organization=None,
    product=None,
    material_cost_eur=None,
    green_deduction_percent=None,
    discount_amount=None,
) -> DealPricingInput:
    """Pricing input from an organization's cost settings and a product.

    Explicit arguments win over the product, which wins over the defaults.
    """
    kwargs = {"price_to_customer_incl_moms": Decimal(price_to_customer_incl_moms)}

    cost_settings = getattr(organization, "commission_settings", None) if organization else None
    if cost_settings is not None:
        kwargs.update(
            base_cost=cost_settings.base_cost,
            eur_to_sek_rate=cost_settings.eur_to_sek_rate,
            lf_finans_percent=cost_settings.lf_finans_percent,
        )
    if product is not None:
        kwargs.update(
            material_cost_eur=product.material_cost_eur,
            green_deduction_percent=product.green_tech_deduction_percent,
        )
    if material_cost_eur is not None:
        kwargs["material_cost_eur"] = Decimal(material_cost_eur)
    if green_deduction_percent is not None:
        kwargs["green_deduction_percent"] = Decimal(green_deduction_percent)
    if discount_amount is not None:
        kwargs["discount_amount"] = Decimal(discount_amount)
    return DealPricingInput(**kwargs)


def price_sale(sale: Sale, config: CommissionConfig | None = None) -> Sale:
    """Compute and store the invoiceable amount and commissions of a sale."""
    if sale.price_to_customer_incl_moms is None:
        raise ValueError("Affären saknar pris till kund.")
    config = config or CommissionConfig.from_settings()

    params = build_pricing_input(
        sale.price_to_customer_incl_moms,
        organization=sale.organization,
        product=sale.product,
        discount_amount=sale.discount_amount,
    )
    closer_base = sale.closer.closer_base_commission
    opener_rate = sale.contact.opener.opener_commission_per_deal
    pricing = compute_deal_pricing(
        params,
        closer_base_commission=closer_base if closer_base is not None else config.closer_base_commission,
        opener_commission_per_deal=(
            opener_rate if opener_rate is not None else config.opener_commission_per_deal
        ),
    )

    sale.total_order_value = pricing.total_order_value
    sale.invoiceable_amount = pricing.invoiceable_amount
    sale.closer_commission = pricing.closer_commission
    sale.opener_commission = pricing.opener_commission
    sale.save(update_fields=[
        "total_order_value", "invoiceable_amount",
        "closer_commission", "opener_commission", "updated_at",
    ])
    logger.info(
        "Sale %s priced: invoiceable=%s closer=%s opener=%s",
        sale.pk, pricing.invoiceable_amount, pricing.closer_commission, pricing.opener_commission,
    )
    return sale
