"""Invoiceable amount and commissions for a single closed deal.

Worked example (Emaldo 15.36 kWh battery)::

    customer price after green deduction   78 000.00
    total order value  78 000 / 0.515     151 456.31
    ex VAT             × 0.8              121 165.05
    base cost                             − 23 000.00
    material           6 150 EUR × 11     − 67 650.00
    LF Finans fee      3 % of 78 000       − 2 340.00
    invoiceable amount                     28 175.05

The closer earns the full base commission since the invoiceable amount is
above the 22 000 minimum.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from billing.exceptions import BillingError

CENT = Decimal("0.01")
EX_VAT_FACTOR = Decimal("0.8")
MINIMUM_INVOICEABLE_AMOUNT = Decimal("22000")
SHORTFALL_SHARE = Decimal("0.5")
DISCOUNT_SHARE = Decimal("0.5")

DEFAULT_GREEN_DEDUCTION_PERCENT = Decimal("48.5")
DEFAULT_BASE_COST = Decimal("23000")
DEFAULT_EUR_TO_SEK_RATE = Decimal("11")
DEFAULT_LF_FINANS_PERCENT = Decimal("3")


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class DealPricingInput:
    price_to_customer_incl_moms: Decimal
    material_cost_eur: Decimal = Decimal("0")
    green_deduction_percent: Decimal = DEFAULT_GREEN_DEDUCTION_PERCENT
    base_cost: Decimal = DEFAULT_BASE_COST
    eur_to_sek_rate: Decimal = DEFAULT_EUR_TO_SEK_RATE
    lf_finans_percent: Decimal = DEFAULT_LF_FINANS_PERCENT
    discount_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class DealPricing:
    total_order_value: Decimal
    ex_moms_value: Decimal
    after_base_cost: Decimal
    material_cost_sek: Decimal
    after_material_cost: Decimal
    lf_finans_fee: Decimal
    invoiceable_amount: Decimal
    closer_commission: Decimal
    opener_commission: Decimal


def compute_deal_pricing(
    params: DealPricingInput,
    *,
    closer_base_commission: Decimal = Decimal("8000"),
    opener_commission_per_deal: Decimal = Decimal("1000"),
) -> DealPricing:
    """Price a deal and derive the closer and opener commission.

    The closer commission starts at ``closer_base_commission``, loses half
    of any shortfall below the 22 000 invoiceable minimum and half of any
    discount, and never goes below zero. The opener gets a flat
    ``opener_commission_per_deal``.
    """
    price = Decimal(params.price_to_customer_incl_moms)
    green = Decimal(params.green_deduction_percent)
    if price < 0:
        raise BillingError("Priset kan inte vara negativt.")
    if not (Decimal("0") <= green < Decimal("100")):
        raise BillingError("Grönt avdrag måste vara mellan 0 och 100 procent.")

    total_order_value = price / (1 - green / 100)
    ex_moms = total_order_value * EX_VAT_FACTOR
    after_base_cost = ex_moms - Decimal(params.base_cost)
    material_cost_sek = Decimal(params.material_cost_eur) * Decimal(params.eur_to_sek_rate)
    after_material_cost = after_base_cost - material_cost_sek
    lf_finans_fee = price * Decimal(params.lf_finans_percent) / 100
    invoiceable = after_material_cost - lf_finans_fee

    closer_commission = Decimal(closer_base_commission)
    if invoiceable < MINIMUM_INVOICEABLE_AMOUNT:
        closer_commission -= (MINIMUM_INVOICEABLE_AMOUNT - invoiceable) * SHORTFALL_SHARE
    discount = Decimal(params.discount_amount or 0)
    if discount > 0:
        closer_commission -= discount * DISCOUNT_SHARE
    closer_commission = max(Decimal("0"), closer_commission)

    return DealPricing(
        total_order_value=_money(total_order_value),
        ex_moms_value=_money(ex_moms),
        after_base_cost=_money(after_base_cost),
        material_cost_sek=_money(material_cost_sek),
        after_material_cost=_money(after_material_cost),
        lf_finans_fee=_money(lf_finans_fee),
        invoiceable_amount=_money(invoiceable),
        closer_commission=_money(closer_commission),
        opener_commission=_money(Decimal(opener_commission_per_deal)),
    )
