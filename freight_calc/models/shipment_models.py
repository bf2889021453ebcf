"""Request and result models for freight cost calculation."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from freight_calc.models.schema import Carrier
from freight_calc.models.utils import parse_number


class ShipmentRequest(BaseModel):
    """A shipment submitted for a three-carrier price comparison.

    Supplied once per submission and shared, read-only, by the per-carrier
    calculations. Currency and product value are collected for the quote
    record only; no conversion is performed with them.

    Attributes:
        unique_id: Caller-supplied quote identifier
        company: Shipper company
        customer_name: Customer the quote is for
        country: Destination country (matched against the zone chart)
        currency: Currency the customer asked for (informational)
        product_value: Declared product value
        weight_kg: Shipment weight in kilograms
        fedex_over_dimension: Optional FedEx over-dimension charge
        dhl_over_dimension: Optional DHL over-dimension charge
        ups_over_dimension: Optional UPS over-dimension charge
        fedex_over_weight: Optional FedEx over-weight charge
        dhl_over_weight: Optional DHL over-weight charge
        ups_over_weight: Optional UPS over-weight charge
    """
    model_config = ConfigDict(frozen=True)

    unique_id: str = Field(min_length=1, description="Quote identifier")
    company: str = Field(min_length=1, description="Shipper company")
    customer_name: str = Field(min_length=1, description="Customer name")
    country: str = Field(min_length=1, description="Destination country")
    currency: str = Field(min_length=1, description="Requested currency (not converted)")
    product_value: float = Field(ge=0, allow_inf_nan=False, description="Declared product value")
    weight_kg: float = Field(ge=0, allow_inf_nan=False, description="Shipment weight in kg")

    fedex_over_dimension: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    dhl_over_dimension: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    ups_over_dimension: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    fedex_over_weight: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    dhl_over_weight: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    ups_over_weight: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

    @field_validator("unique_id", "company", "customer_name", "country", "currency", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator(
        "fedex_over_dimension", "dhl_over_dimension", "ups_over_dimension",
        "fedex_over_weight", "dhl_over_weight", "ups_over_weight",
        mode="before",
    )
    @classmethod
    def _coerce_optional_charge(cls, value: Any) -> Optional[float]:
        # Blank or unparseable optional charges count as absent
        return parse_number(value)

    def over_dimension_for(self, carrier: Carrier) -> float:
        """Over-dimension charge entered for a carrier, 0 if absent."""
        value = getattr(self, f"{carrier.value.lower()}_over_dimension")
        return value or 0.0

    def over_weight_for(self, carrier: Carrier) -> float:
        """Over-weight charge entered for a carrier, 0 if absent."""
        value = getattr(self, f"{carrier.value.lower()}_over_weight")
        return value or 0.0


class CostBreakdown(BaseModel):
    """Itemized freight cost of one carrier for one shipment.

    All amounts are in the single display currency. fsc_rate is stored as a
    fraction (0.155); fsc_percent gives the display form (15.5).

    Attributes:
        carrier: Carrier priced
        zone: Zone label resolved from the zone chart
        base_rate: Rate per kg of the selected weight band
        amount_air_freight: weight x base rate
        demand_surcharge: Demand surcharge on air freight
        over_dimension: Over-dimension charge
        over_weight: Over-weight charge
        interior_delivery: Interior delivery charge of the destination
        customs_clearance: Flat customs clearance fee of the carrier
        fsc_rate: Fuel surcharge fraction in force today
        fsc_amount: Fuel surcharge amount (customs excluded from its base)
        total_freight: Sum of all freight line items
        gst: GST on total freight
        cushion: Cushion on total freight plus GST
        final_total: Landed cost
        defaults_applied: Lookups that fell back to default values
    """
    model_config = ConfigDict(frozen=True)

    carrier: Carrier
    zone: str
    base_rate: float
    amount_air_freight: float
    demand_surcharge: float
    over_dimension: float
    over_weight: float
    interior_delivery: float
    customs_clearance: float
    fsc_rate: float
    fsc_amount: float
    total_freight: float
    gst: float
    cushion: float
    final_total: float
    defaults_applied: Tuple[str, ...] = Field(default_factory=tuple)

    @property
    def fsc_percent(self) -> float:
        """Fuel surcharge rate as a percentage, for display."""
        return self.fsc_rate * 100

    def line_items(self) -> List[Tuple[str, float]]:
        """Monetary line items in display order (field name, amount)."""
        names = [
            "amount_air_freight",
            "demand_surcharge",
            "over_dimension",
            "over_weight",
            "interior_delivery",
            "fsc_amount",
            "customs_clearance",
            "total_freight",
            "gst",
            "cushion",
            "final_total",
        ]
        return [(name, getattr(self, name)) for name in names]


class CarrierComparison(BaseModel):
    """Side-by-side quotes of all carriers for one shipment request.

    Attributes:
        request: The shipment that was priced
        quotes: Cost breakdown per carrier, in carrier order
    """
    model_config = ConfigDict(frozen=True)

    request: ShipmentRequest
    quotes: Dict[Carrier, CostBreakdown] = Field(default_factory=dict)

    def __getitem__(self, carrier: Carrier) -> CostBreakdown:
        return self.quotes[carrier]

    def ranked(self) -> List[CostBreakdown]:
        """Quotes ordered by final total; ties keep carrier order."""
        return sorted(self.quotes.values(), key=lambda quote: quote.final_total)

    def cheapest(self) -> Optional[CostBreakdown]:
        """The quote with the lowest final total, or None if empty."""
        ranked = self.ranked()
        return ranked[0] if ranked else None
