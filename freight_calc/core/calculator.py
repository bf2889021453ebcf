"""Deterministic freight cost calculator over a reference table snapshot."""

from datetime import date
from typing import Iterable, Optional

from freight_calc.config.logging_config import get_logger
from freight_calc.config.settings import Settings, get_settings
from freight_calc.core.errors import DataUnavailableError
from freight_calc.core.resolver import (
    lookup_customs,
    lookup_fsc,
    lookup_interior_delivery,
    lookup_rate,
    lookup_zone,
)
from freight_calc.models.schema import Carrier, TableSnapshot
from freight_calc.models.shipment_models import (
    CarrierComparison,
    CostBreakdown,
    ShipmentRequest,
)

logger = get_logger(__name__)


class FreightCalculator:
    """Deterministic freight cost calculator.

    This is the core calculation engine. For one shipment and one carrier it
    resolves the zone, weight band rate, interior delivery charge, customs
    fee and fuel surcharge from the snapshot, then composes them in a fixed
    order:

    - air freight = weight x base rate
    - demand surcharge on air freight
    - fuel surcharge on everything except customs
    - total freight, GST on total freight, cushion on freight plus GST

    The calculator holds no mutable state. Carriers are priced independently
    and in any order against the same snapshot.
    """

    def __init__(
        self,
        snapshot: TableSnapshot,
        settings: Optional[Settings] = None,
        today: Optional[date] = None
    ):
        """
        Initialize calculator.

        Args:
            snapshot: Reference tables to price against
            settings: Pricing fractions (defaults to global settings)
            today: Date used to select fuel surcharge windows (defaults to today)
        """
        self.snapshot = snapshot
        self.settings = settings or get_settings()
        self.today = today

    def ensure_data_available(self) -> None:
        """Check the snapshot can price a shipment.

        Raises:
            DataUnavailableError: If the zone chart or the rate table set is empty
        """
        if not self.snapshot.is_loaded():
            logger.warning(
                f"Freight data unavailable: {len(self.snapshot.zone_chart)} zone entries, "
                f"{len(self.snapshot.rate_tables)} rate tables"
            )
            raise DataUnavailableError()

    def compute_cost(self, request: ShipmentRequest, carrier: Carrier) -> CostBreakdown:
        """Calculate the itemized cost of a shipment for one carrier.

        Args:
            request: Shipment to price
            carrier: Carrier to price it with

        Returns:
            CostBreakdown with every intermediate amount

        Raises:
            DataUnavailableError: If the snapshot has no zone chart or rate tables
        """
        self.ensure_data_available()
        return self._compose(request, carrier)

    def compare(
        self,
        request: ShipmentRequest,
        carriers: Iterable[Carrier] = tuple(Carrier)
    ) -> CarrierComparison:
        """Price a shipment with every carrier.

        The data precondition is checked once for the whole submission.

        Args:
            request: Shipment to price
            carriers: Carriers to compare (defaults to all)

        Returns:
            CarrierComparison keyed by carrier

        Raises:
            DataUnavailableError: If the snapshot has no zone chart or rate tables
        """
        self.ensure_data_available()
        quotes = {carrier: self._compose(request, carrier) for carrier in carriers}
        comparison = CarrierComparison(request=request, quotes=quotes)

        cheapest = comparison.cheapest()
        if cheapest is not None:
            logger.info(
                f"Quote {request.unique_id}: {len(quotes)} carriers priced for "
                f"{request.weight_kg}kg to {request.country}, cheapest {cheapest.carrier.value} "
                f"at {cheapest.final_total:.2f}"
            )
        return comparison

    def _compose(self, request: ShipmentRequest, carrier: Carrier) -> CostBreakdown:
        snapshot = self.snapshot
        settings = self.settings
        weight = request.weight_kg

        zone = lookup_zone(snapshot.zone_chart, request.country, carrier)
        base_rate = lookup_rate(snapshot.rate_table_for(carrier), weight, zone.value)
        amount_air_freight = weight * base_rate.value
        demand_surcharge = amount_air_freight * settings.demand_surcharge_rate
        over_dimension = request.over_dimension_for(carrier)
        over_weight = request.over_weight_for(carrier)
        interior_delivery = lookup_interior_delivery(snapshot.interior_delivery, request.country)
        customs = lookup_customs(carrier)

        # Customs is not part of the fuel surcharge base
        fsc_rate = lookup_fsc(snapshot.fsc_schedule, carrier, self.today)
        fsc_amount = (
            amount_air_freight + demand_surcharge + over_dimension
            + over_weight + interior_delivery.value
        ) * fsc_rate.value

        total_freight = (
            amount_air_freight + demand_surcharge + over_dimension + over_weight
            + interior_delivery.value + fsc_amount + customs.value
        )
        gst = total_freight * settings.gst_rate
        cushion = (total_freight + gst) * settings.cushion_rate
        final_total = total_freight + gst + cushion

        lookups = {
            "zone": zone,
            "rate": base_rate,
            "interior_delivery": interior_delivery,
            "customs": customs,
            "fsc": fsc_rate,
        }
        defaults_applied = tuple(name for name, result in lookups.items() if result.is_default)
        if defaults_applied:
            logger.debug(f"{carrier.value}: defaults used for {', '.join(defaults_applied)}")

        return CostBreakdown(
            carrier=carrier,
            zone=zone.value,
            base_rate=base_rate.value,
            amount_air_freight=amount_air_freight,
            demand_surcharge=demand_surcharge,
            over_dimension=over_dimension,
            over_weight=over_weight,
            interior_delivery=interior_delivery.value,
            customs_clearance=customs.value,
            fsc_rate=fsc_rate.value,
            fsc_amount=fsc_amount,
            total_freight=total_freight,
            gst=gst,
            cushion=cushion,
            final_total=final_total,
            defaults_applied=defaults_applied,
        )
