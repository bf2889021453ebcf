"""Data models for the freight cost calculator."""

from freight_calc.models.schema import (
    Carrier,
    DataSource,
    Zone,
    ZoneChartEntry,
    ZoneRates,
    RateTable,
    FscWindow,
    InteriorDeliveryCharge,
    TableSnapshot,
    LookupOutcome,
    LookupResult,
)
from freight_calc.models.shipment_models import (
    ShipmentRequest,
    CostBreakdown,
    CarrierComparison,
)

__all__ = [
    # Reference table models
    "Carrier",
    "DataSource",
    "Zone",
    "ZoneChartEntry",
    "ZoneRates",
    "RateTable",
    "FscWindow",
    "InteriorDeliveryCharge",
    "TableSnapshot",
    "LookupOutcome",
    "LookupResult",
    # Request/result models
    "ShipmentRequest",
    "CostBreakdown",
    "CarrierComparison",
]
