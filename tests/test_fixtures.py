"""Test fixtures and sample data for freight calculator tests."""

from freight_calc.models.schema import (
    FscWindow,
    InteriorDeliveryCharge,
    RateTable,
    TableSnapshot,
    Zone,
    ZoneChartEntry,
    ZoneRates,
)
from freight_calc.models.shipment_models import ShipmentRequest


def create_sample_snapshot() -> TableSnapshot:
    """Create a small reference table snapshot for testing.

    The DHL tables reproduce the worked USA example: zone 1, 500 per kg in
    the 5 kg band, 15.5% fuel surcharge and 1000 interior delivery. FedEx
    and UPS have rate charts but no fuel surcharge window, and UPS has no
    zone chart row, so their quotes exercise the default fallbacks.

    Returns:
        TableSnapshot with sample tables
    """
    zone_chart = (
        ZoneChartEntry(country="USA", carrier="DHL", zone="1"),
        ZoneChartEntry(country="USA", carrier="FEDEX", zone="2"),
        ZoneChartEntry(country="UK", carrier="DHL", zone="2"),
    )
    rate_tables = {
        "DHL": RateTable(carrier="DHL", zones=(
            ZoneRates(zone=Zone.parse("1"), rates={1.0: 700.0, 5.0: 500.0, 10.0: 450.0}),
            ZoneRates(zone=Zone.parse("2"), rates={1.0: 800.0, 5.0: 600.0, 10.0: 550.0}),
        )),
        "FEDEX": RateTable(carrier="FEDEX", zones=(
            ZoneRates(zone=Zone.parse("2"), rates={1.0: 750.0, 5.0: 520.0, 10.0: 0.0}),
        )),
        "UPS": RateTable(carrier="UPS", zones=(
            ZoneRates(zone=Zone.parse("1"), rates={1.0: 650.0, 5.0: 480.0}),
        )),
    }
    fsc_schedule = (
        FscWindow(carrier="DHL", start_date="2024-01-01", end_date="2024-12-31", fsc_percent=15.5),
        FscWindow(carrier="FEDEX", start_date="2023-01-01", end_date="2023-12-31", fsc_percent=12.0),
    )
    interior_delivery = (
        InteriorDeliveryCharge(country="USA", amount=1000),
        InteriorDeliveryCharge(country="UK", amount=1200),
    )
    return TableSnapshot(
        zone_chart=zone_chart,
        rate_tables=rate_tables,
        fsc_schedule=fsc_schedule,
        interior_delivery=interior_delivery,
    )


def create_sample_request(**overrides) -> ShipmentRequest:
    """Create a shipment request, overriding any field by keyword."""
    fields = {
        "unique_id": "Q-1001",
        "company": "Acme Exports",
        "customer_name": "Jane Doe",
        "country": "USA",
        "currency": "USD",
        "product_value": 25000,
        "weight_kg": 5,
    }
    fields.update(overrides)
    return ShipmentRequest(**fields)
