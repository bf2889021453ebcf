"""Embedded fallback reference tables.

Used when Google Sheets is unreachable or not configured. The tables have
exactly the shape of the live data, so the calculator treats them the same.
"""

from typing import Dict, List, Tuple

from freight_calc.models.schema import (
    Carrier,
    FscWindow,
    InteriorDeliveryCharge,
    RateTable,
    Zone,
    ZoneChartEntry,
    ZoneRates,
)

MOCK_WEIGHTS: Tuple[float, ...] = (
    0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0,
    12.0, 14.0, 16.0, 18.0, 20.0, 25.0, 30.0, 35.0, 40.0, 45.0, 50.0, 60.0, 70.0,
    80.0, 90.0, 100.0, 150.0, 200.0, 250.0, 300.0, 400.0, 500.0, 600.0, 700.0,
    800.0, 900.0, 1000.0,
)
MOCK_ZONE_LABELS: Tuple[str, ...] = ("1", "2", "3", "4", "5")

# Rates scale with weight, zone number and carrier
_ZONE_STEP = 0.2
_CARRIER_MULTIPLIERS: Dict[Carrier, float] = {
    Carrier.UPS: 1.0,
    Carrier.DHL: 1.1,
    Carrier.FEDEX: 1.05,
}


def mock_zone_chart() -> Tuple[ZoneChartEntry, ...]:
    rows = [
        ("USA", "DHL", "1"),
        ("USA", "FEDEX", "2"),
        ("USA", "UPS", "1"),
        ("UK", "DHL", "2"),
        ("UK", "FEDEX", "1"),
        ("UK", "UPS", "2"),
    ]
    return tuple(ZoneChartEntry(country=c, carrier=k, zone=z) for c, k, z in rows)


def _round_half_up(value: float) -> float:
    return float(int(value + 0.5))


def mock_rate_table(carrier: Carrier) -> RateTable:
    """Generate the fallback rate chart of one carrier.

    rate = round(weight x 100 x (1 + zone x 0.2) x carrier multiplier)
    """
    multiplier = _CARRIER_MULTIPLIERS[carrier]
    zones = []
    for label in MOCK_ZONE_LABELS:
        zone_factor = 1 + int(label) * _ZONE_STEP
        rates = {
            weight: _round_half_up(weight * 100 * zone_factor * multiplier)
            for weight in MOCK_WEIGHTS
        }
        zones.append(ZoneRates(zone=Zone.parse(label), rates=rates))
    return RateTable(carrier=carrier.value, zones=tuple(zones))


def mock_rate_tables() -> Dict[str, RateTable]:
    return {carrier.value: mock_rate_table(carrier) for carrier in (Carrier.UPS, Carrier.DHL, Carrier.FEDEX)}


def mock_fsc_schedule() -> Tuple[FscWindow, ...]:
    rows: List[Tuple[str, str]] = [
        ("DHL", "15.5"),
        ("FEDEX", "14.2"),
        ("UPS", "16.0"),
    ]
    return tuple(
        FscWindow(carrier=carrier, start_date="2024-01-01", end_date="2024-12-31", fsc_percent=percent)
        for carrier, percent in rows
    )


def mock_interior_delivery() -> Tuple[InteriorDeliveryCharge, ...]:
    rows = [
        ("USA", "1000"),
        ("UK", "1200"),
        ("Germany", "1100"),
        ("France", "1150"),
        ("India", "800"),
    ]
    return tuple(InteriorDeliveryCharge(country=country, amount=amount) for country, amount in rows)
