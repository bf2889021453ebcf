"""Reference table lookups with default fallbacks.

Every lookup is total: when a table has no matching row, or the matching row
holds an unusable value, the lookup returns a fixed default instead of
failing. A quote is always produced, even from incomplete reference data.

Each public resolve_* function has a lookup_* counterpart returning a
LookupResult, which records whether the value came from the table or from
the default.
"""

from datetime import date, datetime, timezone
from typing import Dict, Iterable, Optional, Union

from freight_calc.config.logging_config import get_logger
from freight_calc.models.schema import (
    Carrier,
    FscWindow,
    InteriorDeliveryCharge,
    LookupResult,
    RateTable,
    Zone,
    ZoneChartEntry,
)
from freight_calc.models.utils import keys_match, normalize_key

logger = get_logger(__name__)

DEFAULT_ZONE = "1"
DEFAULT_RATE = 100.0
DEFAULT_FSC_RATE = 0.15
DEFAULT_INTERIOR_DELIVERY = 1000.0
DEFAULT_CUSTOMS = 2000.0

CUSTOMS_FEES: Dict[str, float] = {
    Carrier.DHL.value: 4000.0,
    Carrier.FEDEX.value: 2000.0,
    Carrier.UPS.value: 2750.0,
}

CarrierLike = Union[Carrier, str]


def lookup_zone(
    zone_chart: Iterable[ZoneChartEntry],
    country: str,
    carrier: CarrierLike
) -> LookupResult:
    """Find the zone a carrier assigns to a destination country.

    Args:
        zone_chart: Zone chart rows; the first matching row wins
        country: Destination country, matched case-insensitively
        carrier: Carrier, matched case-insensitively

    Returns:
        LookupResult with the row's zone label, or DEFAULT_ZONE
    """
    for entry in zone_chart:
        if keys_match(entry.country, country) and keys_match(entry.carrier, carrier):
            return LookupResult.found(entry.zone)
    logger.debug(f"No zone for country={country!r} carrier={normalize_key(carrier)}, using zone {DEFAULT_ZONE}")
    return LookupResult.default(DEFAULT_ZONE)


def lookup_rate(
    rate_table: Optional[RateTable],
    weight: float,
    zone: Union[Zone, str]
) -> LookupResult:
    """Find the per-kg rate for a weight in a zone.

    The weight is rounded up to the next weight band: the smallest band
    weight greater than or equal to the requested weight. Weights above the
    largest band use the largest band. Rates are never interpolated.

    Args:
        rate_table: The carrier's rate table (None if the carrier has none)
        weight: Shipment weight in kg
        zone: Zone, or a bare zone label as returned by lookup_zone

    Returns:
        LookupResult with the band's rate, or DEFAULT_RATE when the zone is
        missing, has no bands, or the selected band's rate is 0
    """
    if not isinstance(zone, Zone):
        try:
            zone = Zone.parse(zone)
        except ValueError:
            logger.debug(f"Unusable zone label {zone!r}, using rate {DEFAULT_RATE}")
            return LookupResult.default(DEFAULT_RATE)

    bands = rate_table.get(zone) if rate_table is not None else None
    if not bands:
        logger.debug(f"No rate bands for {zone.key}, using rate {DEFAULT_RATE}")
        return LookupResult.default(DEFAULT_RATE)

    weights = sorted(bands)
    band = next((w for w in weights if w >= weight), weights[-1])
    rate = bands[band]
    if not rate:
        logger.debug(f"Empty rate at {zone.key} band {band}kg, using rate {DEFAULT_RATE}")
        return LookupResult.default(DEFAULT_RATE)
    return LookupResult.found(rate)


def today_iso() -> str:
    """Today's UTC calendar date as a zero-padded ISO string."""
    return datetime.now(timezone.utc).date().isoformat()


def lookup_fsc(
    fsc_schedule: Iterable[FscWindow],
    carrier: CarrierLike,
    today: Optional[date] = None
) -> LookupResult:
    """Find the fuel surcharge fraction in force today for a carrier.

    Window bounds are inclusive and compared to today's ISO date as plain
    strings. That ordering matches calendar order only for zero-padded
    YYYY-MM-DD values; other date spellings silently fail to match.

    Args:
        fsc_schedule: Fuel surcharge windows; the first active match wins
        carrier: Carrier, matched case-insensitively
        today: Date to evaluate (defaults to today's UTC date)

    Returns:
        LookupResult with fsc_percent / 100, or DEFAULT_FSC_RATE
    """
    today_str = today.isoformat() if today is not None else today_iso()
    for window in fsc_schedule:
        if (keys_match(window.carrier, carrier)
                and window.start_date <= today_str <= window.end_date):
            if window.fsc_percent is None:
                break
            return LookupResult.found(window.fsc_percent / 100)
    logger.debug(f"No active FSC window for {normalize_key(carrier)} on {today_str}, using {DEFAULT_FSC_RATE}")
    return LookupResult.default(DEFAULT_FSC_RATE)


def lookup_interior_delivery(
    charges: Iterable[InteriorDeliveryCharge],
    country: str
) -> LookupResult:
    """Find the interior delivery charge of a destination country.

    Returns:
        LookupResult with the first matching row's amount, or
        DEFAULT_INTERIOR_DELIVERY when no row matches or its amount is unusable
    """
    for charge in charges:
        if keys_match(charge.country, country):
            if charge.amount is None:
                break
            return LookupResult.found(charge.amount)
    logger.debug(f"No interior delivery charge for {country!r}, using {DEFAULT_INTERIOR_DELIVERY}")
    return LookupResult.default(DEFAULT_INTERIOR_DELIVERY)


def lookup_customs(carrier: CarrierLike) -> LookupResult:
    """Find the flat customs clearance fee of a carrier."""
    fee = CUSTOMS_FEES.get(normalize_key(carrier))
    if fee is None:
        return LookupResult.default(DEFAULT_CUSTOMS)
    return LookupResult.found(fee)


def resolve_zone(zone_chart: Iterable[ZoneChartEntry], country: str, carrier: CarrierLike) -> str:
    """Zone label for a country and carrier (default "1")."""
    return lookup_zone(zone_chart, country, carrier).value


def resolve_rate(rate_table: Optional[RateTable], weight: float, zone: Union[Zone, str]) -> float:
    """Per-kg rate for a weight in a zone (default 100)."""
    return lookup_rate(rate_table, weight, zone).value


def resolve_fsc(fsc_schedule: Iterable[FscWindow], carrier: CarrierLike, today: Optional[date] = None) -> float:
    """Fuel surcharge fraction in force for a carrier (default 0.15)."""
    return lookup_fsc(fsc_schedule, carrier, today).value


def resolve_interior_delivery(charges: Iterable[InteriorDeliveryCharge], country: str) -> float:
    """Interior delivery charge for a country (default 1000)."""
    return lookup_interior_delivery(charges, country).value


def resolve_customs(carrier: CarrierLike) -> float:
    """Customs clearance fee for a carrier (default 2000)."""
    return lookup_customs(carrier).value
