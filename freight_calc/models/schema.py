"""Freight reference table schema - models for deterministic rate resolution."""

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from freight_calc.models.utils import keys_match, parse_number

ZONE_KEY_PREFIX = "Zone "


def read_only(value: Mapping) -> Mapping:
    """Copy a mapping into a read-only view."""
    return MappingProxyType(dict(value))


class Carrier(str, Enum):
    """Enumeration of the carriers compared by the calculator.

    The value is the upper-case identifier used in the reference tables;
    table rows themselves keep whatever spelling the sheet used and are
    matched case-insensitively.

    Attributes:
        FEDEX: FedEx International
        DHL: DHL Express
        UPS: UPS Worldwide
    """
    FEDEX = "FEDEX"
    DHL = "DHL"
    UPS = "UPS"

    @property
    def display_name(self) -> str:
        """Human-readable carrier name."""
        return {"FEDEX": "FedEx", "DHL": "DHL", "UPS": "UPS"}[self.value]

    @classmethod
    def parse(cls, value: str) -> Optional["Carrier"]:
        """Return the carrier matching value case-insensitively, or None."""
        for carrier in cls:
            if keys_match(carrier, value):
                return carrier
        return None


class DataSource(str, Enum):
    """Where a reference table in a snapshot came from."""
    LIVE = "live"  # Google Sheets
    MOCK = "mock"  # Embedded fallback tables
    FILE = "file"  # JSON snapshot on disk


class Zone(BaseModel):
    """A carrier zone label such as "1" or "5".

    Rate sheets name their columns "Zone {label}"; the zone chart stores the
    bare label. Zone is the only way rate tables are keyed, so the two forms
    are reconciled once, at parse time.

    Attributes:
        label: Zone label exactly as supplied (case and spacing preserved)
    """
    model_config = ConfigDict(frozen=True)

    label: str = Field(min_length=1, description="Zone label, e.g. '1'")

    @classmethod
    def parse(cls, label: str) -> "Zone":
        """Build a Zone from a bare label.

        Raises:
            ValueError: If the label is empty
        """
        if not label:
            raise ValueError("Zone label must not be empty")
        return cls(label=label)

    @classmethod
    def from_header(cls, header: str) -> Optional["Zone"]:
        """Build a Zone from a rate sheet column header like "Zone 3".

        Returns:
            Zone, or None if the header is not a zone column
        """
        if not header or not header.startswith(ZONE_KEY_PREFIX):
            return None
        label = header[len(ZONE_KEY_PREFIX):]
        return cls(label=label) if label else None

    @property
    def key(self) -> str:
        """Column header form of this zone."""
        return f"{ZONE_KEY_PREFIX}{self.label}"

    def __str__(self) -> str:
        return self.key


class ZoneChartEntry(BaseModel):
    """One row of the zone chart: the zone a carrier assigns to a country.

    Attributes:
        country: Destination country name as written in the sheet
        carrier: Carrier name as written in the sheet
        zone: Bare zone label (may be empty if the cell was blank)
    """
    model_config = ConfigDict(frozen=True)

    country: str = Field(description="Destination country")
    carrier: str = Field(description="Carrier name")
    zone: str = Field(default="", description="Zone label")


class ZoneRates(BaseModel):
    """Weight-banded rates of one zone.

    Attributes:
        zone: The zone these rates belong to
        rates: Mapping of band weight (kg) to rate per kg. A rate of 0
            means the cell was blank or not numeric.
    """
    model_config = ConfigDict(frozen=True)

    zone: Zone
    rates: Mapping[float, float] = Field(default_factory=dict, validate_default=True)

    @field_validator("rates")
    @classmethod
    def _freeze_rates(cls, value: Mapping[float, float]) -> Mapping[float, float]:
        return read_only(value)

    @field_serializer("rates")
    def _dump_rates(self, value: Mapping[float, float]) -> Dict[float, float]:
        return dict(value)


class RateTable(BaseModel):
    """Rate chart of a single carrier, keyed by Zone.

    Attributes:
        carrier: Carrier this table belongs to
        zones: Zone columns in sheet order
    """
    model_config = ConfigDict(frozen=True)

    carrier: str = Field(description="Carrier name")
    zones: Tuple[ZoneRates, ...] = Field(default_factory=tuple)

    def get(self, zone: Zone) -> Optional[Mapping[float, float]]:
        """Get the weight bands of a zone.

        Returns:
            Read-only mapping of band weight to rate, or None if the zone is absent.
            The first column for a zone wins if the sheet repeats it.
        """
        for zone_rates in self.zones:
            if zone_rates.zone == zone:
                return zone_rates.rates
        return None

    def zone_labels(self) -> Tuple[str, ...]:
        return tuple(zone_rates.zone.label for zone_rates in self.zones)


class FscWindow(BaseModel):
    """A fuel surcharge percentage active for a carrier over a date range.

    Dates are kept as the strings the sheet supplied. They are compared as
    strings, which is only correct for zero-padded ISO dates (YYYY-MM-DD).

    Attributes:
        carrier: Carrier name as written in the sheet
        start_date: First day of the window (inclusive)
        end_date: Last day of the window (inclusive)
        fsc_percent: Surcharge percentage, None if the cell was unusable
    """
    model_config = ConfigDict(frozen=True)

    carrier: str = Field(description="Carrier name")
    start_date: str = Field(default="", description="Window start, ISO date string")
    end_date: str = Field(default="", description="Window end, ISO date string")
    fsc_percent: Optional[float] = Field(None, description="Fuel surcharge percentage, e.g. 15.5")

    @field_validator("fsc_percent", mode="before")
    @classmethod
    def _coerce_percent(cls, value: Any) -> Optional[float]:
        return parse_number(value)


class InteriorDeliveryCharge(BaseModel):
    """Fixed interior delivery charge for a destination country.

    Attributes:
        country: Country name as written in the sheet
        amount: Charge amount, None if the cell was unusable
    """
    model_config = ConfigDict(frozen=True)

    country: str = Field(description="Destination country")
    amount: Optional[float] = Field(None, description="Interior delivery charge")

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Optional[float]:
        return parse_number(value)


class TableSnapshot(BaseModel):
    """Immutable snapshot of all reference tables used for one session.

    A snapshot is produced by the data loader and handed to the calculator
    explicitly. Refreshing data produces a new snapshot; existing snapshots
    are never modified.

    Attributes:
        zone_chart: Zone chart rows in sheet order
        rate_tables: Rate table per carrier, keyed by upper-case carrier name
        fsc_schedule: Fuel surcharge windows in sheet order
        interior_delivery: Interior delivery charges in sheet order
        sources: Data source per table name
        loaded_at: When the snapshot was assembled
    """
    model_config = ConfigDict(frozen=True)

    zone_chart: Tuple[ZoneChartEntry, ...] = Field(default_factory=tuple)
    rate_tables: Mapping[str, RateTable] = Field(default_factory=dict, validate_default=True)
    fsc_schedule: Tuple[FscWindow, ...] = Field(default_factory=tuple)
    interior_delivery: Tuple[InteriorDeliveryCharge, ...] = Field(default_factory=tuple)
    sources: Mapping[str, DataSource] = Field(default_factory=dict, validate_default=True)
    loaded_at: Optional[datetime] = None

    @field_validator("rate_tables", "sources")
    @classmethod
    def _freeze_mappings(cls, value: Mapping) -> Mapping:
        return read_only(value)

    @field_serializer("rate_tables")
    def _dump_rate_tables(self, value: Mapping[str, RateTable]) -> Dict[str, RateTable]:
        return dict(value)

    @field_serializer("sources")
    def _dump_sources(self, value: Mapping[str, DataSource]) -> Dict[str, DataSource]:
        return dict(value)

    def rate_table_for(self, carrier: Union[Carrier, str]) -> Optional[RateTable]:
        """Get the rate table of a carrier, matched case-insensitively."""
        for name, table in self.rate_tables.items():
            if keys_match(name, carrier):
                return table
        return None

    def is_loaded(self) -> bool:
        """Whether the snapshot holds enough data to price a shipment.

        Only the zone chart and the set of rate tables are required; every
        other lookup falls back to a default value.
        """
        return bool(self.zone_chart) and bool(self.rate_tables)


class LookupOutcome(str, Enum):
    """Whether a table lookup hit a row or fell back to its default."""
    FOUND = "found"
    DEFAULT = "default"


class LookupResult(BaseModel):
    """Result of a single reference table lookup.

    Attributes:
        value: The resolved value (zone label or amount)
        outcome: FOUND when taken from table data, DEFAULT otherwise
    """
    model_config = ConfigDict(frozen=True)

    value: Union[float, str]
    outcome: LookupOutcome

    @classmethod
    def found(cls, value: Union[float, str]) -> "LookupResult":
        return cls(value=value, outcome=LookupOutcome.FOUND)

    @classmethod
    def default(cls, value: Union[float, str]) -> "LookupResult":
        return cls(value=value, outcome=LookupOutcome.DEFAULT)

    @property
    def is_default(self) -> bool:
        return self.outcome == LookupOutcome.DEFAULT
