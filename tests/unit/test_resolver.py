"""Unit tests for reference table lookups."""

from datetime import date

import pytest
from freight_calc.core.resolver import (
    DEFAULT_FSC_RATE,
    DEFAULT_INTERIOR_DELIVERY,
    DEFAULT_RATE,
    DEFAULT_ZONE,
    lookup_fsc,
    lookup_interior_delivery,
    lookup_rate,
    lookup_zone,
    resolve_customs,
    resolve_fsc,
    resolve_interior_delivery,
    resolve_rate,
    resolve_zone,
)
from freight_calc.models.schema import (
    Carrier,
    FscWindow,
    InteriorDeliveryCharge,
    RateTable,
    Zone,
    ZoneChartEntry,
    ZoneRates,
)


@pytest.fixture
def rate_table():
    return RateTable(carrier="DHL", zones=(
        ZoneRates(zone=Zone.parse("1"), rates={10.0: 450.0, 1.0: 700.0, 5.0: 500.0, 20.0: 0.0}),
        ZoneRates(zone=Zone.parse("2"), rates={}),
    ))


class TestResolveZone:
    """Test zone chart lookups."""

    def test_found(self, sample_snapshot):
        assert resolve_zone(sample_snapshot.zone_chart, "USA", Carrier.DHL) == "1"
        assert resolve_zone(sample_snapshot.zone_chart, "UK", "DHL") == "2"

    @pytest.mark.parametrize("country", ["usa", "USA", "Usa"])
    def test_country_case_insensitive(self, sample_snapshot, country):
        assert resolve_zone(sample_snapshot.zone_chart, country, "dhl") == "1"

    def test_missing_row_uses_default(self, sample_snapshot):
        result = lookup_zone(sample_snapshot.zone_chart, "USA", Carrier.UPS)
        assert result.value == DEFAULT_ZONE
        assert result.is_default

    def test_first_match_wins(self):
        chart = [
            ZoneChartEntry(country="USA", carrier="DHL", zone="3"),
            ZoneChartEntry(country="usa", carrier="dhl", zone="4"),
        ]
        assert resolve_zone(chart, "USA", "DHL") == "3"

    def test_blank_zone_is_returned(self):
        """Test that a matching row with a blank zone is still a match."""
        chart = [ZoneChartEntry(country="USA", carrier="DHL", zone="")]
        result = lookup_zone(chart, "USA", "DHL")
        assert result.value == ""
        assert not result.is_default


class TestResolveRate:
    """Test weight band rate lookups."""

    def test_exact_band(self, rate_table):
        assert resolve_rate(rate_table, 5, "1") == 500.0

    def test_rounds_up_to_next_band(self, rate_table):
        assert resolve_rate(rate_table, 4.2, "1") == 500.0
        assert resolve_rate(rate_table, 0.3, "1") == 700.0
        assert resolve_rate(rate_table, 5.01, Zone.parse("1")) == 450.0

    def test_zero_weight_uses_smallest_band(self, rate_table):
        assert resolve_rate(rate_table, 0, "1") == 700.0

    def test_above_largest_band_uses_largest(self):
        table = RateTable(carrier="UPS", zones=(
            ZoneRates(zone=Zone.parse("1"), rates={1.0: 650.0, 5.0: 480.0}),
        ))
        assert resolve_rate(table, 500, "1") == 480.0

    def test_zero_rate_uses_default(self, rate_table):
        """Test that a blank band (stored as 0) falls back to the default rate."""
        result = lookup_rate(rate_table, 15, "1")
        assert result.value == DEFAULT_RATE
        assert result.is_default

    def test_missing_zone_uses_default(self, rate_table):
        assert resolve_rate(rate_table, 5, "7") == DEFAULT_RATE

    def test_empty_zone_uses_default(self, rate_table):
        assert resolve_rate(rate_table, 5, "2") == DEFAULT_RATE

    def test_blank_zone_label_uses_default(self, rate_table):
        assert resolve_rate(rate_table, 5, "") == DEFAULT_RATE

    def test_missing_table_uses_default(self):
        assert resolve_rate(None, 5, "1") == DEFAULT_RATE

    def test_found_outcome(self, rate_table):
        assert not lookup_rate(rate_table, 5, "1").is_default


class TestResolveFsc:
    """Test fuel surcharge lookups."""

    @pytest.fixture
    def schedule(self):
        return [
            FscWindow(carrier="DHL", start_date="2024-01-01", end_date="2024-06-30", fsc_percent=15.5),
            FscWindow(carrier="DHL", start_date="2024-07-01", end_date="2024-12-31", fsc_percent=17.0),
            FscWindow(carrier="UPS", start_date="2024-01-01", end_date="2024-12-31", fsc_percent=None),
            FscWindow(carrier="UPS", start_date="2024-01-01", end_date="2024-12-31", fsc_percent=16.0),
        ]

    def test_active_window(self, schedule):
        assert resolve_fsc(schedule, Carrier.DHL, date(2024, 3, 15)) == pytest.approx(0.155)
        assert resolve_fsc(schedule, "dhl", date(2024, 9, 1)) == pytest.approx(0.17)

    def test_bounds_inclusive(self, schedule):
        assert resolve_fsc(schedule, "DHL", date(2024, 1, 1)) == pytest.approx(0.155)
        assert resolve_fsc(schedule, "DHL", date(2024, 6, 30)) == pytest.approx(0.155)

    def test_no_active_window_uses_default(self, schedule):
        assert resolve_fsc(schedule, "DHL", date(2025, 1, 1)) == DEFAULT_FSC_RATE
        assert resolve_fsc(schedule, "FEDEX", date(2024, 3, 15)) == 0.15

    def test_unusable_first_match_uses_default(self, schedule):
        """Test that the first active window decides even when its percentage is unusable."""
        result = lookup_fsc(schedule, "UPS", date(2024, 3, 15))
        assert result.value == DEFAULT_FSC_RATE
        assert result.is_default

    def test_dates_compared_as_strings(self):
        """Test that non zero-padded dates do not match calendar order."""
        schedule = [FscWindow(carrier="DHL", start_date="2024-1-1", end_date="2024-12-31", fsc_percent=15.5)]
        # "2024-03-15" < "2024-1-1" as strings, so the window does not apply
        assert resolve_fsc(schedule, "DHL", date(2024, 3, 15)) == DEFAULT_FSC_RATE

    def test_defaults_to_current_date(self):
        schedule = [FscWindow(carrier="DHL", start_date="2000-01-01", end_date="9999-12-31", fsc_percent=10)]
        assert resolve_fsc(schedule, "DHL") == pytest.approx(0.10)


class TestResolveInteriorDelivery:
    """Test interior delivery lookups."""

    def test_found(self, sample_snapshot):
        assert resolve_interior_delivery(sample_snapshot.interior_delivery, "uk") == 1200.0

    def test_missing_country_uses_default(self, sample_snapshot):
        assert resolve_interior_delivery(sample_snapshot.interior_delivery, "Japan") == DEFAULT_INTERIOR_DELIVERY

    def test_unusable_amount_uses_default(self):
        charges = [
            InteriorDeliveryCharge(country="USA", amount="tbd"),
            InteriorDeliveryCharge(country="USA", amount=1500),
        ]
        result = lookup_interior_delivery(charges, "USA")
        assert result.value == 1000.0
        assert result.is_default


class TestResolveCustoms:
    """Test customs clearance fees."""

    def test_carrier_fees(self):
        assert resolve_customs(Carrier.DHL) == 4000.0
        assert resolve_customs(Carrier.FEDEX) == 2000.0
        assert resolve_customs(Carrier.UPS) == 2750.0

    def test_case_insensitive(self):
        assert resolve_customs("ups") == 2750.0

    def test_unknown_carrier_uses_default(self):
        assert resolve_customs("ARAMEX") == 2000.0
