"""Unit tests for freight calculator."""

import pytest
from freight_calc.core.calculator import FreightCalculator
from freight_calc.core.errors import DataUnavailableError
from freight_calc.models.schema import Carrier, TableSnapshot, ZoneChartEntry
from tests.test_fixtures import create_sample_request, create_sample_snapshot


class TestComputeCost:
    """Test single carrier cost composition."""

    @pytest.fixture
    def calculator(self, sample_snapshot, settings, quote_date):
        """Create calculator over the sample snapshot."""
        return FreightCalculator(sample_snapshot, settings, quote_date)

    def test_usa_dhl_worked_example(self, calculator, sample_request):
        """Test the documented 5 kg USA shipment with DHL."""
        quote = calculator.compute_cost(sample_request, Carrier.DHL)

        assert quote.zone == "1"
        assert quote.base_rate == 500.0
        assert quote.amount_air_freight == pytest.approx(2500.0)
        assert quote.demand_surcharge == pytest.approx(250.0)
        assert quote.over_dimension == 0.0
        assert quote.over_weight == 0.0
        assert quote.interior_delivery == 1000.0
        assert quote.customs_clearance == 4000.0
        assert quote.fsc_rate == pytest.approx(0.155)
        assert quote.fsc_amount == pytest.approx(581.25)
        assert quote.total_freight == pytest.approx(8331.25)
        assert quote.gst == pytest.approx(1499.625)
        assert quote.cushion == pytest.approx((8331.25 + 1499.625) * 0.13)
        assert quote.final_total == pytest.approx(11108.88875)
        assert quote.defaults_applied == ()

    def test_customs_excluded_from_fsc_base(self, calculator, sample_request):
        quote = calculator.compute_cost(sample_request, Carrier.DHL)
        base = (quote.amount_air_freight + quote.demand_surcharge + quote.over_dimension
                + quote.over_weight + quote.interior_delivery)
        assert quote.fsc_amount == pytest.approx(base * quote.fsc_rate)

    def test_over_charges(self, calculator):
        request = create_sample_request(dhl_over_dimension=100, dhl_over_weight=50, fedex_over_weight=999)
        quote = calculator.compute_cost(request, Carrier.DHL)

        assert quote.over_dimension == 100.0
        assert quote.over_weight == 50.0
        assert quote.fsc_amount == pytest.approx(3900.0 * 0.155)
        assert quote.total_freight == pytest.approx(2500 + 250 + 150 + 1000 + 604.5 + 4000)

    def test_zero_weight(self, calculator):
        """Test that a zero weight still prices the fixed charges through the full pipeline."""
        quote = calculator.compute_cost(create_sample_request(weight_kg=0), Carrier.DHL)

        assert quote.amount_air_freight == 0.0
        assert quote.demand_surcharge == 0.0
        assert quote.fsc_amount == pytest.approx(155.0)
        assert quote.total_freight == pytest.approx(5155.0)
        assert quote.gst == pytest.approx(927.9)
        assert quote.final_total == pytest.approx((5155.0 + 927.9) * 1.13)

    def test_defaults_recorded(self, calculator, sample_request):
        fedex = calculator.compute_cost(sample_request, Carrier.FEDEX)
        assert fedex.zone == "2"
        assert fedex.base_rate == 520.0
        assert fedex.fsc_rate == 0.15
        assert fedex.defaults_applied == ("fsc",)

        ups = calculator.compute_cost(sample_request, Carrier.UPS)
        assert ups.zone == "1"
        assert ups.base_rate == 480.0
        assert ups.customs_clearance == 2750.0
        assert ups.defaults_applied == ("zone", "fsc")

    def test_missing_rate_band_uses_default_rate(self, calculator):
        quote = calculator.compute_cost(create_sample_request(weight_kg=8), Carrier.FEDEX)
        assert quote.base_rate == 100.0
        assert quote.amount_air_freight == pytest.approx(800.0)
        assert "rate" in quote.defaults_applied

    def test_unknown_country(self, calculator):
        quote = calculator.compute_cost(create_sample_request(country="Japan"), Carrier.DHL)
        assert quote.zone == "1"
        assert quote.interior_delivery == 1000.0
        assert set(quote.defaults_applied) == {"zone", "interior_delivery"}

    def test_deterministic(self, calculator, sample_request):
        first = calculator.compute_cost(sample_request, Carrier.DHL)
        second = calculator.compute_cost(sample_request, Carrier.DHL)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_uses_configured_fractions(self, sample_snapshot, settings, sample_request, quote_date):
        custom = settings.model_copy(update={"gst_rate": 0.0, "cushion_rate": 0.0})
        quote = FreightCalculator(sample_snapshot, custom, quote_date).compute_cost(sample_request, Carrier.DHL)
        assert quote.final_total == pytest.approx(quote.total_freight)


class TestDataAvailability:
    """Test the loaded-data precondition."""

    def test_empty_snapshot(self, settings, sample_request):
        calculator = FreightCalculator(TableSnapshot(), settings)
        with pytest.raises(DataUnavailableError):
            calculator.compute_cost(sample_request, Carrier.DHL)

    def test_empty_rate_tables(self, settings, sample_request):
        snapshot = TableSnapshot(zone_chart=(ZoneChartEntry(country="USA", carrier="DHL", zone="1"),))
        with pytest.raises(DataUnavailableError):
            FreightCalculator(snapshot, settings).compare(sample_request)

    def test_empty_zone_chart(self, settings, sample_request):
        snapshot = create_sample_snapshot().model_copy(update={"zone_chart": ()})
        with pytest.raises(DataUnavailableError):
            FreightCalculator(snapshot, settings).compute_cost(sample_request, Carrier.UPS)


class TestCompare:
    """Test three-carrier comparison."""

    def test_all_carriers_priced(self, sample_snapshot, settings, sample_request, quote_date):
        comparison = FreightCalculator(sample_snapshot, settings, quote_date).compare(sample_request)

        assert list(comparison.quotes) == [Carrier.FEDEX, Carrier.DHL, Carrier.UPS]
        assert comparison.request == sample_request
        assert comparison[Carrier.DHL].final_total == pytest.approx(11108.88875)

    def test_cheapest(self, sample_snapshot, settings, sample_request, quote_date):
        comparison = FreightCalculator(sample_snapshot, settings, quote_date).compare(sample_request)
        cheapest = comparison.cheapest()
        assert cheapest.final_total == min(quote.final_total for quote in comparison.quotes.values())

    def test_carrier_subset(self, sample_snapshot, settings, sample_request, quote_date):
        comparison = FreightCalculator(sample_snapshot, settings, quote_date).compare(
            sample_request, carriers=[Carrier.UPS]
        )
        assert list(comparison.quotes) == [Carrier.UPS]
