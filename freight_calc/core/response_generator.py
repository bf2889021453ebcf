"""Render freight quotes as currency-formatted Markdown."""

from typing import Iterable, List, Optional

from freight_calc.config.settings import Settings, get_settings
from freight_calc.config.messages import (
    FORMAT_AIR_FREIGHT_LABEL,
    FORMAT_BASE_RATE_LABEL,
    FORMAT_CHEAPEST_LABEL,
    FORMAT_CUSHION_LABEL,
    FORMAT_CUSTOMS_LABEL,
    FORMAT_DEFAULTS_NOTE,
    FORMAT_DEMAND_SURCHARGE_LABEL,
    FORMAT_FINAL_TOTAL_LABEL,
    FORMAT_FSC_AMOUNT_LABEL,
    FORMAT_FSC_LABEL,
    FORMAT_FSC_RATE_LABEL,
    FORMAT_GST_LABEL,
    FORMAT_INTERIOR_DELIVERY_LABEL,
    FORMAT_OVER_DIMENSION_LABEL,
    FORMAT_OVER_WEIGHT_LABEL,
    FORMAT_TOTAL_FREIGHT_LABEL,
    FORMAT_ZONE_LABEL,
)
from freight_calc.models.shipment_models import CarrierComparison, CostBreakdown


def _group_indian(digits: str) -> str:
    """Group an integer digit string the en-IN way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: float, symbol: Optional[str] = None) -> str:
    """Format an amount with two decimals, Indian digit grouping and a currency symbol.

    Args:
        amount: Amount to format
        symbol: Currency symbol (defaults to the configured display symbol)

    Returns:
        Formatted string, e.g. "₹11,108.86" or "-₹1,000.00"

    Example:
        >>> format_currency(1234567.891, symbol="₹")
        '₹12,34,567.89'
    """
    if symbol is None:
        symbol = get_settings().display_currency_symbol
    rounded = f"{abs(amount):.2f}"
    whole, fraction = rounded.split(".")
    sign = "-" if amount < 0 and float(rounded) != 0 else ""
    return f"{sign}{symbol}{_group_indian(whole)}.{fraction}"


class ResponseGenerator:
    """Render a CarrierComparison for display.

    Produces a Markdown table with one column per carrier and one row per
    line item, followed by the cheapest option and a note listing carriers
    whose quote relied on default reference values.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize response generator.

        Args:
            settings: Display currency and pricing fractions (defaults to global settings)
        """
        self.settings = settings or get_settings()

    def money(self, amount: float) -> str:
        return format_currency(amount, self.settings.display_currency_symbol)

    def generate(self, comparison: CarrierComparison) -> str:
        """
        Generate the Markdown rendering of a comparison.

        Args:
            comparison: Quotes of all carriers for one request

        Returns:
            Markdown string
        """
        request = comparison.request
        quotes = list(comparison.quotes.values())

        lines = [
            f"### Freight Cost Comparison: {request.unique_id}",
            "",
            f"{request.customer_name} ({request.company}), {request.weight_kg:g} kg to {request.country}. "
            f"Amounts in {self.settings.display_currency}.",
            "",
        ]
        lines.extend(self._table(quotes))

        cheapest = comparison.cheapest()
        if cheapest is not None:
            lines.append("")
            lines.append(FORMAT_CHEAPEST_LABEL.format(
                carrier=cheapest.carrier.display_name,
                amount=self.money(cheapest.final_total),
            ))

        notes = self._default_notes(quotes)
        if notes:
            lines.append("")
            lines.extend(notes)
        return "\n".join(lines)

    def _table(self, quotes: List[CostBreakdown]) -> List[str]:
        header = "| | " + " | ".join(quote.carrier.display_name for quote in quotes) + " |"
        divider = "|---|" + "---:|" * len(quotes)

        def row(label: str, cells: Iterable[str]) -> str:
            return f"| {label} | " + " | ".join(cells) + " |"

        rows = [
            row(FORMAT_ZONE_LABEL, (quote.zone for quote in quotes)),
            row(FORMAT_BASE_RATE_LABEL, (self.money(quote.base_rate) for quote in quotes)),
            row(FORMAT_AIR_FREIGHT_LABEL, (self.money(quote.amount_air_freight) for quote in quotes)),
            row(FORMAT_DEMAND_SURCHARGE_LABEL, (self.money(quote.demand_surcharge) for quote in quotes)),
            row(FORMAT_OVER_DIMENSION_LABEL, (self.money(quote.over_dimension) for quote in quotes)),
            row(FORMAT_OVER_WEIGHT_LABEL, (self.money(quote.over_weight) for quote in quotes)),
            row(FORMAT_INTERIOR_DELIVERY_LABEL, (self.money(quote.interior_delivery) for quote in quotes)),
            row(FORMAT_FSC_RATE_LABEL, (f"{quote.fsc_percent:.2f}%" for quote in quotes)),
            row(FORMAT_FSC_AMOUNT_LABEL, (self.money(quote.fsc_amount) for quote in quotes)),
            row(FORMAT_CUSTOMS_LABEL, (self.money(quote.customs_clearance) for quote in quotes)),
            row(f"**{FORMAT_TOTAL_FREIGHT_LABEL}**", (self.money(quote.total_freight) for quote in quotes)),
            row(FORMAT_GST_LABEL.format(percent=self.settings.gst_rate * 100),
                (self.money(quote.gst) for quote in quotes)),
            row(FORMAT_CUSHION_LABEL.format(percent=self.settings.cushion_rate * 100),
                (self.money(quote.cushion) for quote in quotes)),
            row(f"**{FORMAT_FINAL_TOTAL_LABEL}**", (f"**{self.money(quote.final_total)}**" for quote in quotes)),
        ]
        return [header, divider] + rows

    def _default_notes(self, quotes: List[CostBreakdown]) -> List[str]:
        notes = []
        for quote in quotes:
            if quote.defaults_applied:
                lookups = ", ".join(name.replace("_", " ") for name in quote.defaults_applied)
                notes.append(f"{quote.carrier.display_name}: " + FORMAT_DEFAULTS_NOTE.format(lookups=lookups))
        return notes

    def breakdown_text(self, quote: CostBreakdown) -> str:
        """Plain-text itemization of a single carrier quote, one line per item."""
        items = [
            (FORMAT_ZONE_LABEL, quote.zone),
            (FORMAT_BASE_RATE_LABEL, self.money(quote.base_rate)),
            (FORMAT_AIR_FREIGHT_LABEL, self.money(quote.amount_air_freight)),
            (FORMAT_DEMAND_SURCHARGE_LABEL, self.money(quote.demand_surcharge)),
            (FORMAT_OVER_DIMENSION_LABEL, self.money(quote.over_dimension)),
            (FORMAT_OVER_WEIGHT_LABEL, self.money(quote.over_weight)),
            (FORMAT_INTERIOR_DELIVERY_LABEL, self.money(quote.interior_delivery)),
            (FORMAT_FSC_LABEL.format(percent=quote.fsc_percent), self.money(quote.fsc_amount)),
            (FORMAT_CUSTOMS_LABEL, self.money(quote.customs_clearance)),
            (FORMAT_TOTAL_FREIGHT_LABEL, self.money(quote.total_freight)),
            (FORMAT_GST_LABEL.format(percent=self.settings.gst_rate * 100), self.money(quote.gst)),
            (FORMAT_CUSHION_LABEL.format(percent=self.settings.cushion_rate * 100), self.money(quote.cushion)),
            (FORMAT_FINAL_TOTAL_LABEL, self.money(quote.final_total)),
        ]
        return "\n".join(f"{label}: {value}" for label, value in items)
