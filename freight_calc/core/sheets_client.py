"""Google Sheets client and sheet-to-model parsing."""

from typing import Any, Dict, List, Optional, Tuple

import httpx

from freight_calc.config.logging_config import get_logger
from freight_calc.config.settings import Settings, get_settings
from freight_calc.core.errors import SheetFetchError
from freight_calc.models.schema import (
    FscWindow,
    InteriorDeliveryCharge,
    RateTable,
    Zone,
    ZoneChartEntry,
    ZoneRates,
)
from freight_calc.models.utils import parse_number, parse_number_or_zero

logger = get_logger(__name__)

SheetValues = List[List[Any]]


class SheetsClient:
    """Read cell values from the Google Sheets values API.

    Each call opens its own AsyncClient so that several sheets can be fetched
    concurrently with asyncio.gather.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize client.

        Args:
            settings: API key, base URL, range and timeout (defaults to global settings)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.settings = settings or get_settings()
        self._transport = transport

    async def fetch_values(self, sheet_id: str) -> SheetValues:
        """Fetch all rows of a sheet.

        Args:
            sheet_id: Spreadsheet ID

        Returns:
            Rows of cell values; trailing empty cells are omitted by the API

        Raises:
            SheetFetchError: If the API is not configured, unreachable, or
                answers with an error status, a non-JSON body or a body
                without a list of rows
        """
        if not self.settings.sheets_configured() or not sheet_id:
            raise SheetFetchError(sheet_id, "Google Sheets API key or sheet ID not configured")

        url = f"{self.settings.google_sheets_base_url}/{sheet_id}/values/{self.settings.google_sheets_range}"
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.google_sheets_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params={"key": self.settings.google_sheets_api_key})
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise SheetFetchError(sheet_id, str(e)) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SheetFetchError(sheet_id, f"invalid JSON response: {e}") from e

        if not isinstance(payload, dict):
            raise SheetFetchError(sheet_id, f"unexpected response body: {type(payload).__name__}")
        values = payload.get("values") or []
        if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
            raise SheetFetchError(sheet_id, "unexpected response body: values is not a list of rows")
        logger.debug(f"Fetched {len(values)} rows from sheet {sheet_id}")
        return values


def rows_to_records(values: SheetValues) -> List[Dict[str, str]]:
    """Convert sheet rows to dictionaries keyed by the header row.

    Missing or empty cells become empty strings.

    Args:
        values: Sheet rows, header row first

    Returns:
        One dictionary per data row
    """
    if not values:
        return []
    headers = [str(header) for header in values[0]]
    records = []
    for row in values[1:]:
        records.append({
            header: (str(row[index]) if index < len(row) and row[index] not in (None, "") else "")
            for index, header in enumerate(headers)
        })
    return records


def parse_zone_chart(values: SheetValues) -> Tuple[ZoneChartEntry, ...]:
    """Parse a zone chart sheet with Country, Carrier and Zone columns."""
    return tuple(
        ZoneChartEntry(
            country=record.get("Country", ""),
            carrier=record.get("Carrier", ""),
            zone=record.get("Zone", ""),
        )
        for record in rows_to_records(values)
    )


def parse_rate_sheet(carrier: str, values: SheetValues) -> RateTable:
    """Parse a carrier rate chart.

    The header row is "Weight, Zone 1, Zone 2, ...". Every later row holds a
    band weight in the first column and one rate per zone column.

    Columns whose header is not "Zone <label>" are ignored, rows without a
    numeric weight are skipped, and blank or non-numeric rates are stored
    as 0.

    Args:
        carrier: Carrier the sheet belongs to
        values: Sheet rows, header row first

    Returns:
        RateTable for the carrier (no zones if the sheet is empty)
    """
    if not values:
        return RateTable(carrier=carrier)

    headers = values[0]
    rows = values[1:]
    zones = []
    for column, header in enumerate(headers):
        if column == 0:
            continue
        zone = Zone.from_header(str(header))
        if zone is None:
            logger.debug(f"{carrier} rate sheet: ignoring column {header!r}")
            continue
        rates: Dict[float, float] = {}
        for row in rows:
            weight = parse_number(row[0]) if row else None
            if weight is None:
                continue
            rates[weight] = parse_number_or_zero(row[column] if column < len(row) else None)
        zones.append(ZoneRates(zone=zone, rates=rates))
    return RateTable(carrier=carrier, zones=tuple(zones))


def parse_fsc_schedule(values: SheetValues) -> Tuple[FscWindow, ...]:
    """Parse a fuel surcharge sheet with Carrier, Starting Date, End Date and FSC % columns."""
    return tuple(
        FscWindow(
            carrier=record.get("Carrier", ""),
            start_date=record.get("Starting Date", ""),
            end_date=record.get("End Date", ""),
            fsc_percent=record.get("FSC %"),
        )
        for record in rows_to_records(values)
    )


def parse_interior_delivery(values: SheetValues) -> Tuple[InteriorDeliveryCharge, ...]:
    """Parse an interior delivery sheet with Country and Amount columns."""
    return tuple(
        InteriorDeliveryCharge(country=record.get("Country", ""), amount=record.get("Amount"))
        for record in rows_to_records(values)
    )
