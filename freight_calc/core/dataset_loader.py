"""Load freight reference tables from Google Sheets, snapshot files or mock data."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, NamedTuple, Optional, Union

from pydantic import ValidationError

from freight_calc.config.logging_config import get_logger
from freight_calc.config.settings import Settings, get_settings
from freight_calc.core import mock_data
from freight_calc.core.errors import SheetFetchError, SnapshotFileError
from freight_calc.core.sheets_client import (
    SheetsClient,
    parse_fsc_schedule,
    parse_interior_delivery,
    parse_rate_sheet,
    parse_zone_chart,
)
from freight_calc.models.schema import Carrier, DataSource, TableSnapshot

logger = get_logger(__name__)

ZONE_CHART = "zone_chart"
RATE_TABLES = "rate_tables"
FSC_SCHEDULE = "fsc_schedule"
INTERIOR_DELIVERY = "interior_delivery"


class LoadedTable(NamedTuple):
    """A reference table together with where it came from."""
    data: Any
    source: DataSource


class FreightDataLoader:
    """Load the four reference tables into a TableSnapshot.

    Live data comes from Google Sheets. Every table falls back to the
    embedded mock data independently when its sheet cannot be fetched; the
    three carrier rate charts are fetched as one batch and fall back
    together. When a snapshot file is configured it is used instead of
    Google Sheets.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[SheetsClient] = None
    ):
        """
        Initialize loader.

        Args:
            settings: Sheet IDs and snapshot path (defaults to global settings)
            client: Sheets client (defaults to one built from settings)
        """
        self.settings = settings or get_settings()
        self.client = client or SheetsClient(self.settings)

    async def fetch_zone_chart(self) -> LoadedTable:
        """Fetch the zone chart, falling back to mock data."""
        try:
            values = await self.client.fetch_values(self.settings.zone_chart_sheet_id)
            return LoadedTable(parse_zone_chart(values), DataSource.LIVE)
        except SheetFetchError as e:
            logger.warning(f"Error fetching zone chart, using mock data: {e}")
            return LoadedTable(mock_data.mock_zone_chart(), DataSource.MOCK)

    async def fetch_rate_tables(self) -> LoadedTable:
        """Fetch the UPS, DHL and FedEx rate charts concurrently.

        If any of the three fails, all three fall back to mock data. Every
        fetch is awaited before the fallback is decided.
        """
        sheet_ids = {
            Carrier.UPS: self.settings.ups_rates_sheet_id,
            Carrier.DHL: self.settings.dhl_rates_sheet_id,
            Carrier.FEDEX: self.settings.fedex_rates_sheet_id,
        }
        results = await asyncio.gather(
            *(self.client.fetch_values(sheet_id) for sheet_id in sheet_ids.values()),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]
        for failure in failures:
            if not isinstance(failure, SheetFetchError):
                raise failure
        if failures:
            logger.warning(f"Error fetching rate charts, using mock data: {failures[0]}")
            return LoadedTable(mock_data.mock_rate_tables(), DataSource.MOCK)

        tables = {
            carrier.value: parse_rate_sheet(carrier.value, values)
            for carrier, values in zip(sheet_ids, results)
        }
        return LoadedTable(tables, DataSource.LIVE)

    async def fetch_fsc_schedule(self) -> LoadedTable:
        """Fetch the fuel surcharge schedule, falling back to mock data."""
        try:
            values = await self.client.fetch_values(self.settings.fsc_sheet_id)
            return LoadedTable(parse_fsc_schedule(values), DataSource.LIVE)
        except SheetFetchError as e:
            logger.warning(f"Error fetching FSC data, using mock data: {e}")
            return LoadedTable(mock_data.mock_fsc_schedule(), DataSource.MOCK)

    async def fetch_interior_delivery(self) -> LoadedTable:
        """Fetch interior delivery charges, falling back to mock data."""
        try:
            values = await self.client.fetch_values(self.settings.interior_delivery_sheet_id)
            return LoadedTable(parse_interior_delivery(values), DataSource.LIVE)
        except SheetFetchError as e:
            logger.warning(f"Error fetching interior delivery charges, using mock data: {e}")
            return LoadedTable(mock_data.mock_interior_delivery(), DataSource.MOCK)

    async def load(self) -> TableSnapshot:
        """Load the configured snapshot file, or all four tables from Google Sheets.

        Returns:
            TableSnapshot with the data source of every table recorded
        """
        snapshot_path = self.settings.get_snapshot_path(Path.cwd())
        if snapshot_path is not None:
            return self.load_from_json(snapshot_path)
        return await self.load_live()

    async def load_live(self) -> TableSnapshot:
        """Fetch all four tables from Google Sheets, ignoring any snapshot file.

        Tables that cannot be fetched fall back to mock data.
        """
        zone_chart, rate_tables, fsc_schedule, interior_delivery = await asyncio.gather(
            self.fetch_zone_chart(),
            self.fetch_rate_tables(),
            self.fetch_fsc_schedule(),
            self.fetch_interior_delivery(),
        )
        snapshot = TableSnapshot(
            zone_chart=zone_chart.data,
            rate_tables=rate_tables.data,
            fsc_schedule=fsc_schedule.data,
            interior_delivery=interior_delivery.data,
            sources={
                ZONE_CHART: zone_chart.source,
                RATE_TABLES: rate_tables.source,
                FSC_SCHEDULE: fsc_schedule.source,
                INTERIOR_DELIVERY: interior_delivery.source,
            },
            loaded_at=datetime.now(timezone.utc),
        )
        logger.info(
            f"Loaded freight data: {len(snapshot.zone_chart)} zone entries, "
            f"{len(snapshot.rate_tables)} rate charts, {len(snapshot.fsc_schedule)} FSC windows, "
            f"{len(snapshot.interior_delivery)} interior delivery charges "
            f"({', '.join(f'{name}={source.value}' for name, source in snapshot.sources.items())})"
        )
        return snapshot

    def load_sync(self) -> TableSnapshot:
        """Blocking wrapper around load() for callers without an event loop."""
        return asyncio.run(self.load())

    @staticmethod
    def load_mock() -> TableSnapshot:
        """Build a snapshot entirely from the embedded mock tables."""
        return TableSnapshot(
            zone_chart=mock_data.mock_zone_chart(),
            rate_tables=mock_data.mock_rate_tables(),
            fsc_schedule=mock_data.mock_fsc_schedule(),
            interior_delivery=mock_data.mock_interior_delivery(),
            sources={name: DataSource.MOCK for name in (ZONE_CHART, RATE_TABLES, FSC_SCHEDULE, INTERIOR_DELIVERY)},
            loaded_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def load_from_json(json_path: Union[str, Path]) -> TableSnapshot:
        """
        Load a table snapshot from a JSON file.

        Args:
            json_path: Path to a file written by save_to_json

        Returns:
            TableSnapshot with every table marked as coming from a file

        Raises:
            SnapshotFileError: If the file is missing or not a valid snapshot
        """
        json_path = Path(json_path)
        if not json_path.exists():
            raise SnapshotFileError(f"Snapshot file not found: {json_path}")

        logger.info(f"Loading freight data from: {json_path}")
        try:
            snapshot = TableSnapshot.model_validate_json(json_path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise SnapshotFileError(f"Invalid snapshot file {json_path}: {e}") from e

        return TableSnapshot.model_validate({
            **dict(snapshot),
            "sources": {name: DataSource.FILE for name in (ZONE_CHART, RATE_TABLES, FSC_SCHEDULE, INTERIOR_DELIVERY)},
        })

    @staticmethod
    def save_to_json(snapshot: TableSnapshot, json_path: Union[str, Path]) -> Path:
        """
        Write a table snapshot to a JSON file.

        Args:
            snapshot: Snapshot to save
            json_path: Destination path (parent directories are created)

        Returns:
            The path written
        """
        json_path = Path(json_path)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Saved freight data snapshot to: {json_path}")
        return json_path
