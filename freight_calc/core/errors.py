"""Exceptions raised by the freight calculator."""

from freight_calc.config.messages import ERROR_DATA_NOT_LOADED


class FreightCalcError(Exception):
    """Base class for all freight calculator errors."""


class DataUnavailableError(FreightCalcError):
    """Reference tables are missing, so no shipment can be priced."""

    def __init__(self, message: str = ERROR_DATA_NOT_LOADED):
        super().__init__(message)


class SheetFetchError(FreightCalcError):
    """A sheet could not be retrieved from the Google Sheets API."""

    def __init__(self, sheet_id: str, reason: str):
        self.sheet_id = sheet_id
        self.reason = reason
        super().__init__(f"Failed to fetch data from Google Sheets ({sheet_id or '<unset>'}): {reason}")


class SnapshotFileError(FreightCalcError):
    """A table snapshot file is missing or unreadable."""
