"""Core business logic modules."""

from freight_calc.core.errors import (
    FreightCalcError,
    DataUnavailableError,
    SheetFetchError,
    SnapshotFileError,
)
from freight_calc.core.resolver import (
    resolve_zone,
    resolve_rate,
    resolve_fsc,
    resolve_interior_delivery,
    resolve_customs,
)
from freight_calc.core.calculator import FreightCalculator
from freight_calc.core.sheets_client import SheetsClient
from freight_calc.core.dataset_loader import FreightDataLoader
from freight_calc.core.response_generator import ResponseGenerator, format_currency
from freight_calc.core.workflow import QuoteWorkflow, QuoteWorkflowState

__all__ = [
    "FreightCalcError",
    "DataUnavailableError",
    "SheetFetchError",
    "SnapshotFileError",
    "resolve_zone",
    "resolve_rate",
    "resolve_fsc",
    "resolve_interior_delivery",
    "resolve_customs",
    "FreightCalculator",
    "SheetsClient",
    "FreightDataLoader",
    "ResponseGenerator",
    "format_currency",
    "QuoteWorkflow",
    "QuoteWorkflowState",
]
