"""Main workflow orchestrator - LangGraph-based quote workflow."""

from datetime import date
from typing import Any, Dict, List, Optional, TypedDict

from langgraph.graph import StateGraph, START, END
from pydantic import ValidationError

from freight_calc.config.logging_config import get_logger
from freight_calc.config.settings import Settings, get_settings
from freight_calc.config.messages import (
    ERROR_FIELD_REQUIRED,
    ERROR_VALUE_NOT_NUMBER,
    ERROR_VALUE_NOT_POSITIVE,
    FIELD_LABELS,
    STATUS_DATA_TEMPLATE,
    STATUS_SOURCES_TEMPLATE,
)
from freight_calc.core.calculator import FreightCalculator
from freight_calc.core.dataset_loader import FreightDataLoader
from freight_calc.core.errors import DataUnavailableError
from freight_calc.core.response_generator import ResponseGenerator
from freight_calc.models.schema import TableSnapshot
from freight_calc.models.shipment_models import CarrierComparison, ShipmentRequest

logger = get_logger(__name__)


class QuoteWorkflowState(TypedDict):
    """State shared between LangGraph nodes.

    Attributes:
        form_data: Raw submitted form values keyed by ShipmentRequest field name
        request: Validated shipment request (Node 1)
        errors: User-facing error messages collected by any node
        comparison: Quotes of all carriers (Node 2)
        answer: Rendered Markdown response (Node 3)
    """
    form_data: Dict[str, Any]
    request: Optional[ShipmentRequest]
    errors: List[str]
    comparison: Optional[CarrierComparison]
    answer: str


def format_validation_errors(error: ValidationError) -> List[str]:
    """Turn a ShipmentRequest validation error into user-facing messages.

    Args:
        error: Pydantic validation error

    Returns:
        One message per invalid field, in field order
    """
    messages = []
    for item in error.errors():
        field = str(item["loc"][0]) if item["loc"] else ""
        label = FIELD_LABELS.get(field, field)
        kind = item["type"]
        if kind in ("missing", "string_too_short"):
            messages.append(ERROR_FIELD_REQUIRED.format(label=label))
        elif kind == "greater_than_equal":
            messages.append(ERROR_VALUE_NOT_POSITIVE.format(label=label))
        elif kind in ("float_parsing", "float_type", "finite_number"):
            messages.append(ERROR_VALUE_NOT_NUMBER.format(label=label))
        else:
            messages.append(f"{label}: {item['msg']}")
    return messages


class QuoteWorkflow:
    """Main workflow orchestrator using LangGraph.

    Holds the current reference table snapshot and runs each submission
    through three nodes:
    1. Validate Request: build a ShipmentRequest from the form data
    2. Compute Quotes: price the shipment with every carrier
    3. Response Generator: render the comparison or the collected errors

    Workflow structure:
    - Node 1 → Node 2 when the request is valid, otherwise Node 1 → Node 3
    - Node 2 → Node 3

    Refreshing swaps in a new snapshot. A submission already being priced
    keeps the snapshot it started with.
    """

    def __init__(
        self,
        loader: Optional[FreightDataLoader] = None,
        settings: Optional[Settings] = None,
        snapshot: Optional[TableSnapshot] = None,
        today: Optional[date] = None
    ):
        """
        Initialize workflow.

        Args:
            loader: Data loader (defaults to one built from settings)
            settings: Application settings (defaults to global settings)
            snapshot: Preloaded snapshot; skips the initial load when given
            today: Date used for fuel surcharge windows (defaults to today)
        """
        self.settings = settings or get_settings()
        self.loader = loader or FreightDataLoader(self.settings)
        self.response_generator = ResponseGenerator(self.settings)
        self.snapshot = snapshot
        self.today = today

        self.graph = None
        self._initialized = False

    def initialize(self):
        """Load reference data (unless preloaded) and build the LangGraph workflow.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            return

        logger.info("Initializing Quote Workflow (LangGraph)...")
        if self.snapshot is None:
            logger.info("1. Loading freight data...")
            self.snapshot = self.loader.load_sync()
        logger.info("2. Building LangGraph workflow...")

        graph = StateGraph(QuoteWorkflowState)
        graph.add_node("validate_request", self._validate_request_node)
        graph.add_node("compute_quotes", self._compute_quotes_node)
        graph.add_node("response_generator", self._response_generator_node)

        graph.add_edge(START, "validate_request")
        graph.add_conditional_edges(
            "validate_request",
            self._route_after_validation,
            {"compute_quotes": "compute_quotes", "response_generator": "response_generator"},
        )
        graph.add_edge("compute_quotes", "response_generator")
        graph.add_edge("response_generator", END)

        self.graph = graph.compile()
        logger.info("3. Quote workflow ready!")

        self._initialized = True

    def refresh(self) -> TableSnapshot:
        """Discard the current snapshot and load a fresh one.

        Returns:
            The new snapshot
        """
        logger.info("Refreshing freight data...")
        self.snapshot = self.loader.load_sync()
        return self.snapshot

    def data_status(self) -> str:
        """Summarize the loaded tables for display."""
        snapshot = self.snapshot or TableSnapshot()
        status = STATUS_DATA_TEMPLATE.format(
            zone_entries=len(snapshot.zone_chart),
            rate_carriers=len(snapshot.rate_tables),
            fsc_entries=len(snapshot.fsc_schedule),
            interior_entries=len(snapshot.interior_delivery),
        )
        if snapshot.sources:
            sources = ", ".join(f"{name.replace('_', ' ')}: {source.value}" for name, source in snapshot.sources.items())
            status += "  \n" + STATUS_SOURCES_TEMPLATE.format(sources=sources)
        return status

    def quote(self, request: ShipmentRequest) -> CarrierComparison:
        """Price a validated request with every carrier.

        Raises:
            DataUnavailableError: If no reference data is loaded
        """
        calculator = FreightCalculator(self.snapshot or TableSnapshot(), self.settings, self.today)
        return calculator.compare(request)

    def process(self, form_data: Dict[str, Any]) -> str:
        """Run a form submission through the workflow.

        Args:
            form_data: Form values keyed by ShipmentRequest field name

        Returns:
            Rendered Markdown: the comparison, or the error messages
        """
        if not self._initialized:
            self.initialize()

        initial_state: QuoteWorkflowState = {
            "form_data": form_data,
            "request": None,
            "errors": [],
            "comparison": None,
            "answer": "",
        }
        final_state = self.graph.invoke(initial_state)
        return final_state["answer"]

    # Node 1: Validate Request
    def _validate_request_node(self, state: QuoteWorkflowState) -> Dict[str, Any]:
        """Build a ShipmentRequest from raw form values.

        Blank values are dropped first so that a blank required field is
        reported as missing and a blank optional charge counts as absent.
        """
        logger.info("Node 1: Validate Request")
        cleaned = {
            key: value for key, value in state["form_data"].items()
            if value is not None and not (isinstance(value, str) and not value.strip())
        }
        try:
            request = ShipmentRequest.model_validate(cleaned)
        except ValidationError as e:
            errors = format_validation_errors(e)
            logger.info(f"Request rejected: {'; '.join(errors)}")
            return {"errors": errors}
        return {"request": request}

    def _route_after_validation(self, state: QuoteWorkflowState) -> str:
        return "response_generator" if state["errors"] else "compute_quotes"

    # Node 2: Compute Quotes
    def _compute_quotes_node(self, state: QuoteWorkflowState) -> Dict[str, Any]:
        """Price the request with every carrier against the current snapshot."""
        logger.info("Node 2: Compute Quotes")
        try:
            comparison = self.quote(state["request"])
        except DataUnavailableError as e:
            return {"errors": [str(e)]}
        return {"comparison": comparison}

    # Node 3: Response Generator
    def _response_generator_node(self, state: QuoteWorkflowState) -> Dict[str, Any]:
        """Render the comparison, or the errors collected by earlier nodes."""
        logger.info("Node 3: Response Generator")
        if state["errors"] or state.get("comparison") is None:
            answer = "\n".join(f"**Error:** {message}" for message in state["errors"])
            return {"answer": answer}
        return {"answer": self.response_generator.generate(state["comparison"])}
