"""Gradio UI for the Freight Cost Comparison calculator."""

from typing import Any, Dict, Optional

import gradio as gr

from freight_calc.config.env_loader import load_environment_variables

# Load environment variables before settings are first read
load_environment_variables()

from freight_calc.config.logging_config import get_logger, setup_logging
from freight_calc.config.messages import STATUS_LOADING
from freight_calc.config.settings import get_settings
from freight_calc.core.workflow import QuoteWorkflow

logger = get_logger(__name__)


def build_form_data(
    unique_id: str,
    company: str,
    customer_name: str,
    country: str,
    currency: str,
    product_value: Optional[float],
    weight_kg: Optional[float],
    show_over_dimension: bool = False,
    fedex_over_dimension: Optional[float] = None,
    dhl_over_dimension: Optional[float] = None,
    ups_over_dimension: Optional[float] = None,
    show_over_weight: bool = False,
    fedex_over_weight: Optional[float] = None,
    dhl_over_weight: Optional[float] = None,
    ups_over_weight: Optional[float] = None,
) -> Dict[str, Any]:
    """Collect form inputs into workflow form data.

    Over-dimension and over-weight charges are only submitted while their
    section is switched on.
    """
    form_data: Dict[str, Any] = {
        "unique_id": unique_id,
        "company": company,
        "customer_name": customer_name,
        "country": country,
        "currency": currency,
        "product_value": product_value,
        "weight_kg": weight_kg,
    }
    if show_over_dimension:
        form_data.update({
            "fedex_over_dimension": fedex_over_dimension,
            "dhl_over_dimension": dhl_over_dimension,
            "ups_over_dimension": ups_over_dimension,
        })
    if show_over_weight:
        form_data.update({
            "fedex_over_weight": fedex_over_weight,
            "dhl_over_weight": dhl_over_weight,
            "ups_over_weight": ups_over_weight,
        })
    return form_data


class FreightQuoteInterface:
    """Form interface wrapper for QuoteWorkflow.

    Provides a simple interface between the Gradio form and the
    QuoteWorkflow. Handles lazy initialization and error display.
    """

    def __init__(self, workflow: Optional[QuoteWorkflow] = None):
        """Initialize the form interface."""
        self.workflow = workflow or QuoteWorkflow()
        self.initialized = False

    def initialize(self):
        """Initialize the workflow (loads freight data)."""
        if not self.initialized:
            logger.info(STATUS_LOADING)
            self.workflow.initialize()
            self.initialized = True

    def calculate(self, *inputs: Any) -> str:
        """Price a form submission and return the rendered Markdown.

        Args:
            *inputs: Form values in build_form_data argument order

        Returns:
            str: Rendered comparison or error messages
        """
        if not self.initialized:
            self.initialize()

        try:
            return self.workflow.process(build_form_data(*inputs))
        except Exception as e:
            logger.exception("Calculation error")
            return f"**Error:** {e}"

    def refresh(self) -> str:
        """Reload freight data and return the new data status."""
        if not self.initialized:
            self.initialize()
        else:
            self.workflow.refresh()
        return self.workflow.data_status()

    def data_status(self) -> str:
        if not self.initialized:
            self.initialize()
        return self.workflow.data_status()


def create_demo(interface: Optional[FreightQuoteInterface] = None) -> gr.Blocks:
    """Create and return the Gradio demo for the freight calculator.

    Returns:
        gr.Blocks: Configured Gradio interface
    """
    interface = interface or FreightQuoteInterface()
    interface.initialize()

    with gr.Blocks(title="Freight Cost Comparison", theme=gr.themes.Soft()) as demo:
        with gr.Row():
            gr.Markdown("<h1 style='margin: 20px 0;'>Freight Cost Comparison</h1>")
            refresh_button = gr.Button("Refresh Data", variant="secondary", size="sm", scale=0)

        status = gr.Markdown(interface.data_status())

        gr.Markdown("### Basic Information")
        with gr.Row():
            unique_id = gr.Textbox(label="Unique ID")
            company = gr.Textbox(label="Company")
        with gr.Row():
            customer_name = gr.Textbox(label="Customer Name")
            country = gr.Textbox(label="Country")
        with gr.Row():
            currency = gr.Textbox(label="Currency")
            product_value = gr.Number(label="Product Value", value=None)
            weight_kg = gr.Number(label="Weight (kg)", value=None)

        gr.Markdown("### Additional Charges")
        show_over_dimension = gr.Checkbox(
            label="Over Dimension Charges",
            info="Additional charges for oversized packages",
        )
        with gr.Row(visible=False) as over_dimension_row:
            fedex_over_dimension = gr.Number(label="FedEx Over Dimension", value=None)
            dhl_over_dimension = gr.Number(label="DHL Over Dimension", value=None)
            ups_over_dimension = gr.Number(label="UPS Over Dimension", value=None)

        show_over_weight = gr.Checkbox(
            label="Over Weight Charges",
            info="Additional charges for overweight packages",
        )
        with gr.Row(visible=False) as over_weight_row:
            fedex_over_weight = gr.Number(label="FedEx Over Weight", value=None)
            dhl_over_weight = gr.Number(label="DHL Over Weight", value=None)
            ups_over_weight = gr.Number(label="UPS Over Weight", value=None)

        calculate_button = gr.Button("Calculate Freight", variant="primary")
        result = gr.Markdown()

        show_over_dimension.change(
            fn=lambda visible: gr.update(visible=visible),
            inputs=show_over_dimension,
            outputs=over_dimension_row,
        )
        show_over_weight.change(
            fn=lambda visible: gr.update(visible=visible),
            inputs=show_over_weight,
            outputs=over_weight_row,
        )
        calculate_button.click(
            fn=interface.calculate,
            inputs=[
                unique_id, company, customer_name, country, currency, product_value, weight_kg,
                show_over_dimension, fedex_over_dimension, dhl_over_dimension, ups_over_dimension,
                show_over_weight, fedex_over_weight, dhl_over_weight, ups_over_weight,
            ],
            outputs=result,
        )
        refresh_button.click(fn=interface.refresh, outputs=status)

    return demo


def main():
    """Main entry point for the Freight Cost Comparison calculator."""
    settings = get_settings()
    setup_logging(level=settings.log_level)

    print("=" * 60)
    print("Freight Cost Comparison")
    print("=" * 60)
    print("Starting web interface...")
    print(f"Navigate to: http://localhost:{settings.server_port}")
    print("Press Ctrl+C to stop the server.")
    print("=" * 60)
    print()

    demo = create_demo()
    demo.launch(
        server_name=settings.server_host,
        server_port=settings.server_port,
        share=False
    )


if __name__ == "__main__":
    main()
