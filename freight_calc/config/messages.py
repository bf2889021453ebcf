"""User-facing messages and error strings.

This module centralizes all user-facing messages to improve maintainability
and enable future internationalization (i18n) support.
"""

# Error Messages
ERROR_DATA_NOT_LOADED = "Freight data not loaded. Please wait or refresh the data."
ERROR_FIELD_REQUIRED = "{label} is required"
ERROR_VALUE_NOT_POSITIVE = "{label} must be positive"
ERROR_VALUE_NOT_NUMBER = "{label} must be a number"

# Field labels, keyed by ShipmentRequest field name
FIELD_LABELS = {
    "unique_id": "Unique ID",
    "company": "Company",
    "customer_name": "Customer Name",
    "country": "Country",
    "currency": "Currency",
    "product_value": "Product Value",
    "weight_kg": "Weight",
    "fedex_over_dimension": "FedEx Over Dimension",
    "dhl_over_dimension": "DHL Over Dimension",
    "ups_over_dimension": "UPS Over Dimension",
    "fedex_over_weight": "FedEx Over Weight",
    "dhl_over_weight": "DHL Over Weight",
    "ups_over_weight": "UPS Over Weight",
}

# Status Messages
STATUS_LOADING = "Loading freight data from Google Sheets..."
STATUS_DATA_TEMPLATE = (
    "**Data Status:** Zone Chart ({zone_entries} entries), "
    "Rate Charts ({rate_carriers} carriers), "
    "FSC Data ({fsc_entries} entries), "
    "Interior Delivery ({interior_entries} countries)"
)
STATUS_SOURCES_TEMPLATE = "Sources: {sources}"

# Format Strings (for rendered quotes)
FORMAT_ZONE_LABEL = "Zone"
FORMAT_BASE_RATE_LABEL = "Base Rate (per kg)"
FORMAT_AIR_FREIGHT_LABEL = "Air Freight"
FORMAT_DEMAND_SURCHARGE_LABEL = "Demand Surcharge"
FORMAT_OVER_DIMENSION_LABEL = "Over Dimension"
FORMAT_OVER_WEIGHT_LABEL = "Over Weight"
FORMAT_INTERIOR_DELIVERY_LABEL = "Interior Delivery"
FORMAT_FSC_LABEL = "FSC ({percent:.2f}%)"
FORMAT_FSC_RATE_LABEL = "FSC %"
FORMAT_FSC_AMOUNT_LABEL = "FSC"
FORMAT_CUSTOMS_LABEL = "Customs Clearance"
FORMAT_TOTAL_FREIGHT_LABEL = "Total Freight"
FORMAT_GST_LABEL = "GST ({percent:g}%)"
FORMAT_CUSHION_LABEL = "Cushion ({percent:g}%)"
FORMAT_FINAL_TOTAL_LABEL = "Final Total"
FORMAT_CHEAPEST_LABEL = "Cheapest option: **{carrier}** at {amount}"
FORMAT_DEFAULTS_NOTE = "_Reference data missing for: {lookups} (default values used)_"
