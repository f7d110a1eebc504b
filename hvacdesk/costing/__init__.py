"""Service costing engine."""

from hvacdesk.costing.engine import (
    ServiceCost,
    compute_materials_cost,
    compute_service_price,
    normalize_bom,
    price_service,
    set_bom_quantity,
)

__all__ = [
    "ServiceCost",
    "compute_materials_cost",
    "compute_service_price",
    "normalize_bom",
    "price_service",
    "set_bom_quantity",
]
