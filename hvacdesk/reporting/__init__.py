"""Reporting module for HVACDesk.

Dashboard aggregation, the printable invoice document and CSV exports.
"""

from hvacdesk.reporting.dashboard_metrics import DashboardMetrics, compute_dashboard_metrics
from hvacdesk.reporting.invoice_document import InvoiceDocument, build_invoice_document

__all__ = [
    "DashboardMetrics",
    "InvoiceDocument",
    "build_invoice_document",
    "compute_dashboard_metrics",
]
