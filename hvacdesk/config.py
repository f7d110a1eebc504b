"""HVACDesk configuration management.

Loads configuration from environment variables with sensible defaults:
Dominican peso, Spanish-style number formatting and a six-month
maintenance cycle.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

WARRANTY_TEXT = (
    "One-year warranty. The warranty only covers damage arising from the nature "
    "of the equipment, not damage caused by short circuits."
)

MAINTENANCE_RECOMMENDATION_TEXT = (
    "Recommendation: Perform the first preventive maintenance in {months} months "
    "to ensure optimal operation and keep the warranty valid."
)

# Wording used by the Spanish edition, stored inline in older invoice notes
LEGACY_WARRANTY_TEXT = (
    "Garantía de un año. La garantía solo cubre daños por naturaleza del equipo, "
    "no provocados por cortocircuitos."
)

LEGACY_MAINTENANCE_RECOMMENDATION_TEXT = (
    "Recomendación: Realizar el primer mantenimiento preventivo en {months} meses "
    "para asegurar el óptimo funcionamiento y la validez de la garantía."
)


@dataclass
class StorageConfig:
    """Where collections are persisted."""

    data_dir: Path = field(default_factory=lambda: Path.home() / ".hvacdesk")
    backend: str = "json"  # json or memory


@dataclass
class InvoicingConfig:
    """Invoice numbering, maintenance scheduling and auto-note settings."""

    number_prefix: str = "INV"
    number_width: int = 4
    maintenance_interval_months: int = 6
    commercial_recommendation_months: int = 3
    residential_recommendation_months: int = 6
    default_due_days: int = 30
    maintenance_keywords: tuple[str, ...] = ("maintenance", "mantenimiento")
    warranty_text: str = WARRANTY_TEXT
    maintenance_recommendation_text: str = MAINTENANCE_RECOMMENDATION_TEXT
    legacy_warranty_texts: tuple[str, ...] = (LEGACY_WARRANTY_TEXT,)
    legacy_maintenance_recommendation_texts: tuple[str, ...] = (
        LEGACY_MAINTENANCE_RECOMMENDATION_TEXT,
    )


@dataclass
class DashboardConfig:
    """Dashboard aggregation settings."""

    maintenance_window_days: int = 15


@dataclass
class LocaleConfig:
    """Currency and date presentation."""

    currency: str = "DOP"
    currency_symbol: str = "RD$"
    decimal_separator: str = "."
    thousands_separator: str = ","
    date_format: str = "%d/%m/%Y"


@dataclass
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    log_format: str = "text"  # json or text

    storage: StorageConfig = field(default_factory=StorageConfig)
    invoicing: InvoicingConfig = field(default_factory=InvoicingConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    locale: LocaleConfig = field(default_factory=LocaleConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - HVACDESK_DATA_DIR: directory holding the JSON collections
        - HVACDESK_STORAGE_BACKEND: "json" or "memory" (default: "json")
        - LOG_LEVEL / LOG_FORMAT
        - INVOICE_PREFIX, INVOICE_NUMBER_WIDTH, INVOICE_DUE_DAYS
        - MAINTENANCE_INTERVAL_MONTHS, COMMERCIAL_RECOMMENDATION_MONTHS,
          RESIDENTIAL_RECOMMENDATION_MONTHS
        - MAINTENANCE_WINDOW_DAYS
        - CURRENCY, CURRENCY_SYMBOL, DATE_FORMAT

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        backend = os.getenv("HVACDESK_STORAGE_BACKEND", "json").lower()
        if backend not in ("json", "memory"):
            raise ValueError(
                f"HVACDESK_STORAGE_BACKEND must be 'json' or 'memory', got '{backend}'"
            )

        data_dir = os.getenv("HVACDESK_DATA_DIR")

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "text"),
            storage=StorageConfig(
                data_dir=Path(data_dir).expanduser()
                if data_dir
                else Path.home() / ".hvacdesk",
                backend=backend,
            ),
            invoicing=InvoicingConfig(
                number_prefix=os.getenv("INVOICE_PREFIX", "INV"),
                number_width=_int_env("INVOICE_NUMBER_WIDTH", 4),
                maintenance_interval_months=_int_env("MAINTENANCE_INTERVAL_MONTHS", 6),
                commercial_recommendation_months=_int_env(
                    "COMMERCIAL_RECOMMENDATION_MONTHS", 3
                ),
                residential_recommendation_months=_int_env(
                    "RESIDENTIAL_RECOMMENDATION_MONTHS", 6
                ),
                default_due_days=_int_env("INVOICE_DUE_DAYS", 30),
            ),
            dashboard=DashboardConfig(
                maintenance_window_days=_int_env("MAINTENANCE_WINDOW_DAYS", 15),
            ),
            locale=LocaleConfig(
                currency=os.getenv("CURRENCY", "DOP"),
                currency_symbol=os.getenv("CURRENCY_SYMBOL", "RD$"),
                date_format=os.getenv("DATE_FORMAT", "%d/%m/%Y"),
            ),
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from e


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads env."""
    global _config
    _config = None
