"""HVACDesk Pydantic models for type-safe data validation.

Stored JSON uses camelCase keys (``clientId``, ``unitPrice``...) so that data
exported from the browser edition loads unchanged; Python code uses the
snake_case attribute names. Values written by the earlier Spanish UI are
mapped onto the English enum members on load.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from hvacdesk.core.ids import generate_id


class ClientType(str, Enum):
    """Client category; drives the maintenance recommendation interval."""

    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"


class ExpenseCategory(str, Enum):
    MATERIALS = "Materials"
    FUEL = "Fuel"
    TOOLS = "Tools"
    MARKETING = "Marketing"
    OTHER = "Other"


class AutoNoteKind(str, Enum):
    """System-generated invoice notes."""

    WARRANTY = "warranty"
    MAINTENANCE_RECOMMENDATION = "maintenance_recommendation"


_LEGACY_VALUES: dict[str, str] = {
    "Residencial": "Residential",
    "Comercial": "Commercial",
    "Borrador": "Draft",
    "Enviada": "Sent",
    "Pagada": "Paid",
    "Vencida": "Overdue",
    "Materiales": "Materials",
    "Combustible": "Fuel",
    "Herramientas": "Tools",
    "Otro": "Other",
}


def _translate_legacy(value: Any) -> Any:
    if isinstance(value, str):
        return _LEGACY_VALUES.get(value, value)
    return value


class HVACModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Client(HVACModel):
    """Customer of the service company."""

    id: str = Field(default_factory=generate_id)
    name: str
    address: str = ""
    phone: str = ""
    email: str = ""
    client_type: ClientType = Field(ClientType.RESIDENTIAL, alias="type")
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("client_type", mode="before")
    @classmethod
    def translate_client_type(cls, v: Any) -> Any:
        return _translate_legacy(v)

    @property
    def is_commercial(self) -> bool:
        return self.client_type == ClientType.COMMERCIAL

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "k3j9x0a1b",
                "name": "Hotel Caribe",
                "address": "Av. Independencia 12",
                "phone": "809-555-0101",
                "email": "compras@hotelcaribe.do",
                "type": "Commercial",
            }
        }
    )


class InvoiceItem(HVACModel):
    """Single invoice line. Flags are per line; an invoice ORs them."""

    id: str = Field(default_factory=generate_id)
    description: str = ""
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")
    is_maintenance: bool = False
    is_new_equipment: bool = False

    @property
    def amount(self) -> Decimal:
        return self.quantity * self.unit_price


class AutoNote(HVACModel):
    kind: AutoNoteKind
    text: str


class Invoice(HVACModel):
    """Customer invoice.

    ``auto_notes`` and ``next_maintenance_date`` are owned by the derivation
    engine and rebuilt on every save; everything else is user-owned.
    """

    id: str = ""
    client_id: str = ""
    invoice_number: str = ""
    issue_date: date
    due_date: date
    items: list[InvoiceItem] = Field(default_factory=list)
    notes: str = ""
    auto_notes: list[AutoNote] = Field(default_factory=list)
    status: InvoiceStatus = InvoiceStatus.DRAFT
    last_maintenance_date: date | None = None
    next_maintenance_date: date | None = None

    @field_validator("status", mode="before")
    @classmethod
    def translate_status(cls, v: Any) -> Any:
        return _translate_legacy(v)

    @field_validator("notes", mode="before")
    @classmethod
    def none_notes_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def subtotal(self) -> Decimal:
        return sum((item.amount for item in self.items), Decimal("0"))

    @property
    def total(self) -> Decimal:
        # No discounts or taxes are applied at this layer
        return self.subtotal

    @property
    def has_maintenance(self) -> bool:
        return any(item.is_maintenance for item in self.items)

    @property
    def has_new_equipment(self) -> bool:
        return any(item.is_new_equipment for item in self.items)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "a8d7f2k1m",
                "clientId": "k3j9x0a1b",
                "invoiceNumber": "INV-0001",
                "issueDate": "2025-03-10",
                "dueDate": "2025-04-09",
                "items": [
                    {
                        "description": "Preventive maintenance 24k BTU",
                        "quantity": 2,
                        "unitPrice": 2500,
                        "isMaintenance": True,
                        "isNewEquipment": False,
                    }
                ],
                "notes": "",
                "status": "Sent",
                "nextMaintenanceDate": "2025-09-10",
            }
        }
    )


class InventoryItem(HVACModel):
    """Stock item; source of truth for material prices."""

    id: str = Field(default_factory=generate_id)
    name: str
    description: str = ""
    quantity: Decimal = Decimal("0")
    unit_price: Decimal = Decimal("0")


class ServiceItem(HVACModel):
    """Bill-of-materials line of a service."""

    inventory_item_id: str
    quantity: Decimal


class Service(HVACModel):
    """Priced bundle of inventory items plus labor (a kit)."""

    id: str = Field(default_factory=generate_id)
    name: str
    description: str = ""
    items: list[ServiceItem] = Field(default_factory=list)
    labor_cost: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")


class Expense(HVACModel):
    id: str = Field(default_factory=generate_id)
    description: str
    amount: Decimal
    expense_date: date = Field(alias="date")
    category: ExpenseCategory = ExpenseCategory.MATERIALS

    @field_validator("category", mode="before")
    @classmethod
    def translate_category(cls, v: Any) -> Any:
        return _translate_legacy(v)


class BusinessInfo(HVACModel):
    name: str = "Your HVAC Business"
    address: str = "Your Address"
    phone: str = "Your Phone"
    email: str = "you@email.com"
    tax_id: str = "Your Tax ID"
    logo: str | None = None  # data URL
    signature: str | None = None  # data URL


InvoiceTemplate = Literal["default", "pos", "modern", "classic", "elegant"]


class InvoiceSettings(HVACModel):
    template: InvoiceTemplate = "default"
    accent_color: str = "#3B82F6"

    @field_validator("accent_color")
    @classmethod
    def validate_accent_color(cls, v: str) -> str:
        text = v.strip()
        if not (text.startswith("#") and len(text) in (4, 7)):
            raise ValueError("accent_color must be a hex color like #3B82F6")
        try:
            int(text[1:], 16)
        except ValueError as e:
            raise ValueError("accent_color must be a hex color like #3B82F6") from e
        return text


class AppSettings(HVACModel):
    """Global business profile and invoice presentation settings."""

    business_info: BusinessInfo = Field(default_factory=BusinessInfo)
    invoice_settings: InvoiceSettings = Field(default_factory=InvoiceSettings)
