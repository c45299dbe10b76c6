"""Source business events consumed by the posting adapters.

These records are owned by the surrounding application (sales, expenses,
purchasing). The ledger only reads them; ``from_dict`` accepts the camelCase
keys those collaborators emit as well as snake_case.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from ledgerly.utils.amount_parser import ZERO, to_decimal
from ledgerly.utils.date_parser import coerce_date


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class Product:
    """Catalog product; only the unit cost matters to the ledger."""

    id: Any
    name: str = ""
    cost: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Product":
        return cls(
            id=data.get("id"),
            name=str(data.get("name") or ""),
            cost=to_decimal(data.get("cost")),
        )


@dataclass(frozen=True)
class Customer:
    """Customer; only the display name matters to the ledger."""

    id: Any
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Customer":
        return cls(id=data.get("id"), name=str(data.get("name") or ""))


@dataclass(frozen=True)
class SaleItem:
    """Sale line item."""

    product_id: Any
    quantity: Decimal = ZERO
    unit_price: Decimal = ZERO
    conversion: Decimal = Decimal("1")
    base_quantity: Optional[Decimal] = None

    @property
    def base_units(self) -> Decimal:
        """Total quantity in the product's base unit."""
        if self.base_quantity is not None and self.base_quantity > 0:
            return self.base_quantity
        return self.quantity * self.conversion

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SaleItem":
        base_quantity = _pick(data, "baseQuantity", "base_quantity")
        conversion = to_decimal(data.get("conversion"))
        return cls(
            product_id=_pick(data, "productId", "product_id"),
            quantity=to_decimal(data.get("quantity")),
            unit_price=to_decimal(_pick(data, "unitPrice", "unit_price")),
            conversion=conversion if conversion != 0 else Decimal("1"),
            base_quantity=None if base_quantity is None else to_decimal(base_quantity),
        )


@dataclass(frozen=True)
class Sale:
    """Completed sale (cash or credit)."""

    id: Any
    date: Optional[date]
    items: tuple[SaleItem, ...] = ()
    subtotal: Decimal = ZERO
    discount: Decimal = ZERO
    tax_amount: Decimal = ZERO
    total: Optional[Decimal] = None
    sale_type: str = "Cash"
    customer_id: Any = None

    @property
    def is_credit(self) -> bool:
        return (self.sale_type or "").strip().lower() == "credit"

    @property
    def amount_due(self) -> Decimal:
        """Explicit total, or subtotal less discount plus tax."""
        if self.total:
            return self.total
        return self.subtotal - self.discount + self.tax_amount

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sale":
        total = data.get("total")
        return cls(
            id=data.get("id"),
            date=coerce_date(data.get("date")),
            items=tuple(SaleItem.from_dict(item) for item in data.get("items") or ()),
            subtotal=to_decimal(data.get("subtotal")),
            discount=to_decimal(data.get("discount")),
            tax_amount=to_decimal(_pick(data, "taxAmount", "tax_amount")),
            total=None if total is None else to_decimal(total),
            sale_type=str(_pick(data, "saleType", "sale_type", default="")),
            customer_id=_pick(data, "customerId", "customer_id"),
        )


@dataclass(frozen=True)
class Expense:
    """Operating expense paid from cash."""

    id: Any
    date: Optional[date]
    amount: Decimal
    description: str = ""
    category: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Expense":
        return cls(
            id=data.get("id"),
            date=coerce_date(data.get("date")),
            amount=to_decimal(data.get("amount")),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or "").strip(),
        )


@dataclass(frozen=True)
class PurchaseOrderItem:
    """Purchase order line item."""

    quantity: Decimal = ZERO
    cost: Decimal = ZERO
    product_id: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PurchaseOrderItem":
        return cls(
            quantity=to_decimal(data.get("quantity")),
            cost=to_decimal(data.get("cost")),
            product_id=_pick(data, "productId", "product_id"),
        )


@dataclass(frozen=True)
class PurchaseOrder:
    """Purchase order received from a supplier on account."""

    id: Any
    items: tuple[PurchaseOrderItem, ...] = ()
    supplier_name: Optional[str] = None
    received_at: Optional[date] = None
    expected_date: Optional[date] = None
    order_date: Optional[date] = None

    @property
    def total_cost(self) -> Decimal:
        return sum((item.quantity * item.cost for item in self.items), ZERO)

    @property
    def posting_date(self) -> Optional[date]:
        """Receipt date, falling back to the expected then the order date."""
        return self.received_at or self.expected_date or self.order_date

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PurchaseOrder":
        return cls(
            id=data.get("id"),
            items=tuple(
                PurchaseOrderItem.from_dict(item) for item in data.get("items") or ()
            ),
            supplier_name=_pick(data, "supplierName", "supplier_name"),
            received_at=coerce_date(_pick(data, "receivedAt", "received_at")),
            expected_date=coerce_date(_pick(data, "expectedDate", "expected_date")),
            order_date=coerce_date(_pick(data, "orderDate", "order_date")),
        )
