from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


def _to_float(value: Any) -> float:
    # Decimal fields arrive as JSON strings ("12.50")
    if value in (None, ""):
        return 0.0
    return float(value)


def _to_int(value: Any) -> int:
    if value in (None, ""):
        return 0
    return int(float(value))


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    description: str = ""
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            description=data.get("description") or "",
            is_active=bool(data.get("is_active", True)),
            created_at=data.get("created_at") or "",
            updated_at=data.get("updated_at") or "",
        )


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    sku: str
    category: Optional[Category]
    price: float
    stock: int
    min_stock: int
    description: str = ""
    is_active: bool = True
    image: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        category = data.get("category")
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            sku=data.get("sku") or "",
            category=Category.from_dict(category) if isinstance(category, dict) else None,
            price=_to_float(data.get("price")),
            stock=_to_int(data.get("stock")),
            min_stock=_to_int(data.get("min_stock")),
            description=data.get("description") or "",
            is_active=bool(data.get("is_active", True)),
            image=data.get("image"),
            created_at=data.get("created_at") or "",
            updated_at=data.get("updated_at") or "",
        )

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock

    @property
    def total_value(self) -> float:
        return self.price * self.stock

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else ""


@dataclass(frozen=True)
class Page(Generic[T]):
    """Paginated list envelope returned by list endpoints."""

    count: int
    results: List[T]
    next: Optional[str] = None
    previous: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, item_factory: Callable[[Dict[str, Any]], T]) -> "Page[T]":
        if isinstance(data, list):
            # Unpaginated endpoint
            items = [item_factory(item) for item in data]
            return cls(count=len(items), results=items)
        items = [item_factory(item) for item in data.get("results", [])]
        return cls(
            count=int(data.get("count", len(items))),
            results=items,
            next=data.get("next"),
            previous=data.get("previous"),
        )


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class ProductFormData:
    name: str
    sku: str
    category_id: Optional[int]
    price: float
    stock: int
    min_stock: int
    description: str = ""
    is_active: bool = True
    image: Optional[ImageUpload] = None

    def fields(self) -> Dict[str, Any]:
        values = asdict(self)
        values.pop("image")
        return values


@dataclass(frozen=True)
class CategoryFormData:
    name: str
    description: str = ""
    is_active: bool = True

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DashboardStats:
    total_products: int = 0
    total_categories: int = 0
    low_stock_products: int = 0
    total_value: float = 0.0


@dataclass(frozen=True)
class CategoryShare:
    name: str
    products: int


@dataclass(frozen=True)
class DashboardData:
    stats: DashboardStats = field(default_factory=DashboardStats)
    recent_products: List[Product] = field(default_factory=list)
    category_shares: List[CategoryShare] = field(default_factory=list)
