"""Client-side form checks. Errors are returned per field, never sent to the API."""

from typing import Dict, Optional

FieldErrors = Dict[str, str]


def validate_login(username: str, password: str) -> FieldErrors:
    errors: FieldErrors = {}
    if not (username or "").strip():
        errors["username"] = "El usuario es requerido"
    if not password:
        errors["password"] = "La contraseña es requerida"
    return errors


def validate_category(name: str) -> FieldErrors:
    errors: FieldErrors = {}
    if not (name or "").strip():
        errors["name"] = "El nombre es requerido"
    return errors


def validate_product(
    name: str,
    sku: str,
    category_id: Optional[int],
    price: Optional[float],
    stock: Optional[int],
    min_stock: Optional[int],
) -> FieldErrors:
    errors: FieldErrors = {}
    if not (name or "").strip():
        errors["name"] = "El nombre es requerido"
    if not (sku or "").strip():
        errors["sku"] = "El SKU es requerido"
    if category_id is None:
        errors["category_id"] = "La categoría es requerida"

    if price is None:
        errors["price"] = "El precio es requerido"
    elif price < 0:
        errors["price"] = "El precio debe ser mayor a 0"

    if stock is None:
        errors["stock"] = "El stock es requerido"
    elif stock < 0:
        errors["stock"] = "El stock no puede ser negativo"

    if min_stock is None:
        errors["min_stock"] = "El stock mínimo es requerido"
    elif min_stock < 0:
        errors["min_stock"] = "El stock mínimo no puede ser negativo"
    return errors
