import logging
from typing import Any, Dict, List, Optional

from infrastructure.api.api_client import ApiClient
from use_cases.domain_models import ImageUpload, Page, Product, ProductFormData

log = logging.getLogger(__name__)

PRODUCTS_PATH = "/products/"
LOW_STOCK_PATH = "/products/low-stock/"


def _product_path(product_id: int) -> str:
    return f"{PRODUCTS_PATH}{product_id}/"


def _multipart_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_multipart(fields: Dict[str, Any], image: Optional[ImageUpload] = None) -> Dict[str, tuple]:
    """
    Encode form fields as multipart parts the way the API's parser expects
    them: every value stringified, booleans lowercase, None values dropped.

    Plain fields are (None, value) tuples so requests sends multipart/form-data
    even when no image is attached.
    """
    parts = {
        key: (None, _multipart_value(value))
        for key, value in fields.items()
        if value is not None
    }
    if image is not None:
        parts["image"] = (image.filename, image.content, image.content_type)
    return parts


def list_products(
    client: ApiClient,
    page: Optional[int] = None,
    search: Optional[str] = None,
    category: Optional[int] = None,
    is_active: Optional[bool] = None,
) -> Page[Product]:
    params = {}
    if page is not None:
        params["page"] = page
    if search:
        params["search"] = search
    if category is not None:
        params["category"] = category
    if is_active is not None:
        params["is_active"] = "true" if is_active else "false"
    data = client.get(PRODUCTS_PATH, params=params or None)
    return Page.from_dict(data, Product.from_dict)


def fetch_all_products(client: ApiClient, **filters) -> List[Product]:
    """Walk every page of the product list."""
    products: List[Product] = []
    page_number = 1
    while True:
        page = list_products(client, page=page_number, **filters)
        products.extend(page.results)
        if not page.next:
            return products
        page_number += 1


def get_product(client: ApiClient, product_id: int) -> Product:
    return Product.from_dict(client.get(_product_path(product_id)))


def create_product(client: ApiClient, form: ProductFormData) -> Product:
    parts = build_multipart(form.fields(), form.image)
    created = Product.from_dict(client.post(PRODUCTS_PATH, files=parts))
    log.info("Product %s created (sku=%s)", created.id, created.sku)
    return created


def update_product(
    client: ApiClient, product_id: int, changes: Dict[str, Any], image: Optional[ImageUpload] = None
) -> Product:
    """Partial update: only the given fields are sent."""
    parts = build_multipart(changes, image)
    return Product.from_dict(client.patch(_product_path(product_id), files=parts))


def delete_product(client: ApiClient, product_id: int) -> None:
    client.delete(_product_path(product_id))
    log.info("Product %s deleted", product_id)


def list_low_stock_products(client: ApiClient) -> List[Product]:
    data = client.get(LOW_STOCK_PATH)
    return Page.from_dict(data, Product.from_dict).results
