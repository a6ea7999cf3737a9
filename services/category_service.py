import logging
from typing import Any, Dict, List, Optional

from infrastructure.api.api_client import ApiClient
from use_cases.domain_models import Category, CategoryFormData, Page

log = logging.getLogger(__name__)

CATEGORIES_PATH = "/categories/"


def _category_path(category_id: int) -> str:
    return f"{CATEGORIES_PATH}{category_id}/"


def list_categories(
    client: ApiClient,
    page: Optional[int] = None,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> Page[Category]:
    params = {}
    if page is not None:
        params["page"] = page
    if search:
        params["search"] = search
    if is_active is not None:
        params["is_active"] = "true" if is_active else "false"
    data = client.get(CATEGORIES_PATH, params=params or None)
    return Page.from_dict(data, Category.from_dict)


def fetch_all_categories(client: ApiClient, **filters) -> List[Category]:
    categories: List[Category] = []
    page_number = 1
    while True:
        page = list_categories(client, page=page_number, **filters)
        categories.extend(page.results)
        if not page.next:
            return categories
        page_number += 1


def get_category(client: ApiClient, category_id: int) -> Category:
    return Category.from_dict(client.get(_category_path(category_id)))


def create_category(client: ApiClient, form: CategoryFormData) -> Category:
    created = Category.from_dict(client.post(CATEGORIES_PATH, json=form.to_payload()))
    log.info("Category %s created (%s)", created.id, created.name)
    return created


def update_category(client: ApiClient, category_id: int, changes: Dict[str, Any]) -> Category:
    return Category.from_dict(client.patch(_category_path(category_id), json=changes))


def delete_category(client: ApiClient, category_id: int) -> None:
    client.delete(_category_path(category_id))
    log.info("Category %s deleted", category_id)
