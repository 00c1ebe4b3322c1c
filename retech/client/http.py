# retech/client/http.py
from typing import Any, Dict, List

import requests

from retech.utils.retry import http_retry
from retech.utils.settings import API_BASE_URL, HTTP_TIMEOUT
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class StorefrontError(Exception):
    """Non-2xx answer from the storefront API."""

    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class StorefrontClient:
    """
    Thin HTTP client over the storefront API.
    Reads are retried on connection errors, writes never are.
    """

    def __init__(self, base_url: str | None = None, session=None, timeout: int = HTTP_TIMEOUT):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, params: Dict[str, Any] | None = None, json: Any = None):
        url = f"{self.base_url}{path}"
        logger.info(f"StorefrontClient {method} {url}")

        resp = self.session.request(method, url, params=params, json=json, timeout=self.timeout)
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail")
            except ValueError:
                detail = resp.text
            raise StorefrontError(resp.status_code, detail)

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    @http_retry()
    def _get(self, path: str, params: Dict[str, Any] | None = None):
        return self._request("GET", path, params=params)

    # catalog
    def list_products(self, filters: Dict[str, Any] | None = None) -> List[dict]:
        return self._get("/products/", params=filters or {})

    def get_product(self, product_id: int) -> dict:
        return self._get(f"/products/{product_id}")

    def get_product_by_slug(self, slug: str) -> dict | None:
        try:
            return self._get(f"/products/by-slug/{slug}")
        except StorefrontError as e:
            if e.status_code == 404:
                return None
            raise

    def similar_products(self, product_id: int) -> List[dict]:
        return self._get(f"/products/{product_id}/similar")

    def featured_products(self) -> List[dict]:
        return self._get("/products/featured")

    def filter_options(self) -> dict:
        return self._get("/products/filter-options")

    # users
    def get_user(self, user_id: int) -> dict:
        return self._get(f"/users/{user_id}")

    def save_user(self, user_id: int, name: str | None = None, phone: str | None = None) -> dict:
        return self._request("POST", "/users/", json={"id": user_id, "name": name, "phone": phone})

    # carts
    def get_cart(self, user_id: int) -> dict | None:
        # no cart row yet is not an error
        try:
            return self._get("/carts/me", params={"user_id": user_id})
        except StorefrontError as e:
            if e.status_code == 404:
                return None
            raise

    def create_cart(self, user_id: int) -> dict:
        return self._request("POST", "/carts/", json={"user_id": user_id})

    def upsert_cart_item(self, user_id: int, cart_id: int, product_id: int, quantity: int, price_at_add) -> dict:
        return self._request(
            "PUT",
            f"/carts/{cart_id}/items/{product_id}",
            params={"user_id": user_id},
            json={"quantity": quantity, "price_at_add": str(price_at_add)},
        )

    def update_cart_item(self, user_id: int, cart_id: int, product_id: int, quantity: int) -> dict:
        return self._request(
            "PATCH",
            f"/carts/{cart_id}/items/{product_id}",
            params={"user_id": user_id},
            json={"quantity": quantity},
        )

    def delete_cart_item(self, user_id: int, cart_id: int, product_id: int) -> dict:
        return self._request("DELETE", f"/carts/{cart_id}/items/{product_id}", params={"user_id": user_id})

    def clear_cart(self, user_id: int, cart_id: int) -> dict:
        return self._request("DELETE", f"/carts/{cart_id}/items", params={"user_id": user_id})

    # orders
    def create_order(self, user_id: int, payload: Dict[str, Any]) -> dict:
        return self._request("POST", "/orders/", params={"user_id": user_id}, json=payload)

    def list_orders(self, user_id: int) -> List[dict]:
        return self._get("/orders/", params={"user_id": user_id})

    def get_order(self, user_id: int, order_id: int) -> dict:
        return self._get(f"/orders/{order_id}", params={"user_id": user_id})

    # back-office
    def admin_orders(self, user_id: int) -> List[dict]:
        return self._get("/admin/orders", params={"user_id": user_id})

    def update_order_status(self, user_id: int, order_id: int, status: str) -> dict:
        return self._request(
            "PATCH",
            f"/admin/orders/{order_id}/status",
            params={"user_id": user_id},
            json={"status": status},
        )

    def admin_products(self, user_id: int) -> List[dict]:
        return self._get("/admin/products", params={"user_id": user_id})

    def create_product(self, user_id: int, payload: Dict[str, Any]) -> dict:
        return self._request("POST", "/admin/products", params={"user_id": user_id}, json=payload)

    def update_product(self, user_id: int, product_id: int, changes: Dict[str, Any]) -> dict:
        return self._request("PATCH", f"/admin/products/{product_id}", params={"user_id": user_id}, json=changes)

    def delete_product(self, user_id: int, product_id: int) -> None:
        self._request("DELETE", f"/admin/products/{product_id}", params={"user_id": user_id})

    def admin_stats(self, user_id: int) -> dict:
        return self._get("/admin/stats", params={"user_id": user_id})
