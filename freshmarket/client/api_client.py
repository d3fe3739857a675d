# freshmarket/client/api_client.py
import requests

from freshmarket.utils.retry import http_retry
from freshmarket.utils.settings import API_BASE_URL
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Non-2xx answer from the API."""

    def __init__(self, status_code: int, message: str, errors: list | None = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class ShopClient:
    """
    HTTP client for the FreshMarket API.

    ``user_id`` is sent as ``X-User-Id``; without it only the public
    endpoints (catalog, quote, contact, init-data) are usable.
    """

    def __init__(
        self,
        base_url: str | None = None,
        user_id: str | None = None,
        timeout: int = 5,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.user_id = user_id
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def authenticated(self) -> bool:
        return bool(self.user_id)

    @http_retry()
    def _request(self, method: str, path: str, json=None, params=None):
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        if self.user_id:
            headers["X-User-Id"] = self.user_id

        logger.info(f"ShopClient {method} {url}")
        resp = self.session.request(
            method,
            url,
            json=json,
            params=params,
            headers=headers,
            timeout=self.timeout,
        )

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            errors = body.get("errors") if isinstance(body, dict) else None
            raise ApiError(resp.status_code, message or f"HTTP {resp.status_code}", errors)
        return body

    # users
    def upsert_user(self, user_id: str, **fields) -> dict:
        return self._request("POST", "/api/users", json={"id": user_id, **fields})

    def current_user(self) -> dict:
        return self._request("GET", "/api/auth/user")

    # catalog
    def init_data(self) -> dict:
        return self._request("POST", "/api/init-data")

    def categories(self) -> list[dict]:
        return self._request("GET", "/api/categories")

    def create_category(self, name: str, slug: str) -> dict:
        return self._request("POST", "/api/categories", json={"name": name, "slug": slug})

    def products(self, category: int | str | None = None, search: str | None = None) -> list[dict]:
        params = {}
        if category is not None:
            params["category"] = category
        if search:
            params["search"] = search
        return self._request("GET", "/api/products", params=params or None)

    def product(self, product_id: int) -> dict:
        return self._request("GET", f"/api/products/{product_id}")

    # cart
    def cart(self) -> list[dict]:
        return self._request("GET", "/api/cart")

    def add_to_cart(self, product_id: int, quantity: int = 1) -> dict:
        return self._request("POST", "/api/cart", json={"product_id": product_id, "quantity": quantity})

    def update_cart_item(self, item_id: int, quantity: int) -> dict:
        return self._request("PUT", f"/api/cart/{item_id}", json={"quantity": quantity})

    def remove_cart_item(self, item_id: int) -> dict:
        return self._request("DELETE", f"/api/cart/{item_id}")

    def clear_cart(self) -> dict:
        return self._request("DELETE", "/api/cart")

    def cart_totals(self) -> dict:
        return self._request("GET", "/api/cart/totals")

    def quote(self, items: list[tuple[int, int]], discount_code: str | None = None) -> dict:
        payload = {
            "items": [{"product_id": product_id, "quantity": quantity} for product_id, quantity in items],
            "discount_code": discount_code,
        }
        return self._request("POST", "/api/cart/quote", json=payload)

    # orders
    def orders(self) -> list[dict]:
        return self._request("GET", "/api/orders")

    def order(self, order_id: int) -> dict:
        return self._request("GET", f"/api/orders/{order_id}")

    def create_order(self, payment_method: str, delivery_address: str | None = None) -> dict:
        return self._request(
            "POST",
            "/api/orders",
            json={"payment_method": payment_method, "delivery_address": delivery_address},
        )

    # contact
    def send_contact_message(
        self,
        first_name: str,
        last_name: str,
        email: str,
        subject: str,
        message: str,
    ) -> dict:
        return self._request(
            "POST",
            "/api/contact",
            json={
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "subject": subject,
                "message": message,
            },
        )
