"""HTTP catalogue adapter.

Reads products from the catalogue service's REST API
(``GET {base_url}/products/{id}``). Both the camelCase payloads of the
storefront backend and snake_case payloads are understood.
"""

import httpx
import structlog

from shopping.catalogue.port import ProductLookup, ProductLookupError, ProductSnapshot

logger = structlog.get_logger(__name__)

TRUE_STRINGS = {"true", "1", "yes", "y"}
FALSE_STRINGS = {"false", "0", "no", "n"}


def _as_bool(value) -> bool:
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_STRINGS:
            return True
        if normalized in FALSE_STRINGS:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


class HttpCatalogue(ProductLookup):
    def __init__(
        self,
        base_url: str,
        timeout: float = 2.0,
        default_max_order_quantity: int = 10,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.default_max_order_quantity = default_max_order_quantity
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        try:
            response = self._client.get(f"/products/{product_id}")
        except httpx.TimeoutException as exc:
            logger.warning("Catalogue lookup timed out", product_id=str(product_id))
            raise ProductLookupError(f"timed out fetching product {product_id}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Catalogue lookup failed", product_id=str(product_id), error=str(exc))
            raise ProductLookupError(f"could not fetch product {product_id}: {exc}") from exc

        if response.status_code == 404:
            return None
        if response.is_error:
            raise ProductLookupError(f"catalogue answered {response.status_code} for product {product_id}")

        try:
            return self._to_snapshot(product_id, response.json())
        except (ValueError, KeyError, TypeError) as exc:
            raise ProductLookupError(f"malformed catalogue payload for product {product_id}") from exc

    def close(self) -> None:
        self._client.close()

    def _to_snapshot(self, product_id: str, data: dict) -> ProductSnapshot:
        def pick(*keys, default=None):
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return default

        return ProductSnapshot(
            product_id=str(pick("id", "product_id", "productId", default=product_id)),
            name=pick("name", default=""),
            price=float(data["price"]),
            stock=int(pick("stock", default=0)),
            max_order_quantity=int(
                pick("maxOrderQuantity", "max_order_quantity", default=self.default_max_order_quantity)
            ),
            active=_as_bool(pick("active", "available", default=True)),
            image_url=pick("imageUrl", "image_url"),
            description=pick("description"),
            category=pick("category"),
        )
