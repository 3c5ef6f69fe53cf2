"""
Shipping notifiers.

After a successful checkout the engine hands the products that need
shipping to a notifier. Notifiers are best effort: they return nothing and
never raise into the checkout. Any object with a matching ``notify`` method
can be injected.
"""

import sys
import time
from typing import Callable, Optional, Protocol, Sequence, TextIO

import httpx

from storefront import config
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import Product
from storefront.money import to_decimal

logger = get_logger(__name__)

PERMANENT_ERROR_CODES = {400, 401, 403, 404, 422}


class ShippingNotifier(Protocol):
    def notify(self, products: Sequence[Product]) -> None:
        ...


class NullShippingNotifier:
    """Announces nothing."""

    def notify(self, products: Sequence[Product]) -> None:
        return None


class ConsoleShippingNotifier:
    """Prints the shipment list for the shopper."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def notify(self, products: Sequence[Product]) -> None:
        stream = self._stream or sys.stdout
        print("\nShipping these items:", file=stream)
        for product in products:
            print(f"- {product.name} (Weight: {to_decimal(product.weight):.2f} kg)", file=stream)


class LoggingShippingNotifier:
    """Writes one log record per shipped product."""

    def notify(self, products: Sequence[Product]) -> None:
        for product in products:
            logger.info(
                f"Shipping {sanitize_string_for_logging(product.name)} "
                f"(weight {product.weight} kg)"
            )


def _is_permanent_error(status_code: int) -> bool:
    """Check if error is permanent (no retry needed)."""
    return status_code in PERMANENT_ERROR_CODES


def _calculate_backoff_delay(attempt: int) -> float:
    """Calculate exponential backoff delay."""
    return float(0.5 * (2 ** attempt))


def build_shipment_payload(products: Sequence[Product]) -> dict:
    """JSON body announcing a shipment to the carrier."""
    return {
        "items": [
            {"name": product.name, "weight_kg": str(product.weight)}
            for product in products
        ]
    }


class CarrierWebhookNotifier:
    """
    Posts the shipment list to a carrier webhook.

    Retries transient failures (network errors, 5xx, 429) with exponential
    backoff; permanent 4xx responses are not retried. Failures are logged
    and swallowed because shipping announcements never decide a checkout.
    """

    def __init__(
        self,
        url: str,
        timeout: float = config.DEFAULT_WEBHOOK_TIMEOUT,
        retries: int = config.DEFAULT_WEBHOOK_RETRIES,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.url = url
        self.timeout = timeout
        self.retries = retries
        self._client = client
        self._sleep = sleep

    def _post(self, client: httpx.Client, payload: dict) -> tuple[bool, int, str]:
        """Returns (success, status_code, error_text)."""
        response = client.post(self.url, json=payload, timeout=self.timeout)
        if response.is_success:
            return True, response.status_code, ""
        error_text = response.text[:200] if response.text else "No response body"
        return False, response.status_code, error_text

    def _send(self, client: httpx.Client, payload: dict) -> bool:
        for attempt in range(self.retries + 1):
            try:
                success, status_code, error_text = self._post(client, payload)
            except httpx.InvalidURL as e:
                logger.error(f"Carrier webhook URL is invalid: {e}")
                return False
            except httpx.HTTPError as e:
                logger.warning(f"Carrier webhook request failed (attempt {attempt + 1}): {e}")
            else:
                if success:
                    logger.info(f"Carrier webhook accepted shipment of {len(payload['items'])} item(s)")
                    return True
                if _is_permanent_error(status_code):
                    logger.error(f"Carrier webhook rejected shipment: {status_code} {error_text}")
                    return False
                logger.warning(f"Carrier webhook returned {status_code} (attempt {attempt + 1}): {error_text}")

            if attempt < self.retries:
                self._sleep(_calculate_backoff_delay(attempt))

        logger.error(f"Carrier webhook gave up after {self.retries + 1} attempt(s)")
        return False

    def notify(self, products: Sequence[Product]) -> None:
        payload = build_shipment_payload(products)
        if self._client is not None:
            self._send(self._client, payload)
            return
        with httpx.Client() as client:
            self._send(client, payload)


def build_notifier(kind: Optional[str] = None) -> ShippingNotifier:
    """
    Build the notifier selected by ``kind`` or, if omitted, by the
    ``SHIPPING_NOTIFIER`` environment variable.
    """
    kind = kind or config.get_notifier_kind()
    if kind == config.NOTIFIER_NONE:
        return NullShippingNotifier()
    if kind == config.NOTIFIER_LOG:
        return LoggingShippingNotifier()
    if kind == config.NOTIFIER_WEBHOOK:
        webhook = config.get_webhook_config()
        if webhook["url"]:
            return CarrierWebhookNotifier(
                url=webhook["url"],
                timeout=webhook["timeout"],
                retries=webhook["retries"],
            )
        logger.warning("Carrier webhook URL missing, using console notifier")
    return ConsoleShippingNotifier()
