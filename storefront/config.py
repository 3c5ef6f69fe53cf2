"""Environment configuration for shipping notification and the carrier webhook."""
import os
from typing import Dict, Optional

from storefront.logging import get_logger

logger = get_logger(__name__)

NOTIFIER_CONSOLE = "console"
NOTIFIER_LOG = "log"
NOTIFIER_NONE = "none"
NOTIFIER_WEBHOOK = "webhook"

NOTIFIER_KINDS = (NOTIFIER_CONSOLE, NOTIFIER_LOG, NOTIFIER_NONE, NOTIFIER_WEBHOOK)

DEFAULT_WEBHOOK_TIMEOUT = 5.0
DEFAULT_WEBHOOK_RETRIES = 2


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return max(0, int(raw))
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


def get_notifier_kind() -> str:
    """
    Resolve which shipping notifier to build from ``SHIPPING_NOTIFIER``.

    Unknown names, and ``webhook`` without ``CARRIER_WEBHOOK_URL``,
    fall back to the console notifier.
    """
    kind = os.environ.get("SHIPPING_NOTIFIER", NOTIFIER_CONSOLE).strip().lower()
    if kind not in NOTIFIER_KINDS:
        logger.warning(f"Unknown SHIPPING_NOTIFIER {kind!r}, using {NOTIFIER_CONSOLE}")
        return NOTIFIER_CONSOLE
    if kind == NOTIFIER_WEBHOOK and not os.environ.get("CARRIER_WEBHOOK_URL"):
        logger.warning("SHIPPING_NOTIFIER=webhook but CARRIER_WEBHOOK_URL is not set, using console")
        return NOTIFIER_CONSOLE
    return kind


def get_webhook_config() -> Dict[str, Optional[object]]:
    """Carrier webhook settings: url, timeout (seconds) and retries."""
    return {
        "url": os.environ.get("CARRIER_WEBHOOK_URL"),
        "timeout": _env_float("CARRIER_WEBHOOK_TIMEOUT", DEFAULT_WEBHOOK_TIMEOUT),
        "retries": _env_int("CARRIER_WEBHOOK_RETRIES", DEFAULT_WEBHOOK_RETRIES),
    }
