"""Deterministic, content-addressed order ids for checkouts.

The hash input is a canonical JSON rendering of the requested product ids,
lower-cased, followed by ``|`` and the decimal total. Every encoder option is
pinned here so the id does not drift with library defaults.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import CheckoutRequest

logger = logging.getLogger(__name__)

ORDER_ID_LENGTH = 16
TOTAL_SEPARATOR = "|"


def canonical_encoding(product_ids: Sequence[str]) -> str:
    """Render the checkout payload as compact, key-sorted JSON with unescaped text.

    Id order is kept verbatim. Falls back to ``repr`` if the ids cannot be
    encoded; that path is lossy and logged as degraded.
    """
    payload = {"productIds": list(product_ids)}
    try:
        return json.dumps(
            payload,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        logger.warning("Order id canonicalization degraded, using repr(): %s", exc)
        return repr(payload)


def derive_order_id(product_ids: Sequence[str], total: int) -> str:
    """Return the first 16 hex chars of sha256(lower(canonical) + '|' + total)."""
    normalized = canonical_encoding(product_ids).lower() + TOTAL_SEPARATOR + str(total)
    digest = hashlib.sha256(normalized.encode("utf-8", "surrogatepass")).hexdigest()
    return digest[:ORDER_ID_LENGTH]


class OrderIdDeriver:
    """Derives the order id for a checkout request and its computed total."""

    def derive(self, request: CheckoutRequest, total: int) -> str:
        return derive_order_id(request.product_ids, total)
