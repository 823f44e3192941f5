"""Process-wide configuration.

The physical limb order is fixed once, when this module is imported, from the
``CRYPTONUM_LIMB_ORDER`` environment variable. Generated types may still pick
an explicit order; see ``cryptonum.biguint.big_uint``.
"""

from __future__ import annotations

from enum import Enum
import logging
import os
from typing import Mapping

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_LIMB_ORDER: str = "CRYPTONUM_LIMB_ORDER"


class LimbOrder(Enum):
    """Physical placement of limbs in the backing array.

    LITTLE: index 0 holds the least significant limb.
    BIG: index 0 holds the most significant limb.
    """

    LITTLE = "little"
    BIG = "big"


def parse_limb_order(text: str) -> LimbOrder:
    """Parse 'little' or 'big' (case-insensitive)."""
    value = text.strip().lower()
    for order in LimbOrder:
        if order.value == value:
            return order
    raise ConfigError(f"unknown limb order '{text}' (expected 'little' or 'big')")


def limb_order_from_env(environ: Mapping[str, str] | None = None) -> LimbOrder:
    env = environ if environ is not None else os.environ
    raw = env.get(ENV_LIMB_ORDER, "")
    if raw == "":
        return LimbOrder.LITTLE
    order = parse_limb_order(raw)
    logger.debug("limb order %s taken from %s", order.value, ENV_LIMB_ORDER)
    return order


DEFAULT_LIMB_ORDER: LimbOrder = limb_order_from_env()
