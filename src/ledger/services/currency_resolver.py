"""
Exchange-rate resolution between arbitrary currencies.

A rate mapping is keyed by pair id ``SRC + DST + "=X"`` (1 SRC = rate DST).
Override rates are keyed by currency code and express 1 unit in USD.
Resolution order: identity, direct pair, then a USD pivot that prefers
overrides over live ``CURUSD=X`` quotes. Malformed data never raises to
the caller; the affected rate falls back to 1.0 and a warning is logged.
"""

import logging
import math
from typing import Mapping, Optional

from ledger.core.exceptions import ConversionError
from ledger.domain.models import USD

logger = logging.getLogger(__name__)

PAIR_SUFFIX = "=X"

RateMap = Mapping[str, float]


def rate_pair_id(source: str, destination: str) -> str:
    """Return the pair id for converting `source` into `destination`."""
    return f"{source.upper()}{destination.upper()}{PAIR_SUFFIX}"


def usd_pair_id(currency: str) -> str:
    """Return the pivot pair id ``CURUSD=X``."""
    return rate_pair_id(currency, USD)


def _coerce_rate(value, label: str) -> float:
    """Validate a single rate value; raise ConversionError when unusable."""
    if isinstance(value, bool):
        raise ConversionError(f"Rate for {label} is not numeric: {value!r}")
    try:
        rate = float(value)
    except (TypeError, ValueError) as e:
        raise ConversionError(f"Rate for {label} is not numeric: {value!r}") from e
    if math.isnan(rate) or math.isinf(rate):
        raise ConversionError(f"Rate for {label} is not finite: {value!r}")
    if rate < 0:
        raise ConversionError(f"Rate for {label} is negative: {value!r}")
    return rate


def _rate_to_usd(currency: str, live_rates: RateMap, override_rates: RateMap) -> float:
    if currency == USD:
        return 1.0
    if currency in override_rates:
        source, raw = "override", override_rates[currency]
    else:
        pair = usd_pair_id(currency)
        if pair not in live_rates:
            return 1.0
        source, raw = pair, live_rates[pair]
    try:
        return _coerce_rate(raw, f"{currency} ({source})")
    except ConversionError as e:
        logger.warning("%s; using 1.0", e.message)
        return 1.0


def resolve_rate(
    source: Optional[str],
    destination: Optional[str],
    live_rates: Optional[RateMap] = None,
    override_rates: Optional[RateMap] = None,
) -> float:
    """
    Return the multiplier converting an amount in `source` into `destination`.

    Args:
        source: Currency code of the amount (None is treated as USD)
        destination: Currency code wanted (None is treated as USD)
        live_rates: Market rates keyed by pair id
        override_rates: User rates keyed by currency code, 1 unit = rate USD

    Returns:
        The conversion rate; 1.0 whenever nothing usable is known
    """
    live_rates = live_rates or {}
    override_rates = override_rates or {}
    src = (source or USD).upper()
    dst = (destination or USD).upper()

    if src == dst:
        return 1.0

    direct_id = rate_pair_id(src, dst)
    if direct_id in live_rates:
        try:
            direct = _coerce_rate(live_rates[direct_id], direct_id)
        except ConversionError as e:
            logger.warning("%s; ignoring direct pair", e.message)
        else:
            if direct > 0:
                return direct

    src_usd = _rate_to_usd(src, live_rates, override_rates)
    dst_usd = _rate_to_usd(dst, live_rates, override_rates)
    if dst_usd == 0:
        logger.warning("Rate to USD for %s is zero; using 1.0 for %s->%s", dst, src, dst)
        return 1.0
    return src_usd / dst_usd


def convert_amount(
    amount: float,
    source: Optional[str],
    destination: Optional[str],
    live_rates: Optional[RateMap] = None,
    override_rates: Optional[RateMap] = None,
) -> float:
    """Convert an amount between currencies using `resolve_rate`."""
    return amount * resolve_rate(source, destination, live_rates, override_rates)
