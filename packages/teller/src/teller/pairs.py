"""
Note pair normalization.

Callers hand the register note requests in several shapes: a flat list of
integers ``[d1, q1, d2, q2, ...]``, a list of ``(d, q)`` tuples, a list of
``NotePair`` objects, or a ``{d: q}`` mapping. This module turns any of them
into a list of ``NotePair`` so the register deals with one shape only.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from teller_types.schemas.models import FailureReason, NotePair

from .errors import InvalidArgument

PairsInput = Optional[Any]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _make_pair(denomination: Any, quantity: Any) -> NotePair:
    if not _is_int(denomination) or not _is_int(quantity):
        raise InvalidArgument(
            f"Note pairs must be integers, got ({denomination!r}, {quantity!r})",
            FailureReason.NOT_AN_INTEGER,
            (denomination, quantity),
        )
    return NotePair(denomination=denomination, quantity=quantity)


def coerce_pairs(pairs: PairsInput) -> List[NotePair]:
    """
    Normalize a note request into a list of NotePair.

    Args:
        pairs: None, a flat integer sequence of even length, a sequence of
            2-item sequences, a sequence of NotePair, or a mapping.

    Returns:
        List of NotePair in input order (empty for None or empty input)

    Raises:
        InvalidArgument: If the flat sequence has odd length or any value is
            not an integer
    """
    if pairs is None:
        return []

    if isinstance(pairs, NotePair):
        return [pairs]

    if isinstance(pairs, Mapping):
        return [_make_pair(d, q) for d, q in pairs.items()]

    if isinstance(pairs, (str, bytes)):
        raise InvalidArgument(
            "Note pairs must be integers, not text",
            FailureReason.NOT_AN_INTEGER,
            pairs,
        )

    try:
        items = list(pairs)
    except TypeError as e:
        raise InvalidArgument(
            f"Cannot interpret {pairs!r} as note pairs",
            FailureReason.NOT_AN_INTEGER,
            pairs,
        ) from e
    if not items:
        return []

    # Flat form: every element is a scalar
    if all(not isinstance(item, (NotePair, Mapping, tuple, list)) for item in items):
        if len(items) % 2 != 0:
            raise InvalidArgument(
                "Note arguments must be in (denomination, quantity) pairs",
                FailureReason.ODD_LENGTH,
                len(items),
            )
        return [_make_pair(items[i], items[i + 1]) for i in range(0, len(items), 2)]

    result = []
    for item in items:
        if isinstance(item, NotePair):
            result.append(item)
        elif isinstance(item, Mapping):
            result.append(_make_pair(item.get("denomination"), item.get("quantity")))
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            result.append(_make_pair(item[0], item[1]))
        else:
            raise InvalidArgument(
                f"Cannot interpret {item!r} as a (denomination, quantity) pair",
                FailureReason.ODD_LENGTH,
                item,
            )
    return result


def sum_by_denomination(pairs: Iterable[NotePair]) -> Dict[int, int]:
    """Sum quantities of repeated denominations, keeping first-seen order."""
    totals: Dict[int, int] = {}
    for pair in pairs:
        totals[pair.denomination] = totals.get(pair.denomination, 0) + pair.quantity
    return totals


def parse_pair_string(text: str) -> List[NotePair]:
    """
    Parse ``"1:3,5:0,10:1"`` style text into NotePair objects.

    Whitespace around items is ignored and an empty string yields no pairs.

    Raises:
        InvalidArgument: If an item is not ``<int>:<int>``
    """
    pairs = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        denom, sep, qty = item.partition(":")
        if not sep:
            raise InvalidArgument(
                f"Expected denomination:quantity, got {item!r}",
                FailureReason.ODD_LENGTH,
                item,
            )
        try:
            denomination, quantity = int(denom.strip()), int(qty.strip())
        except ValueError as e:
            raise InvalidArgument(
                f"Expected integers in {item!r}",
                FailureReason.NOT_AN_INTEGER,
                item,
            ) from e
        pairs.append(NotePair(denomination=denomination, quantity=quantity))
    return pairs
