"""Response envelope decoding and failure containment.

Buzzy wraps every result as ``{"body": ...}``. Each operation declares the
shape it promises (object, list or flag) and whether transport failures
reach the caller or are swallowed into that shape's empty value.
"""

import enum
import logging
from collections.abc import Awaitable
from typing import Any

from buzzy_sdk.exceptions import BuzzyAPIError

logger = logging.getLogger(__name__)


class ResultShape(enum.Enum):
    OBJECT = "object"
    LIST = "list"
    FLAG = "flag"


class FailurePolicy(enum.Enum):
    """What happens to a transport failure."""

    PROPAGATE = "propagate"
    SWALLOW = "swallow"


def empty_result(shape: ResultShape) -> Any:
    """Return a fresh "no data" value for ``shape``.

    Flag operations never report failure to the caller, so their empty
    result is ``True``.
    """
    if shape is ResultShape.LIST:
        return []
    if shape is ResultShape.FLAG:
        return True
    return {}


def decode_envelope(payload: Any, shape: ResultShape, key: str | None = None) -> Any:
    """Extract the logical result from a response envelope.

    Missing or mistyped fields are "no data", never an error.

    Args:
        payload: Decoded JSON response, possibly ``None``.
        shape: Shape the operation promises.
        key: Field of ``body`` holding the result, or ``None`` for ``body``
            itself.

    Returns:
        The result, or the empty value for ``shape``. ``FLAG`` is ``True``
        for any response; its content is not inspected.
    """
    if shape is ResultShape.FLAG:
        return True

    body = payload.get("body") if isinstance(payload, dict) else None
    if key is not None:
        body = body.get(key) if isinstance(body, dict) else None

    expected = list if shape is ResultShape.LIST else dict
    if not isinstance(body, expected):
        return empty_result(shape)
    return body


async def normalize(
    call: Awaitable[Any],
    *,
    shape: ResultShape,
    policy: FailurePolicy,
    key: str | None = None,
    name: str = "operation",
) -> Any:
    """Await a transport call and map its outcome to the operation's result.

    Raises:
        BuzzyAPIError: Only under ``FailurePolicy.PROPAGATE``, unchanged.
    """
    try:
        payload = await call
    except BuzzyAPIError as e:
        if policy is FailurePolicy.PROPAGATE:
            raise
        logger.warning("%s failed, returning empty result: %s", name, e)
        return empty_result(shape)
    return decode_envelope(payload, shape, key)
