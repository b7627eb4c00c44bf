"""Response helpers for code built on top of the SDK."""

from typing import Any

ERROR_STATUS_CODE = 400


def error_response(err: Any) -> dict[str, Any]:
    """Format an arbitrary error value as an error envelope.

    The error is placed in ``body`` as-is.
    """
    return {
        "status": "error",
        "statusCode": ERROR_STATUS_CODE,
        "body": err,
        "headers": {
            "Content-Type": "text/html",
        },
    }
