"""Redaction of credentials before request payloads reach the logs."""

from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "password",
    "authtoken",
    "auth_token",
    "x-auth-token",
    "token",
    "secret",
    "authorization",
})

REDACTED_VALUE = "[REDACTED]"


def redact(obj: Any) -> Any:
    """Return a copy of ``obj`` with sensitive values replaced.

    Keys are matched case-insensitively, so ``authToken`` and
    ``X-Auth-Token`` are both caught. The input is never mutated.
    """
    if isinstance(obj, dict):
        result = {}
        for key, value in obj.items():
            if isinstance(key, str) and key.lower() in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = redact(value)
        return result
    elif isinstance(obj, list):
        return [redact(item) for item in obj]
    else:
        return obj
