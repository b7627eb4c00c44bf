"""Tests for envelope decoding and failure policies."""

import asyncio
import logging

import pytest

from buzzy_sdk._internal.envelope import (
    FailurePolicy,
    ResultShape,
    decode_envelope,
    empty_result,
    normalize,
)
from buzzy_sdk.exceptions import BuzzyAPIError


async def _returns(payload):
    return payload


async def _raises(error):
    raise error


class TestDecodeEnvelope:
    """Tests for decode_envelope."""

    def test_returns_body_unchanged(self):
        """Should return body exactly, with no extra wrapping."""
        body = {"_id": "org-1", "name": "Acme"}
        assert decode_envelope({"body": body}, ResultShape.OBJECT) is body

    def test_returns_keyed_list(self):
        """Should extract the keyed list from body."""
        rows = [{"_id": "r1"}, {"_id": "r2"}]
        payload = {"body": {"microAppRows": rows}}
        assert decode_envelope(payload, ResultShape.LIST, "microAppRows") == rows

    @pytest.mark.parametrize("payload", [None, {}, {"body": None}, "not-json", []])
    def test_absent_body_gives_empty_object(self, payload):
        """Should treat a missing envelope or body as no data."""
        assert decode_envelope(payload, ResultShape.OBJECT) == {}

    @pytest.mark.parametrize("payload", [None, {}, {"body": {}}, {"body": {"microAppRows": None}}])
    def test_absent_list_gives_empty_list(self, payload):
        """Should default list results to an empty list, not a dict."""
        assert decode_envelope(payload, ResultShape.LIST, "microAppRows") == []

    def test_mistyped_list_gives_empty_list(self):
        """Should not hand back a non-list for a list result."""
        payload = {"body": {"microAppRows": {"oops": True}}}
        assert decode_envelope(payload, ResultShape.LIST, "microAppRows") == []

    def test_missing_key_gives_empty_object(self):
        """Should default a missing keyed object to an empty dict."""
        assert decode_envelope({"body": {}}, ResultShape.OBJECT, "currentRow") == {}

    @pytest.mark.parametrize("payload", [None, {}, {"body": {"error": "bad"}}])
    def test_flag_is_true_for_any_response(self, payload):
        """Should report success for any received response."""
        assert decode_envelope(payload, ResultShape.FLAG) is True

    def test_defaults_are_fresh(self):
        """Should never share default objects between calls."""
        first = decode_envelope(None, ResultShape.LIST)
        first.append("x")
        assert decode_envelope(None, ResultShape.LIST) == []


class TestEmptyResult:
    """Tests for empty_result."""

    def test_shapes(self):
        assert empty_result(ResultShape.OBJECT) == {}
        assert empty_result(ResultShape.LIST) == []
        assert empty_result(ResultShape.FLAG) is True


class TestNormalize:
    """Tests for normalize failure policies."""

    def test_success_decodes(self):
        """Should decode the awaited payload."""
        result = asyncio.run(
            normalize(
                _returns({"body": {"currentRow": {"_id": "r1"}}}),
                shape=ResultShape.OBJECT,
                policy=FailurePolicy.SWALLOW,
                key="currentRow",
            )
        )
        assert result == {"_id": "r1"}

    def test_propagate_reraises_original_error(self):
        """Should re-raise the transport error unchanged."""
        error = BuzzyAPIError("boom", status_code=500)
        with pytest.raises(BuzzyAPIError) as exc_info:
            asyncio.run(
                normalize(
                    _raises(error),
                    shape=ResultShape.OBJECT,
                    policy=FailurePolicy.PROPAGATE,
                )
            )
        assert exc_info.value is error

    @pytest.mark.parametrize(
        "shape,expected",
        [(ResultShape.OBJECT, {}), (ResultShape.LIST, []), (ResultShape.FLAG, True)],
    )
    def test_swallow_returns_empty_result(self, shape, expected):
        """Should resolve with the empty value instead of raising."""
        result = asyncio.run(
            normalize(
                _raises(BuzzyAPIError("down")),
                shape=shape,
                policy=FailurePolicy.SWALLOW,
            )
        )
        assert result == expected

    def test_swallow_logs_failure(self, caplog):
        """Should log the swallowed failure."""
        with caplog.at_level(logging.WARNING, logger="buzzy_sdk"):
            asyncio.run(
                normalize(
                    _raises(BuzzyAPIError("connection refused")),
                    shape=ResultShape.OBJECT,
                    policy=FailurePolicy.SWALLOW,
                    name="get_micro_app_data_row",
                )
            )
        assert "get_micro_app_data_row failed" in caplog.text
        assert "connection refused" in caplog.text

    def test_swallow_does_not_hide_programming_errors(self):
        """Should only contain transport failures."""
        with pytest.raises(TypeError):
            asyncio.run(
                normalize(
                    _raises(TypeError("bug")),
                    shape=ResultShape.OBJECT,
                    policy=FailurePolicy.SWALLOW,
                )
            )
