"""Tests for request construction."""

from buzzy_sdk._internal.auth import build_login_request, build_request
from buzzy_sdk.models import Credential

CREDENTIAL = Credential(auth_token="tok-123", user_id="user-456")


class TestBuildRequest:
    """Tests for build_request."""

    def test_headers_carry_identity(self):
        """Should send token and user id as separate headers."""
        request = build_request(CREDENTIAL, "http://buzzy.test", "/api/insertteam", {})
        assert request.method == "POST"
        assert request.headers == {
            "X-Auth-Token": "tok-123",
            "X-User-Id": "user-456",
            "Content-Type": "application/json",
        }

    def test_url_joins_base_and_path(self):
        """Should append the path to the base URL."""
        request = build_request(CREDENTIAL, "http://buzzy.test", "/api/microappdata", {})
        assert request.url == "http://buzzy.test/api/microappdata"

    def test_url_strips_trailing_slash(self):
        """Should not produce a double slash."""
        request = build_request(CREDENTIAL, "http://buzzy.test/", "/api/microappdata", {})
        assert request.url == "http://buzzy.test/api/microappdata"

    def test_payload_passed_through(self):
        """Should use the payload as the body without modification."""
        payload = {"rowID": "r1", "nested": {"anything": [1, 2]}}
        request = build_request(CREDENTIAL, "http://buzzy.test", "/api/x", payload)
        assert request.json_body is payload


class TestBuildLoginRequest:
    """Tests for build_login_request."""

    def test_login_has_no_identity_headers(self):
        """Should send only the content type."""
        request = build_login_request("http://buzzy.test", "me@example.com", "pw")
        assert request.url == "http://buzzy.test/api/login"
        assert request.headers == {"Content-Type": "application/json"}
        assert request.json_body == {"email": "me@example.com", "password": "pw"}
