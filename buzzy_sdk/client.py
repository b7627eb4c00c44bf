"""User-facing async client for the Buzzy REST API.

Example usage:
    from buzzy_sdk import BuzzyClient

    async with BuzzyClient() as client:
        credential = await client.login(url, email="me@example.com", password="...")
        if credential is None:
            ...

        # Paced through the shared dispatcher
        rows = await client.throttled.get_micro_app_data(
            credential, url, micro_app_id="abc123"
        )

        # Sent immediately
        row = await client.get_micro_app_data_row(credential, url, row_id=rows[0]["_id"])
"""

import functools
import logging
import os
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from buzzy_sdk._internal.auth import build_login_request, build_request
from buzzy_sdk._internal.envelope import normalize
from buzzy_sdk._internal.http import create_http_client, send
from buzzy_sdk._internal.log import enable_debug_logging
from buzzy_sdk._internal.operations import OPERATIONS, Operation
from buzzy_sdk._internal.throttle import (
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_MIN_SPACING,
    ThrottledDispatcher,
)
from buzzy_sdk.exceptions import BuzzyAPIError, BuzzyConfigError, BuzzyValidationError
from buzzy_sdk.models.credential import Credential

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_MIN_SPACING_MS = int(DEFAULT_MIN_SPACING * 1000)

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, str(default))
    try:
        return int(raw)
    except ValueError as e:
        raise BuzzyConfigError(f"{name} must be an integer, got {raw!r}") from e


class ThrottledOperations:
    """Every registered operation, pre-wrapped through one dispatcher.

    Each attribute has the same signature as the matching ``BuzzyClient``
    method and returns an awaitable future immediately. Fields are checked
    before the call is queued, so a ``BuzzyValidationError`` is raised
    directly and the rejected call never takes a place in the queue.
    """

    def __init__(self, client: "BuzzyClient") -> None:
        execute = client.dispatcher.wrap(client._execute)
        for name in OPERATIONS:
            setattr(self, name, self._throttle(client, name, execute))

    @staticmethod
    def _throttle(client: "BuzzyClient", name: str, execute: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(getattr(client, name))
        def throttled(credential: Credential, url: str, **fields: Any) -> Any:
            op, payload = client._prepare(name, fields)
            return execute(op, credential, url, payload)

        return throttled


class BuzzyClient:
    """Async client for Buzzy organizations, teams, datatable rows and children.

    Every operation takes the credential returned by ``login`` and the base
    URL of the Buzzy instance. The plain methods send immediately;
    ``client.throttled`` exposes the same operations paced through the
    client's ``ThrottledDispatcher``. Use the throttled form for any real
    call volume.

    Use ``BuzzyClient.from_env()`` to read settings from environment
    variables.
    """

    def __init__(
        self,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        min_spacing_ms: int = DEFAULT_MIN_SPACING_MS,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        dispatcher: ThrottledDispatcher | None = None,
        http_client: httpx.AsyncClient | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            timeout_ms: Per-request timeout in milliseconds.
            min_spacing_ms: Minimum gap between throttled call starts.
            max_concurrent: Maximum throttled calls in flight.
            dispatcher: Dispatcher to share with other clients. When given,
                ``min_spacing_ms`` and ``max_concurrent`` are ignored.
            http_client: HTTP client to use. Not closed by ``aclose()``.
            debug: Enable debug logging to stderr.
        """
        if debug:
            enable_debug_logging()

        self._dispatcher = dispatcher or ThrottledDispatcher(
            max_concurrent=max_concurrent,
            min_spacing=min_spacing_ms / 1000,
        )
        self._owns_http = http_client is None
        self._http = http_client or create_http_client(timeout=timeout_ms / 1000)
        self.throttled = ThrottledOperations(self)

    @classmethod
    def from_env(cls) -> "BuzzyClient":
        """Create a client from environment variables.

        Optional environment variables:
            BUZZY_TIMEOUT_MS: Request timeout in milliseconds.
            BUZZY_MIN_SPACING_MS: Minimum gap between throttled call starts.
            BUZZY_MAX_CONCURRENT: Maximum throttled calls in flight.
            BUZZY_DEBUG: Set to "1" to enable debug logging.

        Raises:
            BuzzyConfigError: If a numeric variable is malformed or out of range.
        """
        return cls(
            timeout_ms=_env_int("BUZZY_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            min_spacing_ms=_env_int("BUZZY_MIN_SPACING_MS", DEFAULT_MIN_SPACING_MS),
            max_concurrent=_env_int("BUZZY_MAX_CONCURRENT", DEFAULT_MAX_CONCURRENT),
            debug=os.environ.get("BUZZY_DEBUG", "") == "1",
        )

    @property
    def dispatcher(self) -> ThrottledDispatcher:
        return self._dispatcher

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "BuzzyClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # =========================================================================
    # Core
    # =========================================================================

    async def login(self, url: str, email: str, password: str) -> Credential | None:
        """Log in and return the user's credential.

        Never raises on a failed login: the failure is logged and ``None`` is
        returned, so callers check for a missing credential.

        Args:
            url: Base URL of the Buzzy instance.
            email: The user's email.
            password: The user's password.

        Returns:
            The Credential, or None if login failed.
        """
        try:
            data = await send(self._http, build_login_request(url, email, password))
        except BuzzyAPIError as e:
            logger.warning("login error: %s", e)
            return None

        if not isinstance(data, dict) or not data.get("authToken") or not data.get("userId"):
            logger.warning("login error: no credential in response")
            return None
        return Credential(auth_token=str(data["authToken"]), user_id=str(data["userId"]))

    async def call(self, name: str, credential: Credential, url: str, **fields: Any) -> Any:
        """Run a registered operation by name.

        Args:
            name: Operation name, e.g. ``"insert_micro_app_row"``.
            credential: Credential from ``login``.
            url: Base URL of the Buzzy instance.
            **fields: Operation fields (snake_case or wire keys).

        Returns:
            The operation's documented result.

        Raises:
            BuzzyValidationError: If the operation or a field is unknown, or a
                required field is missing. Nothing is sent.
            BuzzyAPIError: On transport failure for propagating operations.
        """
        op, payload = self._prepare(name, fields)
        return await self._execute(op, credential, url, payload)

    def _prepare(self, name: str, fields: dict[str, Any]) -> tuple[Operation, dict[str, Any]]:
        op = OPERATIONS.get(name)
        if op is None:
            raise BuzzyValidationError(f"Unknown operation {name!r}")
        try:
            payload = op.request_model(**fields).to_wire()
        except ValidationError as e:
            raise BuzzyValidationError(f"Invalid fields for {name}: {e}") from e
        return op, payload

    async def _execute(
        self, op: Operation, credential: Credential, url: str, payload: dict[str, Any]
    ) -> Any:
        request = build_request(credential, url, op.path, payload)
        return await normalize(
            send(self._http, request),
            shape=op.shape,
            policy=op.policy,
            key=op.result_key,
            name=op.name,
        )

    # =========================================================================
    # Users
    # =========================================================================

    async def get_user_id(self, credential: Credential, url: str, *, email: str) -> dict[str, Any]:
        """Look up a user's id by email."""
        return await self.call("get_user_id", credential, url, email=email)

    # =========================================================================
    # Organizations
    # =========================================================================

    async def insert_organization(
        self, credential: Credential, url: str, *, organization_info: dict[str, Any]
    ) -> dict[str, Any]:
        """Create an organization. The result contains the new organization id."""
        return await self.call(
            "insert_organization", credential, url, organization_info=organization_info
        )

    async def read_organization(
        self, credential: Credential, url: str, *, organization_id: str
    ) -> dict[str, Any]:
        return await self.call("read_organization", credential, url, organization_id=organization_id)

    async def update_organization(
        self,
        credential: Credential,
        url: str,
        *,
        organization_id: str,
        organization_info: dict[str, Any],
    ) -> dict[str, Any]:
        return await self.call(
            "update_organization",
            credential,
            url,
            organization_id=organization_id,
            organization_info=organization_info,
        )

    async def delete_organization(
        self, credential: Credential, url: str, *, organization_id: str
    ) -> dict[str, Any]:
        return await self.call(
            "delete_organization", credential, url, organization_id=organization_id
        )

    # =========================================================================
    # Teams
    # =========================================================================

    async def insert_team(
        self,
        credential: Credential,
        url: str,
        *,
        team_info: dict[str, Any],
        admin_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a team. ``team_info`` needs ``name`` and ``organizationId``."""
        return await self.call("insert_team", credential, url, team_info=team_info, admin_id=admin_id)

    async def read_team(self, credential: Credential, url: str, *, team_id: str) -> dict[str, Any]:
        return await self.call("read_team", credential, url, team_id=team_id)

    async def update_team(
        self, credential: Credential, url: str, *, team_id: str, team_info: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.call("update_team", credential, url, team_id=team_id, team_info=team_info)

    async def delete_team(self, credential: Credential, url: str, *, team_id: str) -> dict[str, Any]:
        return await self.call("delete_team", credential, url, team_id=team_id)

    # =========================================================================
    # Team members
    # =========================================================================

    async def insert_team_members(
        self,
        credential: Credential,
        url: str,
        *,
        team_ids: list[str],
        emails: list[str] | None = None,
        user_ids: list[str] | None = None,
        target_initial_app: str | None = None,
        target_initial_screen: str | None = None,
        target_route: str = "app",
    ) -> dict[str, Any]:
        """Add users to teams, by email and/or user id.

        Args:
            credential: Credential from ``login``.
            url: Base URL of the Buzzy instance.
            team_ids: Teams the users are added to.
            emails: Emails of the users to add.
            user_ids: User ids of the users to add.
            target_initial_app: App opened on the members' first login.
            target_initial_screen: Screen opened on the members' first login.
            target_route: Route opened on the members' first login.
        """
        return await self.call(
            "insert_team_members",
            credential,
            url,
            team_ids=team_ids,
            emails=emails or [],
            user_ids=user_ids or [],
            target_initial_app=target_initial_app,
            target_initial_screen=target_initial_screen,
            target_route=target_route,
        )

    async def read_team_member(
        self, credential: Credential, url: str, *, team_id: str, member_user_id: str
    ) -> dict[str, Any]:
        return await self.call(
            "read_team_member", credential, url, team_id=team_id, member_user_id=member_user_id
        )

    async def update_team_member(
        self,
        credential: Credential,
        url: str,
        *,
        team_id: str,
        member_user_id: str,
        member_info: dict[str, Any],
    ) -> dict[str, Any]:
        return await self.call(
            "update_team_member",
            credential,
            url,
            team_id=team_id,
            member_user_id=member_user_id,
            member_info=member_info,
        )

    async def delete_team_member(
        self, credential: Credential, url: str, *, team_id: str, member_user_id: str
    ) -> dict[str, Any]:
        return await self.call(
            "delete_team_member", credential, url, team_id=team_id, member_user_id=member_user_id
        )

    # =========================================================================
    # Micro app rows
    # =========================================================================

    async def insert_micro_app_row(
        self,
        credential: Credential,
        url: str,
        *,
        micro_app_id: str,
        row_data: dict[str, Any],
        embedding_row_id: str | None = None,
        viewers: list[str] | None = None,
        creator_id: str | None = None,
    ) -> dict[str, Any]:
        """Insert a row into a datatable.

        Args:
            credential: Credential from ``login``.
            url: Base URL of the Buzzy instance.
            micro_app_id: Id of the datatable.
            row_data: Field values of the new row.
            embedding_row_id: Parent row, for embedded datatables.
            viewers: User ids allowed to view the row.
            creator_id: Creator of the row; defaults to the calling user.

        Returns:
            The response body, containing the new row id.
        """
        return await self.call(
            "insert_micro_app_row",
            credential,
            url,
            micro_app_id=micro_app_id,
            row_data=row_data,
            embedding_row_id=embedding_row_id,
            viewers=viewers or [],
            creator_id=creator_id,
        )

    async def get_micro_app_data(
        self,
        credential: Credential,
        url: str,
        *,
        micro_app_id: str,
        opt_search_filters: Any = None,
        search_filter: Any = None,
        opt_view_filters: Any = None,
        view_filter_is_mongo_query: bool = False,
        opt_is_vector_search: bool = False,
        opt_vector_search_string: str | None = None,
        opt_limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Query rows of a datatable.

        ``opt_view_filters`` can sort, skip and limit results for paging.

        Returns:
            The matching rows, or an empty list if none were returned.
        """
        return await self.call(
            "get_micro_app_data",
            credential,
            url,
            micro_app_id=micro_app_id,
            opt_search_filters=opt_search_filters,
            search_filter=search_filter,
            opt_view_filters=opt_view_filters,
            view_filter_is_mongo_query=view_filter_is_mongo_query,
            opt_is_vector_search=opt_is_vector_search,
            opt_vector_search_string=opt_vector_search_string,
            opt_limit=opt_limit,
        )

    async def get_micro_app_data_row(
        self, credential: Credential, url: str, *, row_id: str
    ) -> dict[str, Any]:
        """Fetch one row by id.

        Returns an empty dict if the row is missing or the request failed.
        """
        return await self.call("get_micro_app_data_row", credential, url, row_id=row_id)

    async def remove_micro_app_row(
        self, credential: Credential, url: str, *, row_id: str
    ) -> dict[str, Any]:
        """Remove one row by id.

        Returns the removed row, or an empty dict if the request failed.
        """
        return await self.call("remove_micro_app_row", credential, url, row_id=row_id)

    async def update_micro_app_data_row(
        self,
        credential: Credential,
        url: str,
        *,
        row_id: str,
        row_data: dict[str, Any],
        creator_id: str | None = None,
    ) -> bool:
        """Update one row.

        Always returns True. The response content is not checked and a failed
        request is logged, not reported.
        """
        return await self.call(
            "update_micro_app_data_row",
            credential,
            url,
            row_id=row_id,
            row_data=row_data,
            creator_id=creator_id,
        )

    # =========================================================================
    # Micro app children
    # =========================================================================

    async def create_micro_app_child(
        self,
        credential: Credential,
        url: str,
        *,
        micro_app_resource_id: str,
        app_id: str,
        field_id: str,
        content: dict[str, Any],
    ) -> dict[str, Any]:
        """Attach a child record (e.g. a file) to a row field.

        Returns:
            The response body, containing ``childID``.
        """
        return await self.call(
            "create_micro_app_child",
            credential,
            url,
            micro_app_resource_id=micro_app_resource_id,
            app_id=app_id,
            field_id=field_id,
            content=content,
        )

    async def get_child_items_by_field(
        self, credential: Credential, url: str, *, app_id: str, field_id: str
    ) -> list[dict[str, Any]]:
        """List the child records attached to one field of a row."""
        return await self.call(
            "get_child_items_by_field", credential, url, app_id=app_id, field_id=field_id
        )

    async def read_micro_app_child(
        self, credential: Credential, url: str, *, child_id: str
    ) -> dict[str, Any]:
        return await self.call("read_micro_app_child", credential, url, child_id=child_id)

    async def update_micro_app_child(
        self, credential: Credential, url: str, *, child_id: str, content: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.call(
            "update_micro_app_child", credential, url, child_id=child_id, content=content
        )

    async def remove_micro_app_child(
        self, credential: Credential, url: str, *, child_id: str
    ) -> dict[str, Any]:
        return await self.call("remove_micro_app_child", credential, url, child_id=child_id)


def get_buzzy_client() -> BuzzyClient:
    """Get a client configured from environment variables.

    Returns:
        A configured BuzzyClient instance.
    """
    return BuzzyClient.from_env()
