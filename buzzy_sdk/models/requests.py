"""Request payload models, one per remote operation.

Field names are snake_case; the wire key sent to Buzzy is the alias. Every
model accepts either form on input and is dumped with ``by_alias=True``.

Models only check that required fields are present and that no unknown
fields are passed. Values are forwarded as given; Buzzy validates them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Base
# =============================================================================


class OperationRequest(BaseModel):
    """Base for all operation payloads."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        """Dump the payload with Buzzy's wire keys."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Users
# =============================================================================


class GetUserIdRequest(OperationRequest):
    email: Any


# =============================================================================
# Organizations
# =============================================================================


class InsertOrganizationRequest(OperationRequest):
    """Payload for creating an organization.

    ``organization_info`` example::

        {"_id": "optional id", "name": "Org", "description": "..."}
    """

    organization_info: Any = Field(alias="organizationInfo")


class OrganizationRequest(OperationRequest):
    organization_id: Any = Field(alias="organizationID")


class UpdateOrganizationRequest(OrganizationRequest):
    organization_info: Any = Field(alias="organizationInfo")


# =============================================================================
# Teams
# =============================================================================


class InsertTeamRequest(OperationRequest):
    """Payload for creating a team inside an organization.

    ``team_info`` carries at least ``name`` and ``organizationId``.
    """

    team_info: Any = Field(alias="teamInfo")
    admin_id: Any = Field(default=None, alias="adminID")


class TeamRequest(OperationRequest):
    team_id: Any = Field(alias="teamID")


class UpdateTeamRequest(TeamRequest):
    team_info: Any = Field(alias="teamInfo")


# =============================================================================
# Team members
# =============================================================================


class InsertTeamMembersRequest(OperationRequest):
    """Payload for adding users to one or more teams.

    Users may be identified by email, by user id, or both. The ``target_*``
    fields choose what the new members see when they first log in.
    """

    team_ids: Any = Field(alias="teamIDs")
    emails: Any = Field(default_factory=list)
    user_ids: Any = Field(default_factory=list, alias="userIDs")
    target_initial_app: Any = Field(default=None, alias="targetInitialApp")
    target_initial_screen: Any = Field(default=None, alias="targetInitialScreen")
    target_route: Any = Field(default="app", alias="targetRoute")


class TeamMemberRequest(OperationRequest):
    team_id: Any = Field(alias="teamID")
    member_user_id: Any = Field(alias="userID")


class UpdateTeamMemberRequest(TeamMemberRequest):
    member_info: Any = Field(alias="memberInfo")


# =============================================================================
# Micro app rows
# =============================================================================


class InsertMicroAppRowRequest(OperationRequest):
    """Payload for inserting a row into a datatable (micro app).

    ``creator_id`` defaults server-side to the calling user.
    """

    micro_app_id: Any = Field(alias="microAppID")
    row_data: Any = Field(alias="rowData")
    embedding_row_id: Any = Field(default=None, alias="embeddingRowID")
    viewers: Any = Field(default_factory=list)
    creator_id: Any = Field(default=None, alias="userID")


class GetMicroAppDataRequest(OperationRequest):
    """Payload for querying rows of a datatable.

    ``opt_view_filters`` supports sort/skip/limit for paging large tables.
    """

    micro_app_id: Any = Field(alias="microAppID")
    opt_search_filters: Any = Field(default=None, alias="optSearchFilters")
    search_filter: Any = Field(default=None, alias="searchFilter")
    opt_view_filters: Any = Field(default=None, alias="optViewFilters")
    view_filter_is_mongo_query: Any = Field(default=False, alias="viewFilterIsMongoQuery")
    opt_is_vector_search: Any = Field(default=False, alias="optIsVectorSearch")
    opt_vector_search_string: Any = Field(default=None, alias="optVectorSearchString")
    opt_limit: Any = Field(default=None, alias="optLimit")


class RowRequest(OperationRequest):
    row_id: Any = Field(alias="rowID")


class UpdateMicroAppDataRowRequest(RowRequest):
    row_data: Any = Field(alias="rowData")
    creator_id: Any = Field(default=None, alias="userID")


# =============================================================================
# Micro app children
# =============================================================================


class CreateMicroAppChildRequest(OperationRequest):
    """Payload for attaching a child record (e.g. a file) to a row field."""

    micro_app_resource_id: Any = Field(alias="microAppResourceID")
    app_id: Any = Field(alias="appID")
    field_id: Any = Field(alias="fieldID")
    content: Any


class ChildItemsByFieldRequest(OperationRequest):
    app_id: Any = Field(alias="appID")
    field_id: Any = Field(alias="fieldID")


class MicroAppChildRequest(OperationRequest):
    child_id: Any = Field(alias="childID")


class UpdateMicroAppChildRequest(MicroAppChildRequest):
    content: Any
