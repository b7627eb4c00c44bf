"""Registry of every remote Buzzy operation.

Each entry binds one name to its endpoint path, request model, result shape
and failure policy. The client builds both its plain and throttled methods
from this table.
"""

from pydantic import BaseModel, ConfigDict

from buzzy_sdk._internal.envelope import FailurePolicy, ResultShape
from buzzy_sdk.models import requests as req


class Operation(BaseModel):
    """Declarative description of one remote call."""

    name: str
    path: str
    request_model: type[req.OperationRequest]
    shape: ResultShape = ResultShape.OBJECT
    result_key: str | None = None
    policy: FailurePolicy = FailurePolicy.PROPAGATE

    model_config = ConfigDict(frozen=True)


_OPERATIONS = [
    Operation(name="get_user_id", path="/api/userid", request_model=req.GetUserIdRequest),
    # Organizations
    Operation(
        name="insert_organization",
        path="/api/insertorganization",
        request_model=req.InsertOrganizationRequest,
    ),
    Operation(
        name="read_organization",
        path="/api/readorganization",
        request_model=req.OrganizationRequest,
    ),
    Operation(
        name="update_organization",
        path="/api/updateorganization",
        request_model=req.UpdateOrganizationRequest,
    ),
    Operation(
        name="delete_organization",
        path="/api/deleteorganization",
        request_model=req.OrganizationRequest,
    ),
    # Teams
    Operation(name="insert_team", path="/api/insertteam", request_model=req.InsertTeamRequest),
    Operation(name="read_team", path="/api/readteam", request_model=req.TeamRequest),
    Operation(name="update_team", path="/api/updateteam", request_model=req.UpdateTeamRequest),
    Operation(name="delete_team", path="/api/deleteteam", request_model=req.TeamRequest),
    # Team members
    Operation(
        name="insert_team_members",
        path="/api/insertteammembers",
        request_model=req.InsertTeamMembersRequest,
    ),
    Operation(
        name="read_team_member",
        path="/api/readteammember",
        request_model=req.TeamMemberRequest,
    ),
    Operation(
        name="update_team_member",
        path="/api/updateteammember",
        request_model=req.UpdateTeamMemberRequest,
    ),
    Operation(
        name="delete_team_member",
        path="/api/deleteteammember",
        request_model=req.TeamMemberRequest,
    ),
    # Micro app rows
    Operation(
        name="insert_micro_app_row",
        path="/api/insertmicroapprow",
        request_model=req.InsertMicroAppRowRequest,
    ),
    Operation(
        name="get_micro_app_data",
        path="/api/microappdata",
        request_model=req.GetMicroAppDataRequest,
        shape=ResultShape.LIST,
        result_key="microAppRows",
    ),
    Operation(
        name="get_micro_app_data_row",
        path="/api/microappdata/row",
        request_model=req.RowRequest,
        result_key="currentRow",
        policy=FailurePolicy.SWALLOW,
    ),
    Operation(
        name="remove_micro_app_row",
        path="/api/removemicroapprow",
        request_model=req.RowRequest,
        result_key="currentRow",
        policy=FailurePolicy.SWALLOW,
    ),
    Operation(
        name="update_micro_app_data_row",
        path="/api/updatemicroapprow",
        request_model=req.UpdateMicroAppDataRowRequest,
        shape=ResultShape.FLAG,
        policy=FailurePolicy.SWALLOW,
    ),
    # Micro app children
    Operation(
        name="create_micro_app_child",
        path="/api/createmicroappchild",
        request_model=req.CreateMicroAppChildRequest,
    ),
    Operation(
        name="get_child_items_by_field",
        path="/api/getchilditemsbyfield",
        request_model=req.ChildItemsByFieldRequest,
        shape=ResultShape.LIST,
        result_key="childItems",
    ),
    Operation(
        name="read_micro_app_child",
        path="/api/readmicroappchild",
        request_model=req.MicroAppChildRequest,
    ),
    Operation(
        name="update_micro_app_child",
        path="/api/updatemicroappchild",
        request_model=req.UpdateMicroAppChildRequest,
    ),
    Operation(
        name="remove_micro_app_child",
        path="/api/removemicroappchild",
        request_model=req.MicroAppChildRequest,
    ),
]

OPERATIONS: dict[str, Operation] = {op.name: op for op in _OPERATIONS}
