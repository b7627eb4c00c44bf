"""Tests for the operation registry and request models."""

import pytest
from pydantic import ValidationError

from buzzy_sdk._internal.envelope import FailurePolicy, ResultShape
from buzzy_sdk._internal.operations import OPERATIONS
from buzzy_sdk.models.requests import (
    GetMicroAppDataRequest,
    InsertMicroAppRowRequest,
    InsertTeamMembersRequest,
    UpdateMicroAppDataRowRequest,
)

SWALLOWING = {"get_micro_app_data_row", "remove_micro_app_row", "update_micro_app_data_row"}


class TestRegistry:
    """Tests for OPERATIONS."""

    def test_paths_are_unique(self):
        """Should bind every operation to its own endpoint."""
        paths = [op.path for op in OPERATIONS.values()]
        assert len(paths) == len(set(paths))

    def test_team_operations_do_not_hit_organization_endpoints(self):
        """Should not route team calls to the organization call."""
        assert OPERATIONS["insert_team"].path == "/api/insertteam"
        assert OPERATIONS["insert_team_members"].path == "/api/insertteammembers"

    def test_row_operations_swallow_failures(self):
        """Should contain failures only for the row-level operations."""
        swallowing = {
            name for name, op in OPERATIONS.items() if op.policy is FailurePolicy.SWALLOW
        }
        assert swallowing == SWALLOWING

    def test_result_shapes(self):
        """Should declare list and flag results where documented."""
        assert OPERATIONS["get_micro_app_data"].shape is ResultShape.LIST
        assert OPERATIONS["get_micro_app_data"].result_key == "microAppRows"
        assert OPERATIONS["get_child_items_by_field"].shape is ResultShape.LIST
        assert OPERATIONS["update_micro_app_data_row"].shape is ResultShape.FLAG
        assert OPERATIONS["get_micro_app_data_row"].result_key == "currentRow"
        assert OPERATIONS["insert_organization"].shape is ResultShape.OBJECT

    def test_operations_are_frozen(self):
        """Should not allow registry entries to change at runtime."""
        with pytest.raises(ValidationError):
            OPERATIONS["insert_team"].path = "/api/insertorganization"


class TestRequestModels:
    """Tests for request payload models."""

    def test_insert_row_wire_keys_and_defaults(self):
        """Should use Buzzy's wire keys and fill optional defaults."""
        payload = InsertMicroAppRowRequest(micro_app_id="app-1", row_data={"a": 1}).to_wire()
        assert payload == {
            "microAppID": "app-1",
            "rowData": {"a": 1},
            "embeddingRowID": None,
            "viewers": [],
            "userID": None,
        }

    def test_accepts_wire_keys_on_input(self):
        """Should accept aliases as well as field names."""
        model = InsertMicroAppRowRequest(microAppID="app-1", rowData={})
        assert model.micro_app_id == "app-1"

    def test_missing_required_field(self):
        """Should reject a payload missing a required field."""
        with pytest.raises(ValidationError):
            InsertMicroAppRowRequest(row_data={})

    def test_unknown_field_rejected(self):
        """Should reject fields the operation does not define."""
        with pytest.raises(ValidationError):
            InsertMicroAppRowRequest(micro_app_id="a", row_data={}, colour="red")

    def test_team_members_default_route(self):
        """Should default targetRoute to 'app'."""
        payload = InsertTeamMembersRequest(team_ids=["t1"], emails=["a@b.c"]).to_wire()
        assert payload["targetRoute"] == "app"
        assert payload["teamIDs"] == ["t1"]
        assert payload["userIDs"] == []

    def test_row_update_sends_creator_as_user_id(self):
        """Should keep the creator id on row updates."""
        payload = UpdateMicroAppDataRowRequest(
            row_id="r1", row_data={"x": 1}, creator_id="creator-1"
        ).to_wire()
        assert payload == {"rowID": "r1", "rowData": {"x": 1}, "userID": "creator-1"}

    def test_micro_app_data_filters_default_to_none(self):
        """Should send no filters and no vector search by default."""
        payload = GetMicroAppDataRequest(micro_app_id="app-1").to_wire()
        assert payload["optSearchFilters"] is None
        assert payload["searchFilter"] is None
        assert payload["optViewFilters"] is None
        assert payload["optIsVectorSearch"] is False
        assert payload["viewFilterIsMongoQuery"] is False

    def test_values_are_sent_as_given(self):
        """Should forward field values without coercing them."""
        row = UpdateMicroAppDataRowRequest(row_id=7, row_data={"x": 1}).to_wire()
        assert row["rowID"] == 7
        query = GetMicroAppDataRequest(micro_app_id="app-1", opt_limit="5").to_wire()
        assert query["optLimit"] == "5"

    def test_non_string_ids_pass_through(self):
        """Should leave list and null values for the server to check."""
        payload = InsertTeamMembersRequest(team_ids="t1", user_ids=None).to_wire()
        assert payload["teamIDs"] == "t1"
        assert payload["userIDs"] is None
