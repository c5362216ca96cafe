"""Tests for the QueryPlan value object."""

import pytest
from pydantic import ValidationError

from n1ql.types import QueryPlan


class TestQueryPlan:
    """Test QueryPlan behaviour."""

    def test_to_dict(self):
        plan = QueryPlan(name="p1", encoded_plan="abc")

        assert plan.to_dict() == {"name": "p1", "encoded_plan": "abc"}

    def test_to_dict_drops_missing_name(self):
        assert QueryPlan(encoded_plan="abc").to_dict() == {"encoded_plan": "abc"}

    def test_plan_is_immutable(self):
        plan = QueryPlan(name="p1", encoded_plan="abc")

        with pytest.raises(ValidationError):
            plan.encoded_plan = "other"

    def test_blank_plan_can_be_constructed(self):
        # rejected later when attached to a request
        assert QueryPlan(name="p1").encoded_plan == ""
