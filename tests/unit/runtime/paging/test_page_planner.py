"""Unit tests for page planning logic."""

from __future__ import annotations

from itertools import islice

import pytest

from caspio.rest.runtime.paging import PagePlanner, PagePolicy


class TestPagePlanner:
    """Test PagePlanner functionality."""

    def test_first_plan_is_limit_only(self):
        """Test plan 0 asks for the ceiling with no paging keys."""
        planner = PagePlanner()
        first = next(planner.plans({"where": "Age > 30"}))

        assert first.page_index == 0
        assert first.page_number is None
        assert first.criteria == {"where": "Age > 30", "limit": 1000}

    def test_following_plans_advance_page_number(self):
        """Test plans 1.. carry pageNumber n+1 and pageSize at the ceiling."""
        planner = PagePlanner()
        plans = list(islice(planner.plans({"orderBy": "Name"}), 4))

        assert [plan.page_number for plan in plans] == [None, 2, 3, 4]
        assert [plan.page_index for plan in plans] == [0, 1, 2, 3]
        for plan in plans[1:]:
            assert plan.criteria["pageSize"] == 1000
            assert plan.criteria["limit"] == 1000
            assert plan.criteria["orderBy"] == "Name"

    def test_caller_paging_keys_discarded(self):
        """Test caller limit/pageNumber/pageSize never reach the plans."""
        planner = PagePlanner()
        criteria = {"limit": 5, "pageNumber": 9, "pageSize": 50, "select": "Name"}
        first, second = islice(planner.plans(criteria), 2)

        assert first.criteria == {"select": "Name", "limit": 1000}
        assert second.criteria["pageNumber"] == 2
        assert second.criteria["pageSize"] == 1000
        assert criteria["limit"] == 5

    def test_custom_ceiling(self):
        """Test the policy ceiling drives limit and pageSize."""
        planner = PagePlanner(PagePolicy(page_ceiling=10))
        first, second = islice(planner.plans(), 2)

        assert first.criteria == {"limit": 10}
        assert second.criteria == {"limit": 10, "pageNumber": 2, "pageSize": 10}

    def test_plans_do_not_share_criteria(self):
        """Test each plan owns its criteria dict."""
        planner = PagePlanner()
        first, second = islice(planner.plans(), 2)
        second.criteria["where"] = "x"
        assert "where" not in first.criteria


def test_policy_rejects_non_positive_ceiling():
    with pytest.raises(ValueError, match="page_ceiling"):
        PagePolicy(page_ceiling=0)
