import pytest

from crm_client import Activity
from crm_client import ActivityAction


@pytest.mark.parametrize(
    "action,expected", [("create", ActivityAction.CREATE), ("login", "login")]
)
def test_action(action, expected):
    activity = Activity(id=1, action=action)

    assert activity.action == expected
    assert type(activity.action) is type(expected)


@pytest.mark.parametrize("details", [None, "free text", {"field": "email"}, [1, 2]])
def test_details(details):
    assert Activity(id=1, action="update", details=details).details == details


def test_nested_user():
    activity = Activity(id=1, action="delete", user={"username": "jan"})

    assert activity.user.username == "jan"
    assert activity.action_name == "delete"
