import pytest

from crm_client import CamelCaseMapper
from crm_client import Mapper


def test_mapper_identity():
    assert Mapper().to_internal({"a": 1}) == {"a": 1}
    assert Mapper().to_external({"a": 1}) == {"a": 1}


@pytest.fixture
def mapper():
    return CamelCaseMapper()


def test_to_internal(mapper):
    actual = mapper.to_internal(
        {
            "_id": "65a1",
            "__v": 0,
            "name": "Jan",
            "createdAt": "2024-01-01T00:00:00Z",
            "resourceType": "Contact",
        }
    )

    assert actual == {
        "id": "65a1",
        "name": "Jan",
        "created_at": "2024-01-01T00:00:00Z",
        "resource_type": "Contact",
    }


def test_to_external(mapper):
    actual = mapper.to_external({"id": 3, "name": "Jan", "confirm_password": "x"})

    assert actual == {"name": "Jan", "confirmPassword": "x"}


def test_nested_keys_unchanged(mapper):
    actual = mapper.to_internal({"userId": {"_id": "1", "username": "jan"}})

    assert actual == {"user_id": {"_id": "1", "username": "jan"}}
