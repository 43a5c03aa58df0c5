from unittest import mock

import pytest

from crm_client import ClientConfig
from crm_client import InMemoryGateway
from crm_client import Session
from crm_client import Unauthorized
from crm_client.scripts import get_parser
from crm_client.scripts import run

MODULE = "crm_client.scripts"


@pytest.fixture
def config():
    return ClientConfig(contacts_page_size=2)


@pytest.fixture
def contacts_gateway():
    gateway = InMemoryGateway(
        [
            {
                "id": 1,
                "name": "John Smith",
                "email": "john@example.com",
                "status": "Lead",
            },
            {"id": 2, "name": "Jane Doe", "email": "", "status": "Customer"},
            {"id": 3, "name": "Johnny Cash", "email": "", "status": "Lead"},
        ]
    )
    with mock.patch(MODULE + ".ContactsGateway", return_value=gateway):
        yield gateway


@pytest.fixture
def activities_gateway():
    gateway = InMemoryGateway(
        [
            {
                "id": 1,
                "action": "create",
                "resource_type": "Contact",
                "resource_name": "Jan",
                "user": {"username": "piet"},
            },
        ]
    )
    with mock.patch(MODULE + ".ActivitiesGateway", return_value=gateway):
        yield gateway


def parse(*args):
    return get_parser().parse_args(["--token", "abc", *args])


async def test_contacts(config, contacts_gateway, capsys):
    assert await run(parse("contacts"), config) == 0

    assert capsys.readouterr().out.splitlines() == [
        "Johnny Cash [Lead]",
        "Jane Doe [Customer]",
        "Showing 2 of 3 contacts",
    ]


async def test_contacts_all(config, contacts_gateway, capsys):
    assert await run(parse("contacts", "--all"), config) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[2] == "John Smith <john@example.com> [Lead]"
    assert lines[-1] == "Showing 3 of 3 contacts"


async def test_contacts_filtered(config, contacts_gateway, capsys):
    assert await run(parse("contacts", "-s", "john", "--status", "Lead"), config) == 0

    assert capsys.readouterr().out.splitlines()[-1] == "Showing 2 of 2 contacts"


async def test_contacts_error(config, contacts_gateway, capsys):
    with mock.patch.object(
        contacts_gateway, "filter", side_effect=Unauthorized("Invalid token")
    ):
        assert await run(parse("contacts"), config) == 1

    assert capsys.readouterr().out == ""


async def test_activities(config, activities_gateway, capsys):
    assert await run(parse("activities", "--action", "create"), config) == 0

    assert capsys.readouterr().out.splitlines() == [
        "CREATE  Contact Jan by piet",
        "Showing 1 of 1 activities",
    ]


async def test_export(config, contacts_gateway, tmp_path):
    output = tmp_path / "out.csv"

    assert await run(parse("export", "-o", str(output)), config) == 0

    assert output.read_text().splitlines()[0] == "id,name,email,status"


async def test_not_logged_in(config):
    options = get_parser().parse_args(["--token", "", "contacts"])

    with pytest.raises(Unauthorized):
        await run(options, config)


async def test_login(config, capsys):
    auth_gateway = mock.Mock()
    auth_gateway.login = mock.AsyncMock(return_value=Session(access_token="abc"))
    with mock.patch(MODULE + ".AuthGateway", return_value=auth_gateway):
        assert await run(parse("login", "jan@example.com", "Secret1"), config) == 0

    auth_gateway.login.assert_awaited_once_with("jan@example.com", "Secret1")
    assert capsys.readouterr().out == "abc\n"


async def test_login_invalid_email(config, capsys):
    with mock.patch(MODULE + ".AuthGateway") as auth_gateway:
        assert await run(parse("login", "jan", "Secret1"), config) == 1

    assert not auth_gateway.called
    assert capsys.readouterr().err == "email: Email is invalid\n"
