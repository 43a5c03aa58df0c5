from unittest import mock

import pytest

from crm_client import Session
from crm_client import Unauthorized
from crm_client import User
from crm_client.api_client import ApiException
from crm_client.api_client import ApiProvider
from crm_client.api_client import AuthGateway

LOGIN_RESPONSE = {
    "accessToken": "abc",
    "refreshToken": "def",
    "user": {"_id": "u1", "username": "jan", "email": "jan@example.com"},
}


@pytest.fixture
def api_provider():
    return mock.MagicMock(spec_set=ApiProvider)


@pytest.fixture
def gateway(api_provider):
    return AuthGateway(api_provider)


async def test_login(gateway: AuthGateway, api_provider):
    api_provider.request.return_value = LOGIN_RESPONSE

    actual = await gateway.login("jan@example.com", "Secret1")

    api_provider.request.assert_called_once_with(
        "POST",
        "auth/login",
        json={"email": "jan@example.com", "password": "Secret1"},
        error_message="Login failed",
    )
    assert actual == Session(
        access_token="abc",
        refresh_token="def",
        user=User(id="u1", username="jan", email="jan@example.com"),
    )


async def test_login_rejected(gateway: AuthGateway, api_provider):
    api_provider.request.side_effect = Unauthorized("Invalid credentials")

    with pytest.raises(Unauthorized, match="Invalid credentials"):
        await gateway.login("jan@example.com", "wrong")


async def test_login_no_token(gateway: AuthGateway, api_provider):
    api_provider.request.return_value = {"user": {"_id": "u1"}}

    with pytest.raises(ApiException):
        await gateway.login("jan@example.com", "Secret1")


async def test_signup(gateway: AuthGateway, api_provider):
    api_provider.request.return_value = {"accessToken": "abc"}

    actual = await gateway.signup("jan", "jan@example.com", "Secret1")

    assert api_provider.request.call_args[1]["json"] == {
        "username": "jan",
        "email": "jan@example.com",
        "password": "Secret1",
    }
    assert actual == Session(access_token="abc")


async def test_logout(gateway: AuthGateway, api_provider):
    await gateway.logout(Session(access_token="abc", refresh_token="def"))

    api_provider.request.assert_called_once_with(
        "POST",
        "auth/logout",
        json={"refreshToken": "def"},
        error_message="Logout failed",
    )


async def test_logout_without_refresh_token(gateway: AuthGateway, api_provider):
    await gateway.logout(Session(access_token="abc"))

    assert not api_provider.request.called
