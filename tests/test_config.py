import pytest

from crm_client import BadRequest
from crm_client import ClientConfig
from crm_client import Session
from crm_client.api_client import ApiProvider


def test_defaults():
    config = ClientConfig.from_env({})

    assert str(config.api_url) == "http://localhost:5000/api"
    assert config.contacts_page_size == 10
    assert config.activities_page_size == 20
    assert config.search_debounce == 0.5
    assert config.timeout == 5.0
    assert config.retries == 3


def test_from_env():
    config = ClientConfig.from_env(
        {
            "CRM_API_URL": "https://crm.example.com/api/",
            "CRM_CONTACTS_PAGE_SIZE": "25",
            "CRM_SEARCH_DEBOUNCE": "0.2",
            "CRM_RETRIES": "",
            "OTHER": "x",
        }
    )

    assert str(config.api_url) == "https://crm.example.com/api/"
    assert config.contacts_page_size == 25
    assert config.search_debounce == 0.2
    assert config.retries == 3


@pytest.mark.parametrize(
    "environ",
    [
        {"CRM_API_URL": "not a url"},
        {"CRM_CONTACTS_PAGE_SIZE": "0"},
        {"CRM_TIMEOUT": "-1"},
    ],
)
def test_from_env_invalid(environ):
    with pytest.raises(BadRequest):
        ClientConfig.from_env(environ)


def test_provider():
    provider = ClientConfig().provider(Session(access_token="abc"))

    assert isinstance(provider, ApiProvider)
    assert provider._url == "http://localhost:5000/api/"
    assert provider._timeout == 5.0
    assert provider._headers_factory is not None


def test_provider_without_session():
    assert ClientConfig().provider()._headers_factory is None
