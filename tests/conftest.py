"""Shared fixtures for Mastodon Feed tests."""

import os
from unittest.mock import Mock, patch

import pytest

from mastodon_feed.actions import ActionProxy
from mastodon_feed.config import Config, MastodonConfig
from mastodon_feed.timeline import TimelineFetcher

TEST_ENV = {
    "MASTODON_INSTANCE": "https://fosstodon.example",
    "MASTODON_TOKEN": "secret-token-123",
    "HOME_INSTANCE": "mastodon.social",
}


def status_dict(
    status_id="1",
    content="<p>hello</p>",
    display_name="Alice",
    acct="alice",
    url=None,
    media=None,
    reblog=None,
    created_at="2024-01-01T10:00:00.000Z",
):
    """Build one status object shaped like the Mastodon API returns it."""
    return {
        "id": status_id,
        "content": content,
        "created_at": created_at,
        "url": url if url is not None else f"https://fosstodon.example/@{acct}/{status_id}",
        "account": {
            "display_name": display_name,
            "acct": acct,
            "avatar": f"https://fosstodon.example/avatars/{acct}.png",
        },
        "media_attachments": media or [],
        "reblog": reblog,
    }


def mock_response(status_code=200, json_data=None, text=None):
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.text = text if text is not None else ""
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def mastodon_config():
    return MastodonConfig(
        instance_url="https://fosstodon.example",
        access_token="secret-token-123",
        timeout=10.0,
    )


@pytest.fixture
def config():
    with patch.dict(os.environ, TEST_ENV, clear=True):
        return Config()


@pytest.fixture
def fetcher(mastodon_config):
    fetcher = TimelineFetcher(mastodon_config)
    fetcher.session = Mock()
    return fetcher


@pytest.fixture
def proxy(mastodon_config):
    proxy = ActionProxy(mastodon_config)
    proxy.session = Mock()
    return proxy
