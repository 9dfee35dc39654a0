"""Unit tests for the like/boost/reply proxy."""

import pytest
import requests

from conftest import mock_response
from mastodon_feed.actions import Action, ActionProxy
from mastodon_feed.errors import UpstreamError

BASE = "https://fosstodon.example"


class TestActionProxyUnit:
    """Unit tests for ActionProxy."""

    def test_like_posts_to_favourite(self, proxy):
        proxy.session.request.return_value = mock_response(200)

        assert proxy.perform(Action.LIKE, "42") == "liked"

        proxy.session.request.assert_called_once_with(
            "POST", f"{BASE}/api/v1/statuses/42/favourite", timeout=10.0
        )

    def test_boost_posts_to_reblog(self, proxy):
        proxy.session.request.return_value = mock_response(200)

        assert proxy.perform("boost", "42") == "boosted"

        proxy.session.request.assert_called_once_with(
            "POST", f"{BASE}/api/v1/statuses/42/reblog", timeout=10.0
        )

    def test_reply_posts_public_status(self, proxy):
        proxy.session.request.return_value = mock_response(200)

        assert proxy.perform(Action.REPLY, "42", "nice post") == "replied"

        proxy.session.request.assert_called_once_with(
            "POST",
            f"{BASE}/api/v1/statuses",
            timeout=10.0,
            json={"status": "nice post", "in_reply_to_id": "42", "visibility": "public"},
        )

    def test_empty_reply_is_forwarded(self, proxy):
        proxy.session.request.return_value = mock_response(200)

        proxy.reply("42", "")

        _, kwargs = proxy.session.request.call_args
        assert kwargs["json"]["status"] == ""

    def test_repeated_like_calls_upstream_twice(self, proxy):
        proxy.session.request.return_value = mock_response(200)

        proxy.like("42")
        proxy.like("42")

        assert proxy.session.request.call_count == 2

    @pytest.mark.parametrize("status_code", [201, 403, 404, 500])
    def test_non_200_is_failure(self, proxy, status_code):
        proxy.session.request.return_value = mock_response(
            status_code, text='{"error":"Record not found"}'
        )

        with pytest.raises(UpstreamError) as exc_info:
            proxy.boost("42")

        assert exc_info.value.status_code == status_code
        assert "Record not found" in str(exc_info.value)
        assert str(exc_info.value).startswith("boost post failed")

    def test_network_failure(self, proxy):
        proxy.session.request.side_effect = requests.Timeout("read timed out")

        with pytest.raises(UpstreamError, match="read timed out"):
            proxy.like("42")

    def test_unknown_action(self, proxy):
        with pytest.raises(ValueError):
            proxy.perform("delete", "42")
        proxy.session.request.assert_not_called()

    def test_missing_post_id(self, proxy):
        with pytest.raises(ValueError, match="Post ID required"):
            proxy.perform(Action.LIKE, "")
        proxy.session.request.assert_not_called()

    def test_token_is_sent(self, mastodon_config):
        assert ActionProxy(mastodon_config).session.headers["Authorization"] == (
            "Bearer secret-token-123"
        )

    @pytest.mark.parametrize(
        "action,suffix", [(Action.LIKE, "favourite"), (Action.BOOST, "reblog")]
    )
    def test_reserved_characters_in_post_id_are_encoded(self, proxy, action, suffix):
        proxy.session.request.return_value = mock_response(200)

        proxy.perform(action, "42?x=1#/../")

        (method, url), _ = proxy.session.request.call_args
        assert url == f"{BASE}/api/v1/statuses/42%3Fx%3D1%23%2F..%2F/{suffix}"

    def test_reply_keeps_raw_id_in_payload(self, proxy):
        proxy.session.request.return_value = mock_response(200)

        proxy.reply("42?x", "hi")

        (method, url), kwargs = proxy.session.request.call_args
        assert url == f"{BASE}/api/v1/statuses"
        assert kwargs["json"]["in_reply_to_id"] == "42?x"

    def test_context_manager_closes_session(self, proxy):
        proxy.session.request.return_value = mock_response(500, text="boom")

        with pytest.raises(UpstreamError):
            with proxy:
                proxy.like("42")

        proxy.session.close.assert_called_once()
