"""Like, boost and reply forwarding for Mastodon Feed."""

from enum import Enum
from urllib.parse import quote

from .errors import UpstreamError
from .mastodon import MastodonAPI


class Action(str, Enum):
    """Write actions forwarded to the origin instance."""

    LIKE = "like"
    BOOST = "boost"
    REPLY = "reply"

    @property
    def past_tense(self) -> str:
        return {"like": "liked", "boost": "boosted", "reply": "replied"}[self.value]


class ActionProxy(MastodonAPI):
    """Forwards feed reader interactions to the origin instance."""

    component = "actions"

    def like(self, post_id: str) -> None:
        """Favourite a status."""
        self._post(Action.LIKE, post_id, f"/api/v1/statuses/{quote(post_id, safe='')}/favourite")

    def boost(self, post_id: str) -> None:
        """Reblog a status."""
        self._post(Action.BOOST, post_id, f"/api/v1/statuses/{quote(post_id, safe='')}/reblog")

    def reply(self, post_id: str, text: str) -> None:
        """Publish a public reply to a status.

        The text is forwarded as is, empty strings included; the origin is
        left to enforce its own limits.
        """
        payload = {
            "status": text,
            "in_reply_to_id": post_id,
            "visibility": "public",
        }
        self._post(Action.REPLY, post_id, "/api/v1/statuses", json=payload)

    def perform(self, action: Action | str, post_id: str, reply_text: str = "") -> str:
        """Run one action and return its past-tense name.

        Raises:
            ValueError: If the action is unknown or the post id is empty
            UpstreamError: If the origin rejects the call
        """
        action = Action(action)
        if not post_id:
            raise ValueError("Post ID required")

        if action is Action.LIKE:
            self.like(post_id)
        elif action is Action.BOOST:
            self.boost(post_id)
        else:
            self.reply(post_id, reply_text)
        return action.past_tense

    def _post(self, action: Action, post_id: str, path: str, **kwargs) -> None:
        what = f"{action.value} post"
        self.logger.info(
            f"Attempting to {action.value} post {post_id}",
            action=action.value,
            post_id=post_id,
            instance=self.base_url,
        )

        try:
            response = self.request("POST", path, what, **kwargs)
        except UpstreamError as e:
            self.logger.log_action(action.value, post_id, success=False, error=str(e))
            raise

        if response.status_code != 200:
            self.logger.log_action(
                action.value,
                post_id,
                success=False,
                status_code=response.status_code,
            )
            raise UpstreamError(what, response.text, response.status_code)

        self.logger.log_action(action.value, post_id, status_code=response.status_code)
