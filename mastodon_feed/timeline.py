"""Home timeline fetching for Mastodon Feed."""

import requests

from .errors import DecodeError, UpstreamError
from .mastodon import MastodonAPI
from .models import Status

HOME_TIMELINE_PATH = "/api/v1/timelines/home"


class TimelineFetcher(MastodonAPI):
    """Fetches and decodes the authenticated user's home timeline."""

    component = "timeline"

    def fetch(self) -> list[Status]:
        """Fetch one page of the home timeline.

        Returns:
            Statuses in the order the origin returned them

        Raises:
            UpstreamError: If the origin cannot be reached or answers non-2xx
            DecodeError: If the body is not a JSON array of statuses
        """
        self.logger.info("Fetching home timeline", instance=self.base_url)

        response = self.request("GET", HOME_TIMELINE_PATH, "fetch timeline")
        if not 200 <= response.status_code < 300:
            self.logger.error(
                f"Timeline fetch failed (status {response.status_code})",
                status_code=response.status_code,
            )
            raise UpstreamError("fetch timeline", response.text, response.status_code)

        try:
            statuses = decode_timeline(response)
        except DecodeError as e:
            self.logger.warning(
                f"Timeline response could not be decoded: {e.body}",
                status_code=response.status_code,
            )
            raise

        self.logger.info(
            "Fetched home timeline",
            status_code=response.status_code,
            items_count=len(statuses),
        )
        return statuses


def decode_timeline(response: requests.Response) -> list[Status]:
    """Decode a timeline response body into Status objects.

    Raises:
        DecodeError: If the body is not valid JSON or not an array of statuses
    """
    try:
        payload = response.json()
    except ValueError as e:
        raise DecodeError("decode timeline", f"invalid JSON: {e}", response.status_code) from e

    if not isinstance(payload, list):
        raise DecodeError(
            "decode timeline",
            f"expected a JSON array, got {type(payload).__name__}",
            response.status_code,
        )

    try:
        return [Status.from_dict(entry) for entry in payload]
    except ValueError as e:
        raise DecodeError("decode timeline", str(e), response.status_code) from e
