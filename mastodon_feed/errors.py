"""Error types for Mastodon Feed."""


class MastodonFeedError(Exception):
    """Base class for all Mastodon Feed errors."""


class ConfigError(MastodonFeedError):
    """Required configuration is missing or invalid."""


class UpstreamError(MastodonFeedError):
    """The origin instance failed or answered with an unexpected status."""

    def __init__(self, what: str, body: str = "", status_code: int | None = None):
        self.what = what
        self.body = body
        self.status_code = status_code
        if status_code is None:
            message = f"{what} failed: {body}"
        else:
            message = f"{what} failed: {body} (status {status_code})"
        super().__init__(message)


class DecodeError(UpstreamError):
    """The origin instance returned JSON that could not be decoded."""
