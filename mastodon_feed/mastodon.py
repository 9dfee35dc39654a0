"""HTTP session shared by the components that talk to the origin instance."""

import requests

from .config import MastodonConfig
from .errors import UpstreamError
from .logging_config import create_execution_logger

USER_AGENT = "Mastodon-Feed/1.0 (Home timeline to RSS bridge)"


class MastodonAPI:
    """Authenticated access to a Mastodon-compatible instance."""

    component = "mastodon"

    def __init__(self, config: MastodonConfig, execution_id: str | None = None):
        """Initialize the API session.

        Args:
            config: Origin instance configuration
            execution_id: Execution ID for logging context
        """
        self.base_url = config.instance_url.rstrip("/")
        self.timeout = config.timeout
        self.logger = create_execution_logger(self.component, execution_id)
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": USER_AGENT,
                "Authorization": f"Bearer {config.access_token}",
            }
        )

    def close(self) -> None:
        """Release the session's pooled connections."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def request(self, method: str, path: str, what: str, **kwargs) -> requests.Response:
        """Send one request to the origin instance.

        Network failures are converted into UpstreamError; status codes are
        left for the caller to judge.

        Raises:
            UpstreamError: If the request could not be completed
        """
        url = self.url_for(path)
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            self.logger.error(f"{what} request error: {e}", instance=self.base_url)
            raise UpstreamError(what, str(e)) from e
