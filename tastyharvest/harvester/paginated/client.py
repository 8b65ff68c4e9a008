from typing import Any

import requests

from tastyharvest.log import logger


class PageClient:
    """
    Fetches single pages from a paginated JSON API.

    Every failure degrades to an empty dict so that one bad page contributes
    no records instead of aborting the whole run.
    """

    def __init__(self, timeout: int = 60, session: requests.Session | None = None):
        """
        Initializes a page client.

        Args:
            timeout (int): Request timeout in seconds.
            session (requests.Session | None): Optional session used for
                connection pooling. Module level ``requests`` is used otherwise.
        """
        self.timeout = timeout
        self.session = session
        self.logger = logger.getChild(self.__class__.__name__)

    def fetch(self, url: str) -> dict[str, Any]:
        """
        Sends one GET request and returns the decoded JSON object.

        Args:
            url (str): The page URL.

        Returns:
            dict[str, Any]: The response body, or an empty dict on failure.
        """
        http = self.session if self.session is not None else requests
        try:
            response = http.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            self.logger.warning(f"Failed to fetch {url}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(f"Unexpected response body from {url}, ignoring")
            return {}
        return data
