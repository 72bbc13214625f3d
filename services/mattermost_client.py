import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

import httpx

from core.config import settings
from core.errors import AuthenticationError, RequestError, TeamNotFoundError
from models.data_models import Channel, Post, Team


API_PREFIX = "/api/v4"


class MattermostClient:
    """Minimal blocking client for the Mattermost REST API v4"""

    def __init__(self, server_url: str, timeout: float = None, transport: httpx.BaseTransport = None):
        self.server_url = server_url.rstrip("/")
        self.token: Optional[str] = None
        self.http = httpx.Client(
            base_url=self.server_url + API_PREFIX,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
            headers={"X-Requested-With": "XMLHttpRequest"},
        )

    def __enter__(self) -> "MattermostClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.http.close()


    @contextmanager
    def session(self, username: str, password: str) -> Iterator["MattermostClient"]:
        """Log in for the duration of the block and always log out afterwards.

        A rejected login raises AuthenticationError before the block is entered,
        in which case there is nothing to log out of.
        """
        self.login(username, password)
        try:
            yield self
        finally:
            self.logout()

    def login(self, username: str, password: str):
        """Authenticate and keep the session token for later requests"""
        try:
            response = self.http.post("/users/login", json={"login_id": username, "password": password})
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Could not reach {self.server_url}: {e}") from e

        token = response.headers.get("Token")
        if response.status_code != 200 or not token:
            raise AuthenticationError(
                f"Login as '{username}' rejected by {self.server_url} (status {response.status_code})"
            )

        user = response.json()
        self.token = token
        self.http.headers["Authorization"] = f"Bearer {token}"
        logging.info(f"Logged in to {self.server_url} as {username} ({user.get('id')})")

    def logout(self):
        """Release the session token; failures are logged, never raised"""
        if self.token is None:
            return
        try:
            response = self.http.post("/users/logout")
            if response.status_code != 200:
                logging.warning(f"Logout returned status {response.status_code}")
        except httpx.HTTPError as e:
            logging.warning(f"Logout failed: {e}")
        finally:
            self.token = None
            self.http.headers.pop("Authorization", None)
            logging.info("Logged out")


    def get_team_by_name(self, name: str) -> Team:
        try:
            data = self._request("GET", f"/teams/name/{name}")
        except RequestError as e:
            raise TeamNotFoundError(name, e.status_code) from e
        return Team.from_api(data)

    def get_public_channels(self, team_id: str, page: int, per_page: int) -> List[Channel]:
        """Get one page of the team's public channels"""
        data = self._request(
            "GET",
            f"/teams/{team_id}/channels",
            params={"page": page, "per_page": per_page},
        )
        return [Channel.from_api(item) for item in data or []]

    def get_channel_posts(self, channel_id: str, page: int, per_page: int) -> List[Post]:
        """Get one page of a channel's posts, newest first"""
        data = self._request(
            "GET",
            f"/channels/{channel_id}/posts",
            params={"page": page, "per_page": per_page},
        )
        posts = data.get("posts") or {}
        order = data.get("order") or list(posts)
        return [Post.from_api(posts[post_id]) for post_id in order if post_id in posts]

    def archive_channel(self, channel_id: str) -> bool:
        """Archive (soft-delete) a channel, reporting success as a boolean"""
        try:
            data = self._request("DELETE", f"/channels/{channel_id}")
        except RequestError as e:
            logging.error(f"Error archiving channel {channel_id}: {e}")
            return False
        return isinstance(data, dict) and data.get("status") == "OK"


    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise RequestError(method, path, detail=str(e)) from e

        if response.is_error:
            raise RequestError(method, path, response.status_code, self._error_detail(response))

        try:
            return response.json()
        except ValueError as e:
            raise RequestError(method, path, response.status_code, "response is not JSON") from e

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text[:200]
        return data.get("message", "") if isinstance(data, dict) else ""
