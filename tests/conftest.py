from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

import pytest

from core.errors import AuthenticationError, RequestError, TeamNotFoundError
from models.data_models import Channel, Post, Team


NOW = datetime.now(timezone.utc)


def millis_ago(days: float) -> int:
    return int((NOW - timedelta(days=days)).timestamp() * 1000)


def make_channel(channel_id: str, age_days: float, display_name: str = None) -> Channel:
    return Channel(
        id=f"{channel_id}-id",
        name=channel_id,
        display_name=display_name or channel_id.upper(),
        create_at=millis_ago(age_days),
    )


def make_post(channel: Channel, age_days: float, post_type: str = "", post_id: str = None) -> Post:
    return Post(
        id=post_id or f"{channel.name}-{post_type or 'user'}-{age_days}",
        channel_id=channel.id,
        type=post_type,
        create_at=millis_ago(age_days),
    )


class FakeMattermostClient:
    """In-memory stand-in for MattermostClient that records every call"""

    def __init__(self, teams=(), channels=None, posts=None, archive_results=None,
                 failing_channel_pages=(), failing_post_channels=(), reject_login=False):
        self.teams = {team.name: team for team in teams}
        self.channels = channels or {}
        self.posts = posts or {}
        self.archive_results = archive_results or {}
        self.failing_channel_pages = set(failing_channel_pages)
        self.failing_post_channels = set(failing_post_channels)
        self.reject_login = reject_login

        self.channel_requests = []
        self.post_requests = []
        self.archived = []
        self.logins = 0
        self.logouts = 0
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    @contextmanager
    def session(self, username, password):
        if self.reject_login:
            raise AuthenticationError(f"Login as '{username}' rejected")
        self.logins += 1
        try:
            yield self
        finally:
            self.logouts += 1

    def get_team_by_name(self, name):
        if name not in self.teams:
            raise TeamNotFoundError(name, 404)
        return self.teams[name]

    def get_public_channels(self, team_id, page, per_page):
        self.channel_requests.append((team_id, page, per_page))
        if page in self.failing_channel_pages:
            raise RequestError("GET", f"/teams/{team_id}/channels", 500)
        channels = self.channels.get(team_id, [])
        return channels[page * per_page:(page + 1) * per_page]

    def get_channel_posts(self, channel_id, page, per_page):
        self.post_requests.append((channel_id, page, per_page))
        if channel_id in self.failing_post_channels:
            raise RequestError("GET", f"/channels/{channel_id}/posts", 500)
        posts = sorted(self.posts.get(channel_id, []), key=lambda p: p.create_at, reverse=True)
        return posts[page * per_page:(page + 1) * per_page]

    def archive_channel(self, channel_id):
        self.archived.append(channel_id)
        return self.archive_results.get(channel_id, True)


@pytest.fixture
def eng_team():
    return Team(id="eng-id", name="eng", display_name="Engineering")


@pytest.fixture
def eng_scenario(eng_team):
    """Team eng with one unused, one active and one young channel"""
    unused = make_channel("a", age_days=730)
    active = make_channel("b", age_days=730)
    young = make_channel("c", age_days=60)
    client = FakeMattermostClient(
        teams=[eng_team],
        channels={eng_team.id: [unused, active, young]},
        posts={
            unused.id: [make_post(unused, 500)],
            active.id: [make_post(active, 30), make_post(active, 20, "system_join_channel")],
        },
    )
    return client, unused, active, young
