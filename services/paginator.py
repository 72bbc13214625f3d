import logging
from datetime import datetime
from functools import partial
from typing import Callable, Iterator, List, TypeVar

from core.errors import PageFetchError, RequestError
from models.data_models import Channel, Post, Team


T = TypeVar("T")


def iter_pages(fetch_page: Callable[[int, int], List[T]], per_page: int) -> Iterator[List[T]]:
    """Yield successive pages until one comes back shorter than per_page.

    A full page is always followed by one more request, since it may or may not
    be the last one. A failing page raises PageFetchError with everything
    yielded before it.
    """
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")

    fetched: List[T] = []
    page = 0
    while True:
        try:
            items = fetch_page(page, per_page)
        except RequestError as e:
            raise PageFetchError(page, fetched, e) from e

        fetched.extend(items)
        yield items
        if len(items) < per_page:
            return
        page += 1


def fetch_all_public_channels(client, team: Team, per_page: int) -> List[Channel]:
    """Get every public channel of the team, in server order"""
    channels: List[Channel] = []
    for items in iter_pages(partial(client.get_public_channels, team.id), per_page):
        channels.extend(items)

    logging.info(f"Fetched {len(channels)} public channels for team {team.name}")
    return channels


def iter_posts_since(client, channel: Channel, since: datetime, per_page: int) -> Iterator[Post]:
    """Yield the channel's posts created at or after since, newest first.

    Stops requesting pages once a page reaches posts older than since.
    """
    since_ms = to_epoch_millis(since)
    for posts in iter_pages(partial(client.get_channel_posts, channel.id), per_page):
        reached_older = False
        for post in posts:
            if post.create_at >= since_ms:
                yield post
            else:
                reached_older = True
        if reached_older:
            return


def to_epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)
