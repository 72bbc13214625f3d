import logging
from datetime import datetime, timezone
from typing import Callable, List

from models.data_models import Channel
from services.paginator import iter_posts_since, to_epoch_millis


def one_year_before(now: datetime = None) -> datetime:
    """Same calendar instant one year earlier; 29 February maps to the 28th"""
    now = now or datetime.now(timezone.utc)
    try:
        return now.replace(year=now.year - 1)
    except ValueError:
        return now.replace(year=now.year - 1, day=28)


def has_user_post_since(client, channel: Channel, since: datetime, per_page: int) -> bool:
    """Check for at least one authored post at or after since"""
    for post in iter_posts_since(client, channel, since, per_page):
        if post.is_user_message:
            logging.info(f"Found post in ~{channel.name}: {post.id} by {post.user_id} at {post.create_at}")
            return True
    return False


def is_unused(client, channel: Channel, cutoff: datetime, per_page: int) -> bool:
    """
    A channel is unused when it was created before the cutoff and nobody has
    written in it since. Channels younger than the cutoff are never unused and
    their history is not queried. System events (joins, leaves, header
    changes) do not count as activity.
    """
    if channel.create_at >= to_epoch_millis(cutoff):
        logging.debug(f"~{channel.name} is younger than the inactivity window")
        return False
    return not has_user_post_since(client, channel, cutoff, per_page)


def extract_unused_channels(client, channels: List[Channel], cutoff: datetime, per_page: int,
                            echo: Callable[[str], None] = print) -> List[Channel]:
    """Filter channels down to the unused ones, keeping their order"""
    unused = []
    for channel in channels:
        echo(f"Checking channel: ~{channel.name}({channel.display_name}), created {channel.created.isoformat()}")
        if is_unused(client, channel, cutoff, per_page):
            unused.append(channel)

    logging.info(f"{len(unused)} of {len(channels)} channels unused since {cutoff.isoformat()}")
    return unused
