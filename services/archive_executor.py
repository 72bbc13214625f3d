import logging
from typing import Iterable, List

from models.data_models import ArchiveOutcome, Channel


def archive_channel(client, channel: Channel) -> ArchiveOutcome:
    success = client.archive_channel(channel.id)
    if success:
        logging.info(f"Archived ~{channel.name} ({channel.id})")
    else:
        logging.warning(f"Archiving ~{channel.name} ({channel.id}) failed")
    return ArchiveOutcome(channel=channel, success=success)


def archive_each_channel(client, channels: Iterable[Channel]) -> List[ArchiveOutcome]:
    """Archive channels one by one; a failure never stops the rest"""
    return [archive_channel(client, channel) for channel in channels]
