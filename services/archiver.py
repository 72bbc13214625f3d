import logging
from datetime import datetime
from typing import Callable, List

from core.config import settings
from models.data_models import ArchiveOutcome, ArchiveRun
from services.activity import extract_unused_channels, one_year_before
from services.archive_executor import archive_each_channel
from services.paginator import fetch_all_public_channels


def format_result(outcome: ArchiveOutcome) -> str:
    result = "OK" if outcome.success else "NG"
    return f"Channel: ~{outcome.channel.name}({outcome.channel.display_name}), Result: {result}"


def report_archive_results(outcomes: List[ArchiveOutcome], echo: Callable[[str], None] = print):
    for outcome in outcomes:
        echo(format_result(outcome))


class UnusedChannelArchiver:
    """Finds the team's unused public channels and archives them"""

    def __init__(self, client, team_name: str, dry_run: bool = False,
                 channels_per_page: int = None, posts_per_page: int = None,
                 now: datetime = None, echo: Callable[[str], None] = print):
        self.client = client
        self.team_name = team_name
        self.dry_run = dry_run
        self.channels_per_page = channels_per_page or settings.CHANNELS_PER_PAGE
        self.posts_per_page = posts_per_page or settings.POSTS_PER_PAGE
        self.now = now
        self.echo = echo


    def execute(self) -> ArchiveRun:
        """Run the whole pipeline once against a logged-in client.

        Raises TeamNotFoundError when the team cannot be resolved and
        PageFetchError when the channel listing or a post history cannot be
        read completely; nothing is archived in either case.
        """
        team = self.client.get_team_by_name(self.team_name)
        logging.info(f"Resolved team {team.name} ({team.display_name}, {team.id})")

        cutoff = one_year_before(self.now)
        run = ArchiveRun(team=team, cutoff=cutoff, dry_run=self.dry_run)

        run.channels = fetch_all_public_channels(self.client, team, self.channels_per_page)
        run.unused_channels = extract_unused_channels(
            self.client, run.channels, cutoff, self.posts_per_page, echo=self.echo
        )

        if self.dry_run:
            self.echo("Dry Run mode")
            run.outcomes = [ArchiveOutcome(channel=ch, success=True) for ch in run.unused_channels]
            report_archive_results(run.outcomes, self.echo)
            return run

        run.outcomes = archive_each_channel(self.client, run.unused_channels)
        report_archive_results(run.outcomes, self.echo)

        if run.failed:
            logging.warning(f"{len(run.failed)} of {len(run.outcomes)} channels could not be archived")
        else:
            logging.info(f"Archived {len(run.outcomes)} channels")
        return run
