"""
Mattermost Unused Channel Archiver - archives public channels nobody has written in for a year
"""


import logging
from typing import Optional

import typer

from core.config import settings
from core.errors import ArchiverError
from core.logging import configure_logging
from services.archiver import UnusedChannelArchiver
from services.mattermost_client import MattermostClient


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ARCHIVE_FAILED = 3

USAGE = "mattermost-archiver -u username -p password -s server-url -t teamname [-d]"


app = typer.Typer(add_completion=False, help="Archive public channels without user posts for one year.")


@app.command()
def main(
    ctx: typer.Context,
    username: Optional[str] = typer.Option(None, "--username", "-u", help="User name used to log in to Mattermost"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Password used to log in to Mattermost"),
    server: Optional[str] = typer.Option(None, "--server", "-s", help="Mattermost URL (https://your-mattermost-host)"),
    teamname: Optional[str] = typer.Option(None, "--teamname", "-t", help="Target team name"),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Display archive target channels and exit (don't run archive)"),
):
    """Main entry point"""
    username = username or settings.MATTERMOST_USERNAME
    password = password or settings.MATTERMOST_PASSWORD
    server = server or settings.MATTERMOST_URL
    teamname = teamname or settings.MATTERMOST_TEAM

    if not all([username, password, server, teamname]):
        typer.echo(f"usage: {USAGE}", err=True)
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(EXIT_ERROR)

    configure_logging()

    try:
        with MattermostClient(server) as client, client.session(username, password):
            archiver = UnusedChannelArchiver(client, teamname, dry_run=dry_run, echo=typer.echo)
            run = archiver.execute()
    except ArchiverError as e:
        logging.error(f"Archive run aborted: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_ERROR) from e

    if run.failed:
        raise typer.Exit(EXIT_ARCHIVE_FAILED)
    raise typer.Exit(EXIT_OK)




if __name__ == "__main__":
    app()
