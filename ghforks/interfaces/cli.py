"""
Command line interface for git-ls-github-forks.

Fork URLs are the only thing written to standard output so the command
can feed other git plumbing; everything else goes to standard error.
"""

import asyncio
from typing import List, Optional

import click

from ghforks import NAME, __version__
from ..core import DiagnosticsSink, ForkLister
from ..models import ApiConfig, OutputFormat, RunConfig, SortOrder
from ..services import GitHubAPIService, RequestBuilder, resolve_remote_target
from ..infrastructure.error_handler import ForkListError, UsageError
from ..infrastructure.logger import logger, set_verbose


EXIT_SUCCESS = 0
EXIT_INTERRUPTED = 130


def build_service(api_config: ApiConfig) -> GitHubAPIService:
    return GitHubAPIService(api_config)


async def _report_rate_limit(api_config: ApiConfig, config: RunConfig) -> str:
    async with build_service(api_config) as service:
        lister = ForkLister(service, RequestBuilder(api_config), config)
        return await lister.report_rate_limit()


async def _list_forks(api_config: ApiConfig, config: RunConfig) -> None:
    target = resolve_remote_target(config.remote)

    with DiagnosticsSink() as sink:
        if config.verbose:
            click.echo(str(sink.path), err=True)

        async with build_service(api_config) as service:
            lister = ForkLister(service, RequestBuilder(api_config), config)
            await lister.list_forks(target, sink, emit=click.echo)


@click.command(
    name=NAME,
    context_settings={"help_option_names": ["--usage", "-h", "--help"]},
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.GIT.value,
    show_default=True,
    help="Display the URLs in the style of FORMAT.",
)
@click.option(
    "-n", "--name", "show_owner",
    is_flag=True,
    help="Display the owner of each fork after its URL.",
)
@click.option(
    "-s", "--sort", "sort_order",
    type=click.Choice([s.value for s in SortOrder]),
    default=SortOrder.NEWEST.value,
    show_default=True,
    help="Order in which GitHub returns the forks.",
)
@click.option(
    "-r", "--remote",
    metavar="NAME",
    default=None,
    help="Git remote pointing at the GitHub repository (default: git's choice).",
)
@click.option(
    "--rate-limit",
    is_flag=True,
    help=(
        "Show the remaining API requests and when the quota resets, then "
        "exit without listing forks. Does not count against the quota."
    ),
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Print the file holding the raw GitHub responses to standard error.",
)
@click.version_option(
    __version__, "--version", prog_name=NAME, message="%(prog)s %(version)s"
)
def cli(
    output_format: str,
    show_owner: bool,
    sort_order: str,
    remote: Optional[str],
    rate_limit: bool,
    verbose: bool
) -> int:
    """List the GitHub forks of the current git repository."""

    config = RunConfig(
        output_format=OutputFormat(output_format),
        sort_order=SortOrder(sort_order),
        show_owner=show_owner,
        verbose=verbose,
        remote=remote,
    )
    set_verbose(config.verbose)

    api_config = ApiConfig.from_environment()
    if not api_config.is_authenticated:
        logger.debug("No GitHub token found, sending anonymous requests")

    if rate_limit:
        click.echo(asyncio.run(_report_rate_limit(api_config, config)))
        return EXIT_SUCCESS

    asyncio.run(_list_forks(api_config, config))
    return EXIT_SUCCESS


def main(args: Optional[List[str]] = None) -> int:
    """Run the command and translate failures into exit codes."""

    try:
        return cli.main(args=args, prog_name=NAME, standalone_mode=False)

    except click.UsageError as e:
        error = UsageError(e.format_message())
        click.echo(f"error: {error}", err=True)
        if e.ctx is not None:
            click.echo(e.ctx.get_help(), err=True)
        return error.exit_code

    except ForkListError as e:
        logger.error(str(e))
        return e.exit_code

    except (click.Abort, KeyboardInterrupt):
        logger.error("interrupted")
        return EXIT_INTERRUPTED
