"""Command line entry point: dump a MediaWiki list as JSON lines."""

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from itertools import islice

import click
from tqdm import tqdm

from .client import RequestsTransport
from .config import settings
from .errors import ContinuationLoopError, EnumerationCancelled, WikiClientError
from .lists import (
    AllPagesGenerator,
    CategoryMembersGenerator,
    LogEventsList,
    RecentChangesGenerator,
    SearchGenerator,
)
from .log import config_console_logger, config_file_logger
from .paging import CancellationToken, CompatibilityOptions, ContinuationLoopBehavior

logger = logging.getLogger(__name__)

EXIT_CONTINUATION_LOOP = 2
EXIT_INTERRUPTED = 130


def _to_json(item) -> str:
    if dataclasses.is_dataclass(item):
        item = dataclasses.asdict(item)
        item.pop("raw", None)
    return json.dumps(item, ensure_ascii=False, default=str)


@click.group()
@click.option("--api-url", default=None, help="MediaWiki api.php endpoint.")
@click.option("--batch-size", type=click.IntRange(min=1), default=None, help="Items requested per API call.")
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Stop after this many items.")
@click.option("--fetch-more/--no-fetch-more", default=False,
              help="Retry a stuck continuation once with a larger batch instead of failing.")
@click.option("--progress", is_flag=True, help="Show a progress bar on stderr.")
@click.option("-v", "--verbose", count=True, help="-v for info, -vv for debug logging.")
@click.pass_context
def cli(ctx, api_url, batch_size, limit, fetch_more, progress, verbose):
    """Enumerate MediaWiki lists."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    config_console_logger(level, stream=sys.stderr)
    if settings.log_path:
        config_file_logger(settings.log_path, level)

    behavior = ContinuationLoopBehavior.FETCH_MORE if fetch_more else ContinuationLoopBehavior.THROW
    ctx.obj = {
        "api_url": api_url or settings.api_url,
        "batch_size": batch_size,
        "limit": limit,
        "progress": progress,
        "compatibility_options": CompatibilityOptions(continuation_loop_behavior=behavior),
    }


def _run(ctx, factory) -> None:
    """Build the list with ``factory(transport, **list_kwargs)`` and write its items."""
    options = ctx.obj
    transport = RequestsTransport(api_url=options["api_url"])
    token = CancellationToken()

    try:
        wiki_list = factory(
            transport,
            pagination_size=options["batch_size"],
            compatibility_options=options["compatibility_options"],
        )
        logger.debug(f"Enumerating {wiki_list!r} from {options['api_url']}")
        items = wiki_list.enum_items(cancellation_token=token)
        if options["limit"] is not None:
            items = islice(items, options["limit"])
        if options["progress"]:
            items = tqdm(items, total=options["limit"], desc=repr(wiki_list), unit="item")
        for item in items:
            click.echo(_to_json(item))
    except KeyboardInterrupt:
        token.cancel()
        click.echo("Interrupted.", err=True)
        ctx.exit(EXIT_INTERRUPTED)
    except EnumerationCancelled:
        ctx.exit(EXIT_INTERRUPTED)
    except ContinuationLoopError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo("Hint: the wiki is stuck on one continuation marker; try again with --fetch-more.", err=True)
        ctx.exit(EXIT_CONTINUATION_LOOP)
    except (WikiClientError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        transport.close()


@cli.command("allpages")
@click.option("--namespace", type=int, default=0, show_default=True)
@click.option("--start", "start_title", default="!", show_default=True, help="Title to start from.")
@click.option("--prefix", default=None, help="Only titles starting with this prefix.")
@click.pass_context
def allpages(ctx, namespace, start_title, prefix):
    """All pages of one namespace."""
    _run(ctx, lambda transport, **kwargs: AllPagesGenerator(
        transport, namespace=namespace, start_title=start_title, prefix=prefix, **kwargs))


@cli.command("categorymembers")
@click.argument("category")
@click.option("--type", "member_types", multiple=True,
              type=click.Choice(["page", "subcat", "file"]), help="Repeatable; all types by default.")
@click.pass_context
def categorymembers(ctx, category, member_types):
    """Members of CATEGORY."""
    _run(ctx, lambda transport, **kwargs: CategoryMembersGenerator(
        transport, category, member_types=member_types or ("page", "subcat", "file"), **kwargs))


@cli.command("recentchanges")
@click.option("--namespace", "namespaces", type=int, multiple=True)
@click.option("--user", "user_name", default=None)
@click.option("--oldest-first", is_flag=True)
@click.pass_context
def recentchanges(ctx, namespaces, user_name, oldest_first):
    """Recent changes, newest first."""
    _run(ctx, lambda transport, **kwargs: RecentChangesGenerator(
        transport, time_ascending=oldest_first, namespaces=namespaces or None, user_name=user_name, **kwargs))


@cli.command("search")
@click.argument("keyword")
@click.option("--namespace", "namespaces", type=int, multiple=True, help="Repeatable; main namespace by default.")
@click.pass_context
def search(ctx, keyword, namespaces):
    """Full text search for KEYWORD."""
    _run(ctx, lambda transport, **kwargs: SearchGenerator(
        transport, keyword, namespaces=namespaces or (0,), **kwargs))


@cli.command("logevents")
@click.option("--type", "log_type", default=None, help="Log type, e.g. delete or move.")
@click.option("--action", "log_action", default=None, help="Log action within --type.")
@click.option("--user", "user_name", default=None)
@click.option("--oldest-first", is_flag=True)
@click.pass_context
def logevents(ctx, log_type, log_action, user_name, oldest_first):
    """Log events, newest first."""
    _run(ctx, lambda transport, **kwargs: LogEventsList(
        transport, time_ascending=oldest_first, log_type=log_type, log_action=log_action,
        user_name=user_name, **kwargs))


def main():
    cli(prog_name="wikiclient")


if __name__ == "__main__":
    main()
