#!/usr/bin/env python3

import sys
from pathlib import Path

import click
from rich.console import Console

from repochangelog import __version__
from repochangelog.changelog_file import find_changelog, read_previous, write_changelog
from repochangelog.config import (
    MergeFilter,
    build_changelog_config,
    configure_logging,
    load_config,
    logger,
)
from repochangelog.domain.section import RenderMode
from repochangelog.exit_codes import (
    GENERAL_ERROR,
    INTERRUPTED,
    SUCCESS,
    CommandError,
    ConfigError,
    get_exit_code_for_exception,
)
from repochangelog.infra.git_client import GitClient
from repochangelog.services.changelog_service import ChangelogService
from repochangelog.services.range_selector import SelectionRequest

err_console = Console(stderr=True)


def _print_help(ctx, param, value):
    """Print help and exit with GENERAL_ERROR."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help())
    ctx.exit(GENERAL_ERROR)


@click.command(context_settings={"help_option_names": []})
@click.argument("changelog", required=False, type=click.Path(dir_okay=False))
@click.option("-a", "--all", "list_all", is_flag=True,
              help="Retrieve all commits (ignores start/final bounds)")
@click.option("-l", "--list", "list_style", is_flag=True,
              help="Show commits as a plain list, without titles")
@click.option("-t", "--tag", "title", default=None,
              help="Label for the commits since the newest tag (default: n.n.n)")
@click.option("-f", "--final-tag", default=None, help="Newest tag to include")
@click.option("-s", "--start-tag", default=None, help="Oldest tag to include")
@click.option("--start-commit", default=None,
              help="Oldest commit to include (excludes --start-tag)")
@click.option("-n", "--no-merges", is_flag=True, help="Exclude merge commits")
@click.option("-m", "--merges-only", is_flag=True,
              help="Only merge commits, with their message body")
@click.option("-p", "--prune-old", is_flag=True,
              help="Replace the existing changelog instead of appending to it")
@click.option("-x", "--stdout", "to_stdout", is_flag=True,
              help="Write to stdout instead of the changelog file")
@click.option("--edit/--no-edit", default=None,
              help="Open the result in $EDITOR before saving")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.option("-h", "--help", is_flag=True, is_eager=True, expose_value=False,
              callback=_print_help, help="Show this message and exit")
@click.version_option(version=__version__, prog_name="repochangelog")
def changelog_cmd(changelog, list_all, list_style, title, final_tag, start_tag,
                  start_commit, no_merges, merges_only, prune_old, to_stdout,
                  edit, verbose):
    """repochangelog - Generate a changelog from git history.

    Commits are grouped into sections bounded by release tags, newest
    first. Previous changelog content is kept after the new sections.
    """
    try:
        run(
            changelog=changelog,
            request=SelectionRequest(
                list_all=list_all,
                start_tag=start_tag,
                start_commit=start_commit,
                final_tag=final_tag,
            ),
            mode=RenderMode.PLAIN if list_style else RenderMode.TITLED,
            title=title,
            no_merges=no_merges,
            merges_only=merges_only,
            prune=prune_old,
            to_stdout=to_stdout,
            edit=edit,
            verbose=verbose,
        )
    except KeyboardInterrupt:
        err_console.print("[red]Interrupted by user[/red]")
        sys.exit(INTERRUPTED)
    except CommandError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(e.exit_code)
    except OSError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(get_exit_code_for_exception(e))
    sys.exit(SUCCESS)


def run(changelog, request, mode, title=None, no_merges=False, merges_only=False,
        prune=False, to_stdout=False, edit=None, verbose=False, cwd=None):
    """Generate the changelog and write it to stdout or the changelog file."""
    if no_merges and merges_only:
        raise ConfigError("--no-merges and --merges-only cannot be used together")

    config = load_config()
    configure_logging(config, verbose=verbose)

    if merges_only:
        merge_filter = MergeFilter.MERGES_ONLY
    elif no_merges:
        merge_filter = MergeFilter.NO_MERGES
    else:
        merge_filter = MergeFilter.ALL

    git = GitClient(cwd=cwd)
    settings = build_changelog_config(
        config, git_config=git.config_value, merge_filter=merge_filter, title=title
    )

    if changelog:
        path = Path(changelog)
    else:
        path = find_changelog(cwd or ".", settings.default_filename)
    previous = "" if prune else read_previous(path)

    service = ChangelogService(settings, git_client=git)
    content = service.build(request, mode=mode, previous=previous, prune=prune)

    if to_stdout:
        click.echo(content, nl=False)
        return

    open_editor = settings.open_editor if edit is None else edit
    write_changelog(path, content, open_editor=open_editor, editor=settings.editor)
    logger.info(f"Changelog written to {path}")


def main():
    changelog_cmd()


if __name__ == "__main__":
    main()
