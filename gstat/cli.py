import logging
import sys
from pathlib import Path

import click

from gstat import git_ops
from gstat.errors import GstatError
from gstat.status import current_gitstatus

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(name)s: %(levelname)s: %(message)s"


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _load_lines(source: str, directory: Path, git: str) -> list[str]:
    if source == "stdin":
        return git_ops.read_lines(sys.stdin)
    if source == "auto" and git_ops.stdin_has_input(sys.stdin):
        lines = git_ops.read_lines(sys.stdin)
        if lines:
            return lines
        logger.debug("stdin was ready but empty, falling back to git")
    return git_ops.status_lines(cwd=directory, git=git)


@click.group(context_settings={"help_option_names": ["-h", "--help"]}, invoke_without_command=True)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Run as if started in this directory.",
)
@click.option(
    "--input",
    "source",
    type=click.Choice(["auto", "stdin", "git"]),
    default="auto",
    show_default=True,
    envvar="GSTAT_INPUT",
    help="Where to read porcelain status from; auto uses piped stdin when ready.",
)
@click.option("--git", default="git", show_default=True, envvar="GSTAT_GIT", help="git executable.")
@click.option("--debug", is_flag=True, envvar="GSTAT_DEBUG", help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, directory: Path | None, source: str, git: str, debug: bool) -> None:
    """gstat: print a one-line git status summary for shell prompts."""
    if ctx.invoked_subcommand is not None:
        return
    _configure_logging(debug)

    directory = (directory or Path.cwd()).absolute()
    try:
        lines = _load_lines(source, directory, git)
        line = current_gitstatus(lines, start=directory)
    except GstatError as exc:
        click.echo(f"gstat: {exc}", err=True)
        raise SystemExit(1)

    click.echo(line)


@main.command("shell-init")
def shell_init() -> None:
    """Print shell helpers that split gstat output into prompt variables."""
    helper = r'''gstat_prompt_vars() {
  local out
  out="$(command gstat --input git 2>/dev/null)" || return $?
  # an empty upstream leaves two adjacent spaces
  out="${out//  / : }"
  read -r GIT_BRANCH GIT_AHEAD GIT_BEHIND GIT_STAGED GIT_CONFLICTS GIT_CHANGED \
    GIT_UNTRACKED GIT_STASHED GIT_LOCAL_ONLY GIT_UPSTREAM GIT_MERGING GIT_REBASE <<< "$out"
  [ "$GIT_UPSTREAM" = ":" ] && GIT_UPSTREAM=""
  return 0
}
'''
    click.echo("# bash/zsh\n" + helper)


if __name__ == "__main__":
    main()
