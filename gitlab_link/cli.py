"""
Main CLI entry point for the gitlab-link preprocessor.

mdBook calls the preprocessor twice: ``gitlab-link supports <renderer>`` to
ask whether a renderer is handled, then ``gitlab-link`` with the book on
standard input.
"""

import sys
from typing import Optional

import typer

from gitlab_link import __version__
from gitlab_link.book import supports_renderer
from gitlab_link.commands import preprocess_command, rewrite_file_command
from gitlab_link.config import LoggingConfig
from gitlab_link.exceptions import GitlabLinkError
from gitlab_link.utils import get_logger, setup_logging

logger = get_logger(__name__)

app = typer.Typer(
    help="mdBook preprocessor that links GitLab issue, merge request and project references.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gitlab-link v{__version__}")
        raise typer.Exit()


def _fail(error: GitlabLinkError) -> typer.Exit:
    logger.error(error.message, error_type=type(error).__name__)
    return typer.Exit(code=error.exit_code)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        envvar="GITLAB_LINK_LOG",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json",
        help="Write log lines to stderr as JSON",
    ),
    env_file: Optional[str] = typer.Option(
        None,
        "--env-file",
        help="Dotenv file providing CI_SERVER_URL, CI_PROJECT_NAMESPACE and CI_PROJECT_NAME",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Run as an mdBook preprocessor when no command is given."""
    try:
        logging_config = LoggingConfig(level=log_level, structured=log_json)
    except ValueError as e:
        typer.echo(f"Invalid log level: {log_level}", err=True)
        raise typer.Exit(code=2) from e
    setup_logging(level=logging_config.level, structured=logging_config.structured)

    ctx.obj = {"env_file": env_file}
    if ctx.invoked_subcommand is not None:
        return

    try:
        preprocess_command(sys.stdin, sys.stdout, env_file=env_file)
    except GitlabLinkError as e:
        raise _fail(e) from e


@app.command()
def supports(
    renderer: str = typer.Argument(..., help="Name of the mdBook renderer"),
) -> None:
    """Exit with 0 if the renderer is supported, 1 otherwise."""
    supported = supports_renderer(renderer)
    logger.debug("Renderer support check", renderer=renderer, supported=supported)
    raise typer.Exit(code=0 if supported else 1)


@app.command()
def rewrite(
    ctx: typer.Context,
    markdown_file: str = typer.Argument(..., help="Markdown file to rewrite"),
    book: Optional[str] = typer.Option(
        None,
        "--book",
        "-b",
        help="book.toml to read [preprocessor.gitlab-link] settings from",
    ),
    server_url: Optional[str] = typer.Option(None, "--server-url", help="GitLab server URL"),
    namespace: Optional[str] = typer.Option(None, "--namespace", help="Default project namespace"),
    project: Optional[str] = typer.Option(None, "--project", help="Default project name"),
) -> None:
    """Rewrite one Markdown file and print the result."""
    try:
        result = rewrite_file_command(
            markdown_file,
            book_config_path=book,
            server_url=server_url,
            namespace=namespace,
            project=project,
            env_file=ctx.obj["env_file"],
        )
    except GitlabLinkError as e:
        raise _fail(e) from e
    typer.echo(result, nl=False)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
