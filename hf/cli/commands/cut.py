from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from hf.cli.context import build_context
from hf.core import config as cfg
from hf.core.result import Err
from hf.hotfix.errors import HotfixError
from hf.hotfix.model import HotfixOutcome
from hf.hotfix.pipeline import run_with_inputs
from hf.net.http import RealHttpClient
from hf.output.console import ConsoleProtocol, Style
from hf.output.errors import hotfix_error_exit_code, print_hotfix_error


def _fail(error: HotfixError, console: ConsoleProtocol) -> NoReturn:
    print_hotfix_error(error, console)
    raise typer.Exit(code=hotfix_error_exit_code(error))


def _config_path(explicit: Path | None, cwd: Path) -> Path | None:
    if explicit is not None:
        return explicit
    default = cwd / cfg.DEFAULT_CONFIG_FILE
    return default if default.is_file() else None


def _print_outcome(outcome: HotfixOutcome, console: ConsoleProtocol) -> None:
    if outcome.dry_run:
        console.info("dry-run: nothing was created")
        return
    console.print(f"branch: {outcome.branch.name} @ {outcome.branch.sha}", Style.DIM)
    if outcome.issue is not None:
        label = f"#{outcome.issue.number}" if outcome.issue.number is not None else "issue"
        console.print(f"{label}: {outcome.issue.url}", Style.DIM)


def cut(
    tag: str | None = typer.Option(None, "--tag", help="Existing release tag to hotfix."),
    github_token: str | None = typer.Option(
        None, "--github-token", help="GitHub token (or INPUT_GITHUB-TOKEN / GITHUB_TOKEN)."
    ),
    slack_webhook_url: str | None = typer.Option(
        None, "--slack-webhook-url", help="Slack incoming webhook URL."
    ),
    repository: str | None = typer.Option(
        None, "--repository", "--repo", help="owner/name (default: GITHUB_REPOSITORY)."
    ),
    api_url: str | None = typer.Option(None, "--api-url", help="GitHub API base URL."),
    tag_strategy: str | None = typer.Option(
        None, "--tag-strategy", help="Tag resolution: ref (default) or list."
    ),
    webhook_source: str | None = typer.Option(
        None, "--webhook-source", help="Where the webhook URL comes from: input or env."
    ),
    slack_webhook_env: str | None = typer.Option(
        None, "--slack-webhook-env", help="Variable holding the URL when --webhook-source env."
    ),
    timeout: float | None = typer.Option(None, "--timeout", help="Per-request timeout (s)."),
    config: Path | None = typer.Option(
        None, "--config", help=f"TOML config file (default: ./{cfg.DEFAULT_CONFIG_FILE})."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Resolve the tag and print the plan; create nothing."
    ),
) -> None:
    """Create the hotfix branch, open the tracking issue and notify the team."""
    ctx = build_context()
    console = ctx.console

    overrides: dict[str, str | None] = {
        cfg.TAG: tag,
        cfg.GITHUB_TOKEN: github_token,
        cfg.SLACK_WEBHOOK_URL: slack_webhook_url,
        cfg.REPOSITORY: repository,
        cfg.API_URL: api_url,
        cfg.TAG_STRATEGY: tag_strategy,
        cfg.WEBHOOK_SOURCE: webhook_source,
        cfg.SLACK_WEBHOOK_ENV: slack_webhook_env,
        cfg.TIMEOUT: str(timeout) if timeout is not None else None,
    }
    inputs = cfg.load_inputs(
        environ=ctx.environ,
        overrides=overrides,
        config_path=_config_path(config, ctx.cwd),
    )
    if isinstance(inputs, Err):
        _fail(inputs.error, console)

    http = RealHttpClient(timeout=inputs.value.timeout)
    result = run_with_inputs(inputs.value, http=http, console=console, dry_run=dry_run)
    if isinstance(result, Err):
        _fail(result.error, console)

    _print_outcome(result.value, console)
