"""``state-transition`` command: move a GitHub issue to a new workflow state.

    state-transition --issue=123 --to=reviewing --reason="Ready for review"

Repository and credentials come from GITHUB_OWNER, GITHUB_REPO and GITHUB_TOKEN
(see issue_state.config.config.Settings for the optional ones).
"""

import asyncio
import sys

import click
import pydantic
import structlog

from issue_state.adapters.github_client import GitHubClient
from issue_state.config.config import Settings, describe_validation_error
from issue_state.logging_config import configure_logging
from issue_state.schemas.state import InvalidStateError, resolve_state, state_names
from issue_state.services.state_transition import (
    DEFAULT_REASON,
    StateTransitionError,
    StateTransitionRunner,
    TransitionRequest,
    TransitionResult,
)

logger = structlog.get_logger(__name__)

USAGE = 'Usage: state-transition --issue=<number> --to=<state> [--reason="..."]'


def _available_states() -> str:
    return f"Available states: {', '.join(state_names())}"


async def _transition(settings: Settings, request: TransitionRequest) -> TransitionResult:
    async with GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.request_timeout,
    ) as client:
        runner = StateTransitionRunner(client, repo=settings.repository)
        return await runner.run(request)


@click.command(name="state-transition")
@click.option("--issue", help="Issue number to transition")
@click.option("--to", "to_state", metavar="STATE", help=f"Target state: {', '.join(state_names())}")
@click.option("--reason", help=f"Why the state changes (default: {DEFAULT_REASON!r})")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Threshold for the JSON log written to stderr",
)
def main(issue: str | None, to_state: str | None, reason: str | None, log_level: str) -> None:
    """Replace the state label on a GitHub issue and comment with the reason."""
    configure_logging(log_level)

    issue = (issue or "").strip()
    if not issue or not to_state:
        click.echo(USAGE, err=True)
        click.echo(_available_states(), err=True)
        sys.exit(1)

    try:
        state = resolve_state(to_state)
    except InvalidStateError as exc:
        click.echo(str(exc), err=True)
        click.echo(_available_states(), err=True)
        sys.exit(1)

    try:
        settings = Settings()
    except pydantic.ValidationError as exc:
        for line in describe_validation_error(exc):
            click.echo(f"Invalid configuration: {line}", err=True)
        sys.exit(1)
    missing = settings.missing_variables()
    if missing:
        click.echo(f"Missing required environment variables: {', '.join(missing)}", err=True)
        sys.exit(1)

    request = TransitionRequest(issue=issue, state=state, reason=reason or DEFAULT_REASON)
    try:
        result = asyncio.run(_transition(settings, request))
    except StateTransitionError as exc:
        click.echo(f"Error during state transition: {exc}", err=True)
        if exc.removed_labels:
            click.echo(f"Labels already removed: {', '.join(exc.removed_labels)}", err=True)
        sys.exit(1)
    except Exception as exc:
        click.echo(f"Error during state transition: {exc}", err=True)
        logger.error("state_transition_unexpected", exc_info=True)
        sys.exit(1)

    click.echo(f"✅ Issue #{result.issue} transitioned to {result.state.value} ({result.label})")
    click.echo(f"   Reason: {result.reason}")
