"""StateTransitionRunner: moves one issue to a new workflow state label."""

import structlog
from pydantic import BaseModel, Field

from issue_state.adapters.github_client import GitHubClient, GitHubClientError
from issue_state.schemas.state import IssueState, label_for, select_state_labels

logger = structlog.get_logger(__name__)

DEFAULT_REASON = "State transition"


class TransitionRequest(BaseModel):
    issue: str
    state: IssueState
    reason: str = DEFAULT_REASON


class TransitionResult(BaseModel):
    issue: str
    state: IssueState
    label: str
    reason: str
    removed_labels: list[str] = Field(default_factory=list)
    comment_url: str | None = None


class StateTransitionError(Exception):
    """Raised when a remote call fails part-way through a transition.

    Nothing is rolled back: ``removed_labels`` lists the state labels that were
    already taken off the issue when ``step`` failed.
    """

    def __init__(self, message: str, step: str, removed_labels: list[str] | None = None) -> None:
        super().__init__(message)
        self.step = step
        self.removed_labels = list(removed_labels or [])


def render_comment(state: IssueState, reason: str) -> str:
    return f"🔄 **State Transition**: `{state.value}`\n\n{reason}\n\n---\n*Automated by State Machine*"


class StateTransitionRunner:
    """Applies a transition as an ordered sequence of GitHub calls.

    1. list the issue's labels
    2. remove every existing state label, one at a time, in list order
    3. add the label for the target state
    4. post a comment recording the reason

    The first failing call ends the run with a StateTransitionError. A removal
    answered with 404 means the label is already gone and is skipped.
    """

    def __init__(self, client: GitHubClient, repo: str) -> None:
        self._client = client
        self._repo = repo

    async def run(self, request: TransitionRequest) -> TransitionResult:
        log = logger.bind(repo=self._repo, issue=request.issue)
        new_label = label_for(request.state)
        removed: list[str] = []

        try:
            current = await self._client.list_issue_labels(self._repo, request.issue)
        except GitHubClientError as exc:
            raise self._fail(log, "fetch_labels", f"Failed to fetch labels: {exc}", removed) from exc
        stale = select_state_labels(label.name for label in current)
        log.info("labels_fetched", count=len(current), stale=stale)

        for name in stale:
            try:
                await self._client.remove_issue_label(self._repo, request.issue, name)
            except GitHubClientError as exc:
                if exc.status_code == 404:
                    log.warning("state_label_already_absent", label=name)
                    continue
                raise self._fail(log, "remove_label", f"Failed to remove label {name!r}: {exc}", removed) from exc
            removed.append(name)
            log.info("state_label_removed", label=name)

        try:
            await self._client.add_issue_labels(self._repo, request.issue, [new_label])
        except GitHubClientError as exc:
            raise self._fail(log, "add_label", f"Failed to add label: {exc}", removed) from exc
        log.info("state_label_added", label=new_label)

        try:
            comment = await self._client.create_issue_comment(
                self._repo, request.issue, render_comment(request.state, request.reason)
            )
        except GitHubClientError as exc:
            raise self._fail(log, "post_comment", f"Failed to post comment: {exc}", removed) from exc
        log.info("transition_comment_posted", comment_id=comment.id)

        return TransitionResult(
            issue=request.issue,
            state=request.state,
            label=new_label,
            reason=request.reason,
            removed_labels=removed,
            comment_url=comment.html_url,
        )

    @staticmethod
    def _fail(log, step: str, message: str, removed: list[str]) -> StateTransitionError:
        log.error("state_transition_failed", step=step, error=message, removed=removed)
        return StateTransitionError(message, step=step, removed_labels=removed)
