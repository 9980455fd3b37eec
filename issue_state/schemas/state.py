"""Issue workflow states and the labels that represent them on GitHub."""

from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType


class IssueState(StrEnum):
    pending = "pending"
    analyzing = "analyzing"
    implementing = "implementing"
    reviewing = "reviewing"
    testing = "testing"
    deploying = "deploying"
    done = "done"
    blocked = "blocked"


class InvalidStateError(ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid state: {name}")
        self.name = name


STATE_EMOJI: Mapping[IssueState, str] = MappingProxyType(
    {
        IssueState.pending: "📥",
        IssueState.analyzing: "🔍",
        IssueState.implementing: "⚙️",
        IssueState.reviewing: "👀",
        IssueState.testing: "🧪",
        IssueState.deploying: "🚀",
        IssueState.done: "✅",
        IssueState.blocked: "🔴",
    }
)

STATE_LABELS: Mapping[IssueState, str] = MappingProxyType(
    {state: f"{emoji} state:{state.value}" for state, emoji in STATE_EMOJI.items()}
)


def state_names() -> list[str]:
    """Names of every known state, in workflow order."""
    return [state.value for state in IssueState]


def resolve_state(name: str) -> IssueState:
    """Look up a state by name.

    Raises:
        InvalidStateError: If ``name`` is not one of the known states.
    """
    try:
        return IssueState(name)
    except ValueError:
        raise InvalidStateError(name) from None


def label_for(state: IssueState) -> str:
    return STATE_LABELS[state]


def is_state_label(name: str) -> bool:
    """True if the label starts with any known state emoji."""
    return name.startswith(tuple(STATE_EMOJI.values()))


def select_state_labels(names: Iterable[str]) -> list[str]:
    """Return the labels that mark a workflow state, keeping their original order.

    Matching is by emoji prefix only, so a label such as ``"✅ shipped"`` counts as
    a state label too. The label for the target state is included when present.
    """
    return [name for name in names if is_state_label(name)]
