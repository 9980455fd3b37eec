import pytest
import respx
import structlog

from issue_state.tests.helpers import GITHUB_ENV, OPTIONAL_ENV


@pytest.fixture
def github_api():
    """respx router for the GitHub API; unmatched requests fail the test."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key, value in GITHUB_ENV.items():
        monkeypatch.setenv(key, value)
    for key in OPTIONAL_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
