"""Pydantic models for the GitHub API adapter."""

from pydantic import BaseModel, ConfigDict


class _Base(BaseModel):
    """Shared config: silently ignore the many fields GitHub returns that we don't use."""

    model_config = ConfigDict(extra="ignore")


class GitHubLabel(_Base):
    name: str


class GitHubComment(_Base):
    id: int | None = None
    body: str | None = None
    html_url: str | None = None
