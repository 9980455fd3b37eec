from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

_REQUIRED = {
    "github_owner": "GITHUB_OWNER",
    "github_repo": "GITHUB_REPO",
    "github_token": "GITHUB_TOKEN",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    github_owner: str = ""
    github_repo: str = ""
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    # 0 disables the timeout
    github_timeout_seconds: float = Field(default=30.0, ge=0)

    @property
    def repository(self) -> str:
        return f"{self.github_owner}/{self.github_repo}"

    @property
    def request_timeout(self) -> float | None:
        return self.github_timeout_seconds or None

    def missing_variables(self) -> list[str]:
        """Environment variable names of required settings that are unset or empty."""
        return [env for field, env in _REQUIRED.items() if not getattr(self, field).strip()]


def describe_validation_error(exc: ValidationError) -> list[str]:
    """One ``ENV_NAME: message`` line per invalid setting. Input values are left out."""
    return [f"{str(err['loc'][0]).upper()}: {err['msg']}" if err["loc"] else err["msg"] for err in exc.errors()]
