from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_reviewer.diff.filters import split_patterns


class MissingSettingsError(RuntimeError):
    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(f"Не заданы обязательные настройки: {', '.join(names)}")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Входы GitHub Action приходят как INPUT_<NAME>
    github_token: str | None = Field(
        None, validation_alias=AliasChoices("github_token", "input_github_token")
    )
    github_api_url: str = "https://api.github.com"
    github_timeout: int = 30
    github_app_id: str | None = None
    github_private_key: str | None = None
    github_webhook_secret: str | None = None

    llm_model: str = Field(
        "gpt-4o-mini",
        validation_alias=AliasChoices("llm_model", "openai_api_model", "input_openai_api_model"),
    )
    llm_api_key: str | None = Field(
        None,
        validation_alias=AliasChoices("llm_api_key", "openai_api_key", "input_openai_api_key"),
    )
    llm_api_base: str | None = None
    llm_timeout: float = 60.0

    exclude: str = Field("", validation_alias=AliasChoices("exclude", "input_exclude"))
    review_language: str = Field(
        "English", validation_alias=AliasChoices("review_language", "input_review_language")
    )

    @property
    def exclude_patterns(self) -> list[str]:
        return split_patterns(self.exclude)

    def require(self, *names: str) -> None:
        """Проверить, что все перечисленные настройки заданы."""
        missing = [name for name in names if not getattr(self, name)]
        if missing:
            raise MissingSettingsError(missing)


def get_settings() -> Settings:
    return Settings()
