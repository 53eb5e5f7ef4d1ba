import json
from pathlib import Path

from pydantic import BaseModel, model_validator

SUPPORTED_ACTIONS = ("opened", "synchronize")


class Owner(BaseModel):
    login: str


class EventRepository(BaseModel):
    name: str
    owner: Owner

    @property
    def full_name(self) -> str:
        return f"{self.owner.login}/{self.name}"


class PullRequestEvent(BaseModel):
    """Payload события pull_request."""

    action: str | None = None
    number: int
    repository: EventRepository

    @model_validator(mode="before")
    @classmethod
    def _number_from_pull_request(cls, data):
        if isinstance(data, dict) and "number" not in data:
            pull_request = data.get("pull_request") or {}
            if "number" in pull_request:
                data = {**data, "number": pull_request["number"]}
        return data

    @property
    def is_supported(self) -> bool:
        return self.action in SUPPORTED_ACTIONS


def load_event(path: str | Path) -> PullRequestEvent:
    """Прочитать payload события из файла (GITHUB_EVENT_PATH)."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return PullRequestEvent.model_validate(data)
