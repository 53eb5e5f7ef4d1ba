import re
from typing import TypeVar

import litellm
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from pr_reviewer.config import Settings
from pr_reviewer.diff.models import DiffFile
from pr_reviewer.github.client import PullRequestContext
from pr_reviewer.llm.prompts import build_review_prompt
from pr_reviewer.llm.schemas import ReviewResponse

T = TypeVar("T")

console = Console(stderr=True)

QUERY_CONFIG = {
    "temperature": 0.2,
    "max_tokens": 700,
    "top_p": 1,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}

JSON_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class LLMClient:
    def __init__(self, settings: Settings):
        self.model = settings.llm_model
        self.api_key = settings.llm_api_key
        self.api_base = settings.llm_api_base
        self.timeout = settings.llm_timeout
        self.language = settings.review_language

    def generate_review(self, file: DiffFile, pr: PullRequestContext) -> ReviewResponse | None:
        """Отревьюить один файл. None, если модель не ответила или ответ невалиден."""
        prompt = build_review_prompt(file, pr, self.language)
        return self._generate_json(prompt, ReviewResponse)

    def _generate_json(self, prompt: str, schema: type[T]) -> T | None:
        try:
            response = litellm.completion(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
                api_key=self.api_key,
                api_base=self.api_base,
                timeout=self.timeout,
                drop_params=True,
                **QUERY_CONFIG,
            )
            text = response.choices[0].message.content or ""
        except Exception as e:
            # ошибка по файлу = ноль замечаний по нему
            console.print(f"[red]Ошибка запроса к модели: {escape(str(e))}[/red]")
            return None

        text = text.strip()
        match = JSON_FENCE.match(text)
        if match:
            text = match.group(1)

        try:
            return schema.model_validate_json(text)
        except ValidationError as e:
            console.print(f"[red]Невалидный ответ модели ({e.error_count()} ошибок)[/red]")
            console.print(text[:500], style="dim", markup=False)
            return None
