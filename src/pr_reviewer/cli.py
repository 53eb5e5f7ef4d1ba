from pathlib import Path

import httpx
import typer
from github import GithubException
from rich.console import Console
from rich.markup import escape

from pr_reviewer.agents import ReviewerAgent
from pr_reviewer.config import MissingSettingsError, get_settings
from pr_reviewer.diff import filter_files, parse_diff, split_patterns
from pr_reviewer.github import GitHubClient, PullRequestContext, load_event
from pr_reviewer.llm import build_review_prompt

app = typer.Typer(
    name="pr-reviewer",
    help="Ревью Pull Request'ов с помощью LLM",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


@app.command()
def review(
    event_path: Path = typer.Option(
        ..., "--event-path", "-e", envvar="GITHUB_EVENT_PATH", help="Файл с payload события"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Не публиковать ревью"),
):
    """Отревьюить PR из события GitHub Actions."""
    settings = get_settings()
    try:
        settings.require("github_token", "llm_api_key")
    except MissingSettingsError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    event = load_event(event_path)
    github = GitHubClient(
        settings.github_token,
        event.repository.full_name,
        base_url=settings.github_api_url,
        timeout=settings.github_timeout,
    )

    try:
        comments = ReviewerAgent(settings, github).review(event, dry_run=dry_run)
    except GithubException as e:
        if e.status == 404:
            err_console.print(f"[red]PR #{event.number} не найден в {event.repository.full_name}[/red]")
        else:
            message = e.data.get("message", str(e)) if isinstance(e.data, dict) else str(e)
            err_console.print(f"[red]Ошибка GitHub: {escape(message)}[/red]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        err_console.print(f"[red]Ошибка GitHub: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if dry_run:
        for c in comments:
            console.print(f"[bold]{escape(c.path)}:{c.line}[/bold] ({c.side})")
            console.print(c.body, markup=False)


@app.command()
def preview(
    diff_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Файл с unified diff"),
    exclude: str = typer.Option("", "--exclude", "-x", help="Glob-шаблоны через запятую"),
    title: str = typer.Option("", "--title", help="Заголовок PR"),
    description: str = typer.Option("", "--description", help="Описание PR"),
    language: str = typer.Option("English", "--language", help="Язык замечаний"),
):
    """Показать промпты для локального diff без обращения к GitHub и модели."""
    patterns = split_patterns(exclude)
    files = filter_files(parse_diff(diff_file.read_text(encoding="utf-8")), patterns)
    if not files:
        err_console.print("[yellow]Нет файлов для ревью[/yellow]")
        return

    pr = PullRequestContext(owner="", repo="", number=0, title=title, description=description)
    for file in files:
        console.rule(escape(file.path))
        console.print(build_review_prompt(file, pr, language), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
