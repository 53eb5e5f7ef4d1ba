from rich.console import Console
from rich.markup import escape

from pr_reviewer.config import Settings
from pr_reviewer.diff import DiffFile, filter_files, parse_diff
from pr_reviewer.github import GitHubClient, PullRequestContext, PullRequestEvent, ReviewComment
from pr_reviewer.llm import LLMClient, ReviewFinding

console = Console(stderr=True)


def line_sides(file: DiffFile) -> dict[int, str]:
    """Номера строк из diff и сторона, к которой их привязывать."""
    sides: dict[int, str] = {}
    for chunk in file.chunks:
        for change in chunk.changes:
            label = change.line_label
            if label is None:
                continue
            # RIGHT важнее: тот же номер может быть и у удалённой, и у новой строки
            if sides.get(label) != "RIGHT":
                sides[label] = change.side
    return sides


def build_comments(file: DiffFile, findings: list[ReviewFinding]) -> list[ReviewComment]:
    sides = line_sides(file)
    comments = []
    for finding in findings:
        line = finding.line
        if line is None or line not in sides:
            console.print(
                f"[yellow]Пропускаю замечание к {escape(file.path)}: "
                f"строки {escape(finding.line_number)!r} нет в diff[/yellow]"
            )
            continue
        comments.append(
            ReviewComment(path=file.path, line=line, body=finding.review_comment, side=sides[line])
        )
    return comments


class ReviewerAgent:
    def __init__(
        self,
        settings: Settings,
        github: GitHubClient,
        llm: LLMClient | None = None,
    ):
        self.settings = settings
        self.github = github
        self.llm = llm or LLMClient(settings)

    def review(self, event: PullRequestEvent, dry_run: bool = False) -> list[ReviewComment]:
        """Отревьюить PR из события. Возвращает список комментариев."""

        if not event.is_supported:
            console.print(f"[yellow]Неподдерживаемое событие: {escape(str(event.action))}[/yellow]")
            return []

        # 1. Получаем PR и diff
        console.print(f"[blue]Читаю PR #{event.number}...[/blue]")
        pr = self.github.get_pr_context(event.number)

        console.print("[blue]Получаю diff...[/blue]")
        diff = self.github.get_pr_diff(event.number)
        if not diff or not diff.strip():
            console.print("[yellow]Diff пустой[/yellow]")
            return []

        # 2. Разбираем и фильтруем файлы
        files = filter_files(parse_diff(diff), self.settings.exclude_patterns)
        console.print(f"[blue]Файлов к ревью: {len(files)}[/blue]")

        # 3. Ревью по файлам
        comments = self.analyze_files(files, pr)
        if not comments:
            console.print("[green]Замечаний нет[/green]")
            return []

        # 4. Публикуем одним ревью
        if dry_run:
            console.print(f"[yellow]Dry run: {len(comments)} замечаний не отправлены[/yellow]")
        else:
            console.print(f"[blue]Публикую ревью ({len(comments)} замечаний)...[/blue]")
            self.github.create_review(event.number, comments)
            console.print("[green]Ревью опубликовано[/green]")

        return comments

    def analyze_files(self, files: list[DiffFile], pr: PullRequestContext) -> list[ReviewComment]:
        comments: list[ReviewComment] = []
        for file in files:
            if not file.chunks:
                console.print(f"[yellow]Пропускаю {escape(file.path)}: нет изменённых строк[/yellow]")
                continue
            console.print(f"[blue]Анализирую {escape(file.path)}...[/blue]")
            result = self.llm.generate_review(file, pr)
            if result is None:
                continue
            comments.extend(build_comments(file, result.reviews))
        return comments
