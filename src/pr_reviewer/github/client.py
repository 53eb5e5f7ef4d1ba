from dataclasses import dataclass

import httpx
from github import Auth, Github
from github.PullRequest import PullRequest
from github.Repository import Repository


@dataclass(frozen=True)
class PullRequestContext:
    owner: str
    repo: str
    number: int
    title: str
    description: str


@dataclass(frozen=True)
class ReviewComment:
    """Комментарий к строке PR, готовый к отправке."""

    path: str
    line: int
    body: str
    side: str = "RIGHT"


class GitHubClient:
    def __init__(
        self,
        token: str,
        repo_name: str,
        base_url: str = "https://api.github.com",
        timeout: int = 30,
    ):
        self.token = token
        self.repo_name = repo_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.github = Github(auth=Auth.Token(token), base_url=self.base_url, timeout=timeout)
        self.repo: Repository = self.github.get_repo(repo_name, lazy=True)

    def get_pr(self, number: int) -> PullRequest:
        return self.repo.get_pull(number)

    def get_pr_context(self, number: int) -> PullRequestContext:
        pr = self.get_pr(number)
        owner, _, repo = self.repo_name.partition("/")
        return PullRequestContext(
            owner=owner,
            repo=repo,
            number=number,
            title=pr.title or "",
            description=pr.body or "",
        )

    def get_pr_diff(self, number: int) -> str:
        """Получить diff PR в формате unified diff."""
        resp = httpx.get(
            f"{self.base_url}/repos/{self.repo_name}/pulls/{number}",
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/vnd.github.diff",
            },
            timeout=self.timeout,
            follow_redirects=True,
        )
        resp.raise_for_status()
        return resp.text

    def create_review(self, number: int, comments: list[ReviewComment]) -> None:
        pr = self.get_pr(number)
        pr.create_review(
            event="COMMENT",
            comments=[
                {"path": c.path, "line": c.line, "side": c.side, "body": c.body}
                for c in comments
            ],
        )
