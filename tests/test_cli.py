import json

import pytest
from github import GithubException
from typer.testing import CliRunner

from pr_reviewer import cli
from pr_reviewer.agents import reviewer
from pr_reviewer.github import PullRequestContext
from pr_reviewer.llm import ReviewFinding, ReviewResponse

runner = CliRunner()

DIFF = """diff --git a/a.ts b/a.ts
--- a/a.ts
+++ b/a.ts
@@ -1,2 +1,3 @@
 const a = 1;
+const b = 2;
 export default a;
diff --git a/config.yaml b/config.yaml
--- a/config.yaml
+++ b/config.yaml
@@ -1 +1 @@
-debug: false
+debug: true
"""

CREDENTIAL_ENV = [
    "GITHUB_TOKEN",
    "INPUT_GITHUB_TOKEN",
    "LLM_API_KEY",
    "OPENAI_API_KEY",
    "INPUT_OPENAI_API_KEY",
    "EXCLUDE",
    "INPUT_EXCLUDE",
]


@pytest.fixture(autouse=True)
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in CREDENTIAL_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "gh")
    monkeypatch.setenv("LLM_API_KEY", "sk")


def write_event(tmp_path, action="opened"):
    path = tmp_path / "event.json"
    path.write_text(
        json.dumps(
            {"action": action, "number": 4, "repository": {"name": "demo", "owner": {"login": "octo"}}}
        ),
        encoding="utf-8",
    )
    return path


class FakeGitHub:
    def __init__(self, token, repo_name, **kwargs):
        self.repo_name = repo_name
        self.reviews = []

    def get_pr_context(self, number):
        return PullRequestContext(owner="octo", repo="demo", number=number, title="T", description="")

    def get_pr_diff(self, number):
        return DIFF

    def create_review(self, number, comments):
        self.reviews.append(comments)


class FakeLLM:
    def __init__(self, settings):
        pass

    def generate_review(self, file, pr):
        return ReviewResponse(reviews=[ReviewFinding(line_number="2", review_comment="rename b")])


class TestReviewCommand:
    def test_unsupported_event_exits_zero(self, tmp_path):
        result = runner.invoke(cli.app, ["review", "--event-path", str(write_event(tmp_path, "closed"))])
        assert result.exit_code == 0

    def test_missing_credentials(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LLM_API_KEY")
        result = runner.invoke(cli.app, ["review", "--event-path", str(write_event(tmp_path))])
        assert result.exit_code == 1

    def test_malformed_event(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text("not json", encoding="utf-8")
        result = runner.invoke(cli.app, ["review", "--event-path", str(path)])
        assert result.exit_code != 0

    def test_dry_run(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EXCLUDE", "*.yaml")
        monkeypatch.setattr(cli, "GitHubClient", FakeGitHub)
        monkeypatch.setattr(reviewer, "LLMClient", FakeLLM)

        result = runner.invoke(
            cli.app, ["review", "--event-path", str(write_event(tmp_path)), "--dry-run"]
        )

        assert result.exit_code == 0
        assert "a.ts:2" in result.stdout
        assert "rename b" in result.stdout
        assert "config.yaml" not in result.stdout

    def test_github_error(self, tmp_path, monkeypatch):
        class MissingPR(FakeGitHub):
            def get_pr_context(self, number):
                raise GithubException(404, {"message": "Not Found"})

        monkeypatch.setattr(cli, "GitHubClient", MissingPR)
        result = runner.invoke(cli.app, ["review", "--event-path", str(write_event(tmp_path))])
        assert result.exit_code == 1


class TestPreviewCommand:
    def test_prints_prompts_for_kept_files(self, tmp_path):
        diff_file = tmp_path / "change.diff"
        diff_file.write_text(DIFF, encoding="utf-8")

        result = runner.invoke(cli.app, ["preview", str(diff_file), "--exclude", "*.yaml", "--title", "Add b"])

        assert result.exit_code == 0
        assert "2 +const b = 2;" in result.stdout
        assert "Pull request title: Add b" in result.stdout
        assert "debug: true" not in result.stdout

    def test_nothing_left(self, tmp_path):
        diff_file = tmp_path / "change.diff"
        diff_file.write_text(DIFF, encoding="utf-8")

        result = runner.invoke(cli.app, ["preview", str(diff_file), "--exclude", "*.yaml,*.ts"])

        assert result.exit_code == 0
        assert "Pull request title" not in result.stdout
