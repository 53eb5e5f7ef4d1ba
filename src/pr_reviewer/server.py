import hashlib
import hmac
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from rich.console import Console

from pr_reviewer.agents import ReviewerAgent
from pr_reviewer.config import Settings, get_settings
from pr_reviewer.github import GitHubClient, PullRequestEvent
from pr_reviewer.github.app_auth import get_installation_token

console = Console(stderr=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    settings.require("llm_api_key", "github_app_id", "github_private_key")
    app.state.settings = settings
    console.print("[green]Сервер запущен[/green]")
    yield
    console.print("[yellow]Сервер остановлен[/yellow]")


app = FastAPI(lifespan=lifespan)


def verify_signature(payload: bytes, signature: str, secret: str | None) -> bool:
    if not secret:
        return True
    expected = "sha256=" + hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature)


@app.post("/webhook")
async def webhook(request: Request):
    settings: Settings = request.app.state.settings
    payload = await request.body()
    signature = request.headers.get("X-Hub-Signature-256", "")

    if not verify_signature(payload, signature, settings.github_webhook_secret):
        raise HTTPException(status_code=401, detail="Invalid signature")

    event = request.headers.get("X-GitHub-Event")
    data = await request.json()

    if event == "pull_request":
        await run_in_threadpool(handle_pr_review, settings, data)

    return {"status": "ok"}


def handle_pr_review(settings: Settings, data: dict):
    event = PullRequestEvent.model_validate(data)
    if not event.is_supported:
        return

    repo_full_name = event.repository.full_name
    console.print(f"[blue]Ревью PR #{event.number} в {repo_full_name}[/blue]")

    token = get_installation_token(settings, data["installation"]["id"])
    github = GitHubClient(
        token,
        repo_full_name,
        base_url=settings.github_api_url,
        timeout=settings.github_timeout,
    )
    comments = ReviewerAgent(settings, github).review(event)
    console.print(f"[green]Ревью PR #{event.number}: {len(comments)} замечаний[/green]")


@app.get("/health")
async def health():
    return {"status": "healthy"}
