from pr_reviewer.github.client import GitHubClient, PullRequestContext, ReviewComment
from pr_reviewer.github.events import PullRequestEvent, load_event

__all__ = ["GitHubClient", "PullRequestContext", "PullRequestEvent", "ReviewComment", "load_event"]
