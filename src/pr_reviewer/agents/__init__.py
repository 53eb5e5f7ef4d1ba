from pr_reviewer.agents.reviewer import ReviewerAgent, build_comments

__all__ = ["ReviewerAgent", "build_comments"]
