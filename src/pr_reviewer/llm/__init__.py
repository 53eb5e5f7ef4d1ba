from pr_reviewer.llm.client import LLMClient
from pr_reviewer.llm.prompts import build_review_prompt
from pr_reviewer.llm.schemas import ReviewFinding, ReviewResponse

__all__ = ["LLMClient", "ReviewFinding", "ReviewResponse", "build_review_prompt"]
