from pr_reviewer.diff.models import DiffChunk, DiffFile
from pr_reviewer.github.client import PullRequestContext

REVIEW_PROMPT = """You are an experienced software engineer reviewing a pull request to make sure the code is clean, efficient and follows good practices. Analyze:

1. Quality: check maintainability and clarity. Simplify where possible.
2. Logic: confirm the functionality and point out bugs or edge cases.
3. Performance: suggest improvements in resource usage and execution.
4. Security: identify vulnerabilities.
5. Tests: assess coverage and effectiveness. Suggest additional tests if needed.
6. Documentation: check that it is clear and accurate, but do not suggest adding comments to the code.

Response format: JSON of the form {{"reviews": [{{"lineNumber": "<line number>", "reviewComment": "<comment>"}}]}}. Only give improvement suggestions and comment once per issue. If there is nothing to improve, return an empty "reviews" list.

Instructions:
- Only comment on source code files, ignore configuration (.json, .yaml, .yml, .properties).
- Use the line numbers printed at the start of each diff line.
- Constructive and specific feedback, written in {language}.

Review the following code diff in the file "{path}" and take the pull request title and description into account when writing your response.

Pull request title: {title}
Pull request description:

---
{description}
---

Git diff to review:

```diff
{diff}
```
"""


def render_chunk(chunk: DiffChunk) -> str:
    lines = [chunk.header]
    for change in chunk.changes:
        label = change.line_label
        if label is None:
            continue
        lines.append(f"{label} {change.content}")
    return "\n".join(lines)


def render_diff(file: DiffFile) -> str:
    return "\n\n".join(render_chunk(chunk) for chunk in file.chunks)


def build_review_prompt(file: DiffFile, pr: PullRequestContext, language: str = "English") -> str:
    """Собрать промпт для ревью одного файла."""
    return REVIEW_PROMPT.format(
        path=file.path,
        title=pr.title,
        description=pr.description,
        diff=render_diff(file),
        language=language,
    )
