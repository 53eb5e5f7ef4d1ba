import re

from pr_reviewer.diff.models import DEV_NULL, DiffChunk, DiffFile, DiffLineChange

HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
GIT_HEADER = re.compile(r'^diff --git ("(?:[^"\\]|\\.)*"|a/.+?) ("(?:[^"\\]|\\.)*"|b/.+)$')


def parse_diff(text: str) -> list[DiffFile]:
    """Разобрать unified diff в список файлов с hunk'ами.

    Порядок файлов и hunk'ов сохраняется. Пустой или битый текст даёт
    пустой список, а не исключение.
    """
    files: list[DiffFile] = []
    current: DiffFile | None = None
    chunk: DiffChunk | None = None
    old_line = new_line = 0
    old_left = new_left = 0

    for line in _split_lines(text or ""):
        # Внутри hunk строки считаем по заголовку, а не по префиксам
        if chunk is not None and (old_left > 0 or new_left > 0):
            marker = line[:1]
            if marker == "+" and new_left > 0:
                chunk.changes.append(DiffLineChange("add", line, new_lineno=new_line))
                new_line += 1
                new_left -= 1
                continue
            if marker == "-" and old_left > 0:
                chunk.changes.append(DiffLineChange("del", line, old_lineno=old_line))
                old_line += 1
                old_left -= 1
                continue
            if marker in (" ", "") and old_left > 0 and new_left > 0:
                chunk.changes.append(
                    DiffLineChange("normal", line or " ", old_lineno=old_line, new_lineno=new_line)
                )
                old_line += 1
                new_line += 1
                old_left -= 1
                new_left -= 1
                continue
            if marker == "\\":
                continue
            # hunk оборвался раньше, чем обещал заголовок
            chunk = None

        if line.startswith("diff "):
            current = DiffFile()
            files.append(current)
            chunk = None
            match = GIT_HEADER.match(line)
            if match:
                current.source = _strip_path(match.group(1), "a/")
                current.path = _strip_path(match.group(2), "b/")
        elif line.startswith("--- "):
            if current is None or current.chunks:
                current = DiffFile()
                files.append(current)
            chunk = None
            current.source = _strip_path(line[4:], "a/")
        elif line.startswith("+++ ") and current is not None:
            current.path = _strip_path(line[4:], "b/")
        elif line.startswith("new file mode") and current is not None:
            current.new = True
        elif line.startswith("deleted file mode") and current is not None:
            current.deleted = True
            current.path = DEV_NULL
        elif line.startswith("rename from ") and current is not None:
            current.source = _strip_path(line[len("rename from "):], "")
        elif line.startswith("rename to ") and current is not None:
            current.path = _strip_path(line[len("rename to "):], "")
        elif line.startswith("@@") and current is not None:
            match = HUNK_HEADER.match(line)
            if not match:
                continue
            old_line, new_line = int(match.group(1)), int(match.group(3))
            old_left = int(match.group(2)) if match.group(2) is not None else 1
            new_left = int(match.group(4)) if match.group(4) is not None else 1
            chunk = DiffChunk(
                header=line,
                old_start=old_line,
                old_lines=old_left,
                new_start=new_line,
                new_lines=new_left,
            )
            current.chunks.append(chunk)

    return files


def _split_lines(text: str) -> list[str]:
    # Только "\n": form feed, U+2028 и т.п. бывают внутри строк кода
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _unquote(path: str) -> str:
    """Раскрыть C-кавычки git: "b/caf\\303\\251.py" -> b/café.py."""
    inner = path[1:-1]
    try:
        return inner.encode("utf-8").decode("unicode_escape").encode("latin-1").decode("utf-8")
    except UnicodeError:
        return inner


def _strip_path(raw: str, prefix: str) -> str:
    path = raw.split("\t", 1)[0].strip()
    if len(path) > 1 and path.startswith('"') and path.endswith('"'):
        path = _unquote(path)
    if path == DEV_NULL:
        return path
    if path.startswith(prefix):
        path = path[len(prefix):]
    return path
