from wcmatch import glob

from pr_reviewer.diff.models import DiffFile

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE


def is_excluded(path: str, patterns: list[str]) -> bool:
    if not path:
        return False
    return any(glob.globmatch(path, pattern, flags=GLOB_FLAGS) for pattern in patterns if pattern)


def filter_files(files: list[DiffFile], patterns: list[str]) -> list[DiffFile]:
    """Убрать удалённые файлы и файлы, подпадающие под исключения."""
    return [f for f in files if not f.is_deleted and not is_excluded(f.path, patterns)]


def split_patterns(raw: str) -> list[str]:
    """Glob-шаблоны из строки через запятую."""
    return [p.strip() for p in raw.split(",") if p.strip()]
