from dataclasses import dataclass, field

DEV_NULL = "/dev/null"


@dataclass
class DiffLineChange:
    """Одна строка внутри hunk: add, del или normal (контекст)."""

    kind: str
    content: str
    old_lineno: int | None = None
    new_lineno: int | None = None

    @property
    def line_label(self) -> int | None:
        """Номер строки для промпта: новый, если есть, иначе старый."""
        if self.new_lineno is not None:
            return self.new_lineno
        return self.old_lineno

    @property
    def side(self) -> str:
        return "LEFT" if self.kind == "del" else "RIGHT"


@dataclass
class DiffChunk:
    header: str
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    changes: list[DiffLineChange] = field(default_factory=list)


@dataclass
class DiffFile:
    path: str = ""
    source: str = ""
    new: bool = False
    deleted: bool = False
    chunks: list[DiffChunk] = field(default_factory=list)

    @property
    def is_deleted(self) -> bool:
        return self.deleted or self.path == DEV_NULL

    @property
    def additions(self) -> int:
        return sum(1 for chunk in self.chunks for c in chunk.changes if c.kind == "add")

    @property
    def deletions(self) -> int:
        return sum(1 for chunk in self.chunks for c in chunk.changes if c.kind == "del")
