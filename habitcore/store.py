"""Document store: dated Markdown notes addressed by relative path."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from habitcore.fileio import read_text, replace_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoteFile:
    """A stored document: POSIX-style relative path and its stem."""

    path: str
    basename: str


class DocumentStore(ABC):
    """Storage primitives the habit engine runs on.

    Paths are relative POSIX strings such as ``Daily/2024-03-01.md``.
    ``modify`` replaces the whole document and is last-writer-wins.
    """

    @abstractmethod
    def exists(self, path: str) -> bool: ...

    @abstractmethod
    def read(self, path: str) -> str: ...

    @abstractmethod
    def create(self, path: str, initial_text: str = "") -> str:
        """Create a new document and return its path."""

    @abstractmethod
    def modify(self, path: str, new_text: str) -> None: ...

    @abstractmethod
    def create_folder(self, path: str) -> None: ...

    @abstractmethod
    def list_files(self) -> list[NoteFile]: ...


class FileDocumentStore(DocumentStore):
    """DocumentStore backed by a directory on the local filesystem."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _abs(self, path: str) -> Path:
        return self.root / PurePosixPath(path)

    def exists(self, path: str) -> bool:
        return self._abs(path).is_file()

    def read(self, path: str) -> str:
        target = self._abs(path)
        if not target.is_file():
            raise FileNotFoundError(path)
        return read_text(target)

    def create(self, path: str, initial_text: str = "") -> str:
        target = self._abs(path)
        if target.exists():
            raise FileExistsError(path)
        replace_file(target, initial_text)
        logger.debug("Created note %s", path)
        return path

    def modify(self, path: str, new_text: str) -> None:
        target = self._abs(path)
        if not target.is_file():
            raise FileNotFoundError(path)
        replace_file(target, new_text)

    def create_folder(self, path: str) -> None:
        self._abs(path).mkdir(parents=True, exist_ok=True)

    def list_files(self) -> list[NoteFile]:
        if not self.root.is_dir():
            return []
        files = []
        for p in sorted(self.root.rglob("*")):
            if not p.is_file() or p.name.startswith(".tmp_"):
                continue
            rel = p.relative_to(self.root).as_posix()
            files.append(NoteFile(path=rel, basename=p.stem))
        return files
