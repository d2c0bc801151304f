# shaderkit/assets/stream.py
from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from pathlib import Path


def directory_of(name: str) -> str:
    """Directory part of a resource name, with a trailing slash (or "")."""
    head = posixpath.dirname(name.replace("\\", "/"))
    return head + "/" if head else ""


class SourceStream(ABC):
    """Line oriented text source with an identifying resource name."""

    def __init__(self, name: str) -> None:
        self.name = name

    @property
    def directory(self) -> str:
        return directory_of(self.name)

    @abstractmethod
    def is_eof(self) -> bool:
        pass

    @abstractmethod
    def read_line(self) -> str:
        """
        Read the next line without its terminator.
        Returns "" once the stream is exhausted.
        """
        pass


class TextStream(SourceStream):
    """In-memory stream over an already decoded text."""

    def __init__(self, name: str, text: str) -> None:
        super().__init__(name)
        self._text = text
        self._pos = 0

    @classmethod
    def from_file(cls, path: Path, name: str | None = None) -> TextStream:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()

        return cls(name if name is not None else str(path), text)

    def is_eof(self) -> bool:
        return self._pos >= len(self._text)

    def read_line(self) -> str:
        if self.is_eof():
            return ""

        end = self._text.find("\n", self._pos)
        if end == -1:
            line = self._text[self._pos :]
            self._pos = len(self._text)
        else:
            line = self._text[self._pos : end]
            self._pos = end + 1

        if line.endswith("\r"):
            line = line[:-1]
        return line
