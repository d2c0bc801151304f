# shaderkit/shaders/includes.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol

from shaderkit.assets.stream import SourceStream
from shaderkit.errors import IncludeResolutionError

INCLUDE_DIRECTIVE = "#include"


class FileProvider(Protocol):
    def get_file(self, name: str) -> Optional[SourceStream]: ...


@dataclass(frozen=True, slots=True)
class ResolvedSource:
    """Flattened text of a document and every file it pulled in."""

    text: str
    includes: tuple[str, ...]


def parse_include(line: str) -> Optional[str]:
    """
    Return the include target of a directive line, or None.

    Only lines starting at column 0 with "#include" count. The path
    starts after the keyword and one delimiter, quotes are removed.
    """
    if not line.startswith(INCLUDE_DIRECTIVE):
        return None
    return line[len(INCLUDE_DIRECTIVE) + 1 :].replace('"', "").strip()


class IncludeResolver:
    """
    Expands #include directives depth-first into one text blob.

    Include paths are relative to the directory of the file holding the
    directive. Nesting deeper than `max_depth` is treated as a cycle.
    """

    def __init__(self, files: FileProvider, root_name: str, *, max_depth: int = 64):
        self._files = files
        self._root_name = root_name
        self._max_depth = max_depth
        self.includes: List[str] = []

    def resolve(self, source: SourceStream) -> ResolvedSource:
        self.includes = []
        chunks: List[str] = []
        self._process(source, chunks, depth=0)
        return ResolvedSource(text="".join(chunks), includes=tuple(self.includes))

    def _process(self, source: SourceStream, chunks: List[str], depth: int) -> None:
        if source.name != self._root_name and source.name not in self.includes:
            self.includes.append(source.name)

        while not source.is_eof():
            line = source.read_line()

            target = parse_include(line)
            if target is None:
                chunks.append(line)
                chunks.append("\n")
                continue

            include_name = source.directory + target
            if depth + 1 > self._max_depth:
                raise IncludeResolutionError(
                    include_name,
                    self._root_name,
                    f"include depth exceeds {self._max_depth}, recursive include?",
                )

            include_file = self._files.get_file(include_name)
            if include_file is None:
                raise IncludeResolutionError(
                    include_name, self._root_name, "file not found"
                )

            self._process(include_file, chunks, depth + 1)

        # Blank line between the contents of consecutive files
        chunks.append("\n")
