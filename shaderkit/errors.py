# shaderkit/errors.py
from __future__ import annotations


class ShaderError(Exception):
    """Base class for shader loading and compilation errors."""


class MissingSubsystemError(ShaderError):
    def __init__(self, subsystem: str, document_name: str = "") -> None:
        self.subsystem = subsystem
        self.document_name = document_name
        super().__init__(
            f"Cannot load shader '{document_name}': {subsystem} is not available"
        )


class IncludeResolutionError(ShaderError):
    def __init__(self, include_name: str, document_name: str, reason: str = "") -> None:
        self.include_name = include_name
        self.document_name = document_name
        msg = f"Failed to include '{include_name}' from '{document_name}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ShaderCompileError(ShaderError):
    def __init__(self, name: str, output: str) -> None:
        self.name = name
        self.output = output
        super().__init__(f"Failed to compile '{name}': {output}")
