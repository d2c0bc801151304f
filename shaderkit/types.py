# shaderkit/types.py
from __future__ import annotations

from enum import Enum
from typing import NewType

ShaderName = NewType("ShaderName", str)
DefinesHash = NewType("DefinesHash", int)


class ShaderStage(str, Enum):
    """Pipeline stage a variation is derived for."""

    VS = "vertex"
    PS = "pixel"


class BackendMode(str, Enum):
    """Target API family, decides how the combined source is split."""

    OPENGL = "opengl"
    DIRECT3D = "direct3d"
