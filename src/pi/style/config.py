"""Rendering configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


@dataclass
class StyleConfig:
    """Controls how styled output is produced.

    With ``color`` disabled, markup is still validated but no control
    sequences are emitted.
    """

    color: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StyleConfig:
        """Build a config from ``NO_COLOR`` / ``FORCE_COLOR``.

        ``FORCE_COLOR`` wins when set: ``0`` disables color, any other
        non-empty value enables it. Otherwise a non-empty ``NO_COLOR``
        disables color.
        """
        env = os.environ if environ is None else environ

        force = env.get("FORCE_COLOR")
        if force:
            return cls(color=force != "0")

        if env.get("NO_COLOR"):
            return cls(color=False)

        return cls()
