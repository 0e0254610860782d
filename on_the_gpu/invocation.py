# on_the_gpu/invocation.py
from __future__ import annotations

import os
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ValidationError, field_validator

from . import config
from .errors import ConfigError


class Strategy(str, Enum):
    """How the target is pushed onto the discrete GPU."""

    VULKAN = "vulkan"  # pvkrun
    GL = "gl"          # primusrun

    @classmethod
    def parse(cls, value: Union["Strategy", str, None]) -> "Strategy":
        """Accept a member, its value or name, or a wrapper alias. Case-insensitive."""
        if value is None:
            return cls.VULKAN
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        if key in _ALIASES:
            return _ALIASES[key]
        choices = ", ".join(m.value for m in cls)
        raise ConfigError(f"unknown GPU strategy {value!r} (choose one of: {choices})")


_ALIASES = {
    "pvkrun": Strategy.VULKAN,
    "primusrun": Strategy.GL,
    "primus": Strategy.GL,
    "opengl": Strategy.GL,
}


def default_wrappers() -> Dict[Strategy, str]:
    """Strategy → wrapper binary, environment overrides applied."""
    return {s: config.wrapper_binary(s.value) for s in Strategy}


# ---------- model ------------------------------------------------------
class Invocation(BaseModel):
    strategy: Strategy = Strategy.VULKAN
    target_command: List[str]
    working_directory: str
    log_path: Optional[str] = None
    exit_code: Optional[int] = None

    @field_validator("target_command")
    @classmethod
    def _non_empty(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("need at least 1 argument for the command to run")
        return v

    @classmethod
    def build(
        cls,
        strategy: Union[Strategy, str, None],
        target_command: Sequence[str],
        working_directory: Optional[str] = None,
        log_path: Optional[str] = None,
    ) -> "Invocation":
        """Validate raw inputs; every rejection surfaces as ConfigError."""
        strategy = Strategy.parse(strategy)
        cwd = working_directory or os.getcwd()
        if not os.path.isdir(cwd):
            raise ConfigError(f"working directory does not exist: {cwd}")
        try:
            return cls(
                strategy=strategy,
                target_command=list(target_command),
                working_directory=cwd,
                log_path=log_path or None,
            )
        except ValidationError as exc:
            raise ConfigError("; ".join(err["msg"] for err in exc.errors())) from exc

    def argv(self, wrappers: Mapping[Strategy, str]) -> List[str]:
        """`[wrapper, *target_command]`, untouched: no shell, no quoting."""
        return [wrappers[self.strategy], *self.target_command]

    def banner(self, argv: Sequence[str]) -> str:
        lines = [
            "══ Start ══",
            f"CWD: {self.working_directory}",
            "Environment: (same)",
            "Arguments:",
        ]
        lines += [f"  argv[{i}] = {arg!r}" for i, arg in enumerate(argv)]
        return "\n".join(lines)
