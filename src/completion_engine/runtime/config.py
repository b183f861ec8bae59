"""Environment-driven configuration shared by the runtime and providers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "COMPLETION_ENGINE_"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_length(name: str, default: int) -> int:
    value = env_int(name, default)
    return value if value >= 1 else default


@dataclass(frozen=True, slots=True)
class WordCompletionConfig:
    """Tunables for the buffer-word completion provider.

    ``manual_trigger_length`` and ``trigger_length`` are measured in grapheme
    clusters. ``priority`` is attached to every response the provider emits.
    """

    enable: bool = True
    manual_trigger_length: int = 2
    trigger_length: int = 8
    priority: int = 1

    def __post_init__(self) -> None:
        if self.manual_trigger_length < 1:
            raise ValueError("manual_trigger_length must be at least 1")
        if self.trigger_length < 1:
            raise ValueError("trigger_length must be at least 1")

    @classmethod
    def from_env(cls) -> "WordCompletionConfig":
        """Read overrides; unusable lengths fall back to the defaults."""

        defaults = cls()
        return cls(
            enable=env_flag("WORD_COMPLETION", defaults.enable),
            manual_trigger_length=_env_length(
                "WORD_MANUAL_LENGTH", defaults.manual_trigger_length
            ),
            trigger_length=_env_length("WORD_TRIGGER_LENGTH", defaults.trigger_length),
            priority=env_int("WORD_PRIORITY", defaults.priority),
        )


__all__ = [
    "ENV_PREFIX",
    "WordCompletionConfig",
    "env",
    "env_flag",
    "env_int",
]
