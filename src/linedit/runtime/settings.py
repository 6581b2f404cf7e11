"""Editor configuration sourced from ``LINEDIT_*`` environment variables."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EditorSettings:
    encoding: str = "utf-8"
    atomic_save: bool = True
    prompt: str = "> "
    show_menu: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ
        defaults = cls()
        settings = cls(
            encoding=env.get(f"{ENV_PREFIX}ENCODING", defaults.encoding),
            atomic_save=_flag(env.get(f"{ENV_PREFIX}ATOMIC_SAVE"), defaults.atomic_save),
            prompt=env.get(f"{ENV_PREFIX}PROMPT", defaults.prompt),
            show_menu=_flag(env.get(f"{ENV_PREFIX}SHOW_MENU"), defaults.show_menu),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding '{self.encoding}'.") from exc

    def override(self, **changes: object) -> "EditorSettings":
        """Return a copy with the non-``None`` values of ``changes`` applied."""

        updated = replace(self, **{k: v for k, v in changes.items() if v is not None})
        updated.validate()
        return updated


__all__ = ["EditorSettings"]
