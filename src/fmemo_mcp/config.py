"""Environment configuration for fmemo-mcp."""

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ROOT = "."
DEFAULT_EXTENSIONS = (".fmemo", ".md")
DEFAULT_MAX_DEPTH = 10
DEFAULT_LOG_LEVEL = "INFO"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


def _env_extensions(name: str) -> tuple[str, ...]:
    value = os.environ.get(name, "")
    if not value.strip():
        return DEFAULT_EXTENSIONS
    extensions = []
    for ext in value.split(","):
        ext = ext.strip().lower()
        if not ext:
            continue
        extensions.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(extensions) or DEFAULT_EXTENSIONS


@dataclass
class Settings:
    """Runtime settings, read from FMEMO_* environment variables."""
    root: Path = field(default_factory=lambda: Path(DEFAULT_ROOT).resolve())
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    max_depth: int = DEFAULT_MAX_DEPTH
    include_hidden: bool = False
    follow_symlinks: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        try:
            max_depth = int(os.environ.get("FMEMO_MAX_DEPTH", str(DEFAULT_MAX_DEPTH)))
        except ValueError:
            max_depth = DEFAULT_MAX_DEPTH
        return cls(
            root=Path(os.environ.get("FMEMO_ROOT", DEFAULT_ROOT)).expanduser().resolve(),
            extensions=_env_extensions("FMEMO_EXTENSIONS"),
            max_depth=max_depth,
            include_hidden=_env_flag("FMEMO_INCLUDE_HIDDEN"),
            follow_symlinks=_env_flag("FMEMO_FOLLOW_SYMLINKS"),
            log_level=os.environ.get("FMEMO_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

    def accepts(self, path: Path) -> bool:
        """Check whether a file has one of the configured memo extensions."""
        return path.suffix.lower() in self.extensions
