"""Runtime settings — env-driven, overridden by CLI flags.

Centralized settings using pydantic-settings.  Reads from a ``.env`` file
and ``SECERN_*`` environment variables.  The router itself never reads
these; the CLI resolves them once and passes plain values down.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Runtime settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export SECERN_LOG_LEVEL=DEBUG
        export SECERN_NO_STDOUT=true
        export SECERN_BUFFER_SIZE=1048576
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SECERN_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Diagnostics
    log_level: str = "INFO"
    quiet: bool = False

    # Passthrough channel for unmatched lines
    no_stdout: bool = False

    # I/O
    buffer_size: int = Field(default=64 * 1024, gt=0)  # per sink file
    encoding: str = "utf-8"

    @property
    def effective_log_level(self) -> str:
        """``WARNING`` under quiet mode, otherwise ``log_level``."""
        return "WARNING" if self.quiet else self.log_level.upper()
