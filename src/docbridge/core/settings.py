"""Settings for the docbridge extractor and bridge.

Every path convention and tunable the bridge relies on lives here, so the
initialization step receives them as explicit inputs instead of looking up
fixed relative paths on its own.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not at call time
    - **Environment-driven:** ``DOCBRIDGE_*`` env vars and ``.env`` files
    - **Sensible defaults:** Match the layout ``docbridge docgen`` writes

Examples:
    >>> from docbridge.core.settings import BridgeSettings
    >>> settings = BridgeSettings(jpeg_quality=70)
    >>> settings.contract_relpath
    PosixPath('dist/docs.json')

Tags:
    settings, configuration, pydantic, environment, docbridge
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BridgeSettings(BaseSettings):
    """Settings shared by ``docgen`` and ``run``.

    Fields
    ──────
    dist_dir           : Directory (relative to the workdir) holding the store
    contract_filename  : Contract store file name
    secret_file        : Line-oriented KEY=value file holding the secret
    secret_key         : Key of the shared secret inside ``secret_file``
    rpc_path           : The endpoint's single RPC path
    request_timeout    : Seconds per RPC call; None disables the timeout
    jpeg_quality       : Quality of the lossy recompression pass
    reencode_subtypes  : Image subtypes that are recompressed
    preview_chars      : Body preview length in unsupported-type errors
    scratch_dir        : Image scratch directory; None creates a temp dir
    log_level          : Structlog log level
    log_json           : Force JSON (True) or console (False) log rendering
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Contract store / secret ──────────────────────────────────
    dist_dir: Path = Path("dist")
    contract_filename: str = "docs.json"
    secret_file: str = ".dev.vars"
    secret_key: str = "SHARED_SECRET"

    # ── Remote endpoint ──────────────────────────────────────────
    rpc_path: str = "/rpc"
    request_timeout: float | None = None

    # ── Image shrinking ──────────────────────────────────────────
    jpeg_quality: int = Field(default=80, ge=1, le=95)
    reencode_subtypes: list[str] = Field(default_factory=lambda: ["jpeg"])
    scratch_dir: Path | None = None

    # ── Error previews ───────────────────────────────────────────
    preview_chars: int = Field(default=1000, ge=0)

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("rpc_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"

    @field_validator("reencode_subtypes")
    @classmethod
    def _lowercase_subtypes(cls, value: list[str]) -> list[str]:
        return [subtype.strip().lower() for subtype in value if subtype.strip()]

    @property
    def contract_relpath(self) -> Path:
        """Contract store location relative to a workdir."""
        return self.dist_dir / self.contract_filename


@lru_cache(maxsize=1)
def get_settings() -> BridgeSettings:
    """Process-wide settings, read from the environment once."""
    return BridgeSettings()
