# src/config/settings.py - v2
"""Typed configuration loaded from environment / .env via pydantic-settings.

Settings are frozen: use ``with_overrides`` to derive a modified copy.
Every variable is prefixed with ``MERMAID_`` (e.g. ``MERMAID_CONCURRENT=4``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Theme = Literal["light", "dark", "neutral", "forest", "base", "default"]
SourceCodeStyle = Literal["inline", "blockquote", "footnote", "details", "none"]


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Processor settings."""

    model_config = SettingsConfigDict(
        env_prefix="MERMAID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # === Paths ===
    input_dir: Path = Path("./public/api/articles")
    output_dir: Path = Path("./public/api/articles")
    base_url: str = "/api/articles"
    document_extensions: str = ".md,.mdx"

    # === Rendering ===
    default_theme: Theme = "dark"
    generate_both_themes: bool = False
    background_color: str = "transparent"
    output_format: Literal["svg", "png"] = "svg"
    renderer: Literal["kroki", "placeholder"] = "kroki"
    kroki_url: str = "https://kroki.io"
    render_timeout_s: float = Field(default=30.0, gt=0)

    # === Source re-embedding ===
    include_source_code: bool = True
    source_code_style: SourceCodeStyle = "inline"

    # === Scheduling ===
    concurrent: int = Field(default=2, ge=1)
    skip_existing: bool = False

    # === Cache ===
    db_path: Path | None = None
    cache_backend: Literal["sqlite", "json"] = "sqlite"

    # === Logging ===
    verbose: bool = True
    environment: Literal["development", "production", "test"] | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None

    # --- Validators ---

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:  # noqa: N805
        if not v.strip():
            raise ValueError("base_url must not be empty")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        errors: list[str] = []

        if self.output_format == "png" and self.renderer == "placeholder":
            errors.append("placeholder renderer only produces svg output")

        if not self.document_extensions_list:
            errors.append("DOCUMENT_EXTENSIONS must list at least one extension")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def document_extensions_list(self) -> list[str]:
        """Parse comma-separated extensions, normalized to lowercase with a dot."""
        exts = []
        for raw in self.document_extensions.split(","):
            ext = raw.strip().lower()
            if not ext:
                continue
            exts.append(ext if ext.startswith(".") else f".{ext}")
        return exts

    @property
    def effective_source_style(self) -> SourceCodeStyle:
        """Source style actually applied by the rewriter.

        ``footnote`` is reserved and behaves like ``none``.
        """
        if not self.include_source_code or self.source_code_style == "footnote":
            return "none"
        return self.source_code_style

    @property
    def render_themes(self) -> list[str]:
        """Themes rendered per diagram, default theme first."""
        if self.generate_both_themes:
            return ["light", "dark"]
        return [self.default_theme]


def with_overrides(settings: Settings, **overrides: Any) -> Settings:
    """Return a new validated Settings with ``overrides`` applied.

    The original value is left untouched.
    """
    data = settings.model_dump()
    data.update(overrides)
    return Settings(_env_file=None, **data)  # type: ignore[call-arg]


def apply_environment(settings: Settings) -> Settings:
    """Adjust verbosity for the configured environment."""
    if settings.environment == "production" and settings.verbose:
        return with_overrides(settings, verbose=False)
    if settings.environment == "development" and not settings.verbose:
        return with_overrides(settings, verbose=True)
    return settings


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment / .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return apply_environment(Settings(**overrides))  # type: ignore[arg-type]
