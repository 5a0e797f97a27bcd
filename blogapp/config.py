"""
BlogApp Client Core — Application Configuration
=================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Read by the composition root, which hands plain values to each
       component's constructor.
When:  Loaded once at module import time; validated before dependencies
       are wired.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development except the Supabase
    credentials, which must be provided before `init_dependencies()` runs.

    Attributes are grouped by concern for readability.
    """

    # ── Supabase ──────────────────────────────────────────────────────────
    # Project URL and anon key from the Supabase dashboard (Settings → API)
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_anon_key: str = Field(default="", description="Supabase anon (public) key")

    # Table and bucket names used by the blog and auth data sources
    blogs_table: str = Field(default="blogs")
    profiles_table: str = Field(default="profiles")
    blog_images_bucket: str = Field(default="blog_images")

    # When True, an image whose row insert failed is removed again.
    # Default keeps the upload → insert sequence non-compensating.
    cleanup_orphaned_images: bool = Field(default=False)

    # ── Local Cache ───────────────────────────────────────────────────────
    # Writable directory holding one JSON file per cache box
    cache_dir: Path = Field(default=Path.home() / ".blogapp" / "cache")
    cache_box_name: str = Field(default="blogs")

    # ── Connectivity ──────────────────────────────────────────────────────
    # Comma-separated URLs probed in order; the first reachable one wins
    connectivity_check_urls: str = Field(
        default="https://one.one.one.one,https://icanhazip.com"
    )
    # Per-probe timeout in seconds
    connectivity_timeout: float = Field(default=5.0, gt=0, le=60)

    @property
    def connectivity_check_urls_list(self) -> List[str]:
        """Splits comma-separated probe URLs into a list, dropping blanks."""
        return [url.strip() for url in self.connectivity_check_urls.split(",") if url.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("cache_box_name")
    @classmethod
    def validate_cache_box_name(cls, v: str) -> str:
        """Box names become file names; keep them to a single path segment."""
        if not v or "/" in v or "\\" in v or v in {".", ".."}:
            raise ValueError(f"Invalid cache_box_name '{v}'")
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # SUPABASE_URL and supabase_url both work
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the backend credentials are configured.
        When:  Called by the composition root before the Supabase client is built.
        How:   Checks each required field and raises ValueError with guidance.
        """
        errors = []
        if not self.supabase_url:
            errors.append(
                "SUPABASE_URL is not set. "
                "Find it in the Supabase dashboard under Settings → API."
            )
        if not self.supabase_anon_key or self.supabase_anon_key == "your_supabase_anon_key_here":
            errors.append(
                "SUPABASE_ANON_KEY is not set. "
                "Use the project's anon (public) key, never the service role key."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, read by the composition root
settings = Settings()
