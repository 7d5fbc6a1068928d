"""Configuration management using Pydantic Settings"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .resolver import ResolverOptions


class Settings(BaseSettings):
    """Application settings with environment variable support (MDSERVE_*)"""

    model_config = SettingsConfigDict(
        env_prefix="MDSERVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Documents ===
    root_directory: Path = Field(
        default=Path("./docs"),
        description="Directory holding the Markdown documents"
    )
    default_page_name: str = Field(
        default="index",
        description="Page served for '/' and for paths ending in '/'"
    )
    file_extension: str = Field(
        default="md",
        description="Extension of document files, with or without the leading dot"
    )
    use_extension_in_url: bool = Field(
        default=False,
        description="Allow URLs that already carry the file extension to address files literally"
    )

    # === Rendering ===
    view: str | None = Field(
        default=None,
        description="Template used to render documents; JSON is returned when unset"
    )
    templates_dir: Path | None = Field(
        default=None,
        description="Directory containing view templates"
    )
    pre_parse: Literal["default", "eager"] = Field(
        default="default",
        description="default: templates convert content themselves | eager: HTML is passed in as parsed_content"
    )
    highlight: bool = Field(default=True, description="Pygments highlighting of code blocks")

    # === Server ===
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")

    def resolver_options(self) -> ResolverOptions:
        return ResolverOptions(
            default_page_name=self.default_page_name,
            file_extension=self.file_extension,
            use_extension_in_url=self.use_extension_in_url,
        )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings"""
    global _settings
    _settings = Settings()
    return _settings
