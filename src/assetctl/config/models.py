"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, assetctl.toml only contains overrides.
A project laid out like the defaults needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# --- assetctl.toml sections ---


class PathRegistry(BaseModel):
    """[paths] section — glob patterns per asset category.

    Each category holds an ordered list of patterns. Patterns starting
    with ``!`` subtract from the positive matches before them. A bare
    string in TOML is accepted and wrapped into a one-item list.
    """

    model_config = {"frozen": True}

    sass: tuple[str, ...] = ("src/sass/**/*.scss", "!src/sass/**/widget.scss")
    less: tuple[str, ...] = ("src/less/styles.less",)
    js: tuple[str, ...] = ("src/js/**/*.js",)
    images: tuple[str, ...] = ("src/img/**/*.+(png|jpg|gif|svg)",)
    html: tuple[str, ...] = ("html/**/*.kit",)

    @field_validator("sass", "less", "js", "images", "html", mode="before")
    @classmethod
    def _wrap_single(cls, value: object) -> object:
        if isinstance(value, str):
            return (value,)
        return value

    def categories(self) -> dict[str, tuple[str, ...]]:
        """Return the registry as a ``category -> patterns`` mapping."""
        return {
            "sass": self.sass,
            "less": self.less,
            "js": self.js,
            "images": self.images,
            "html": self.html,
        }


class OutputConfig(BaseModel):
    """[output] section — destination directories, relative to the project root."""

    model_config = {"frozen": True}

    dist: str = "dist"
    css: str = "dist/css"
    js: str = "dist/js"
    img: str = "dist/img"
    html: str = "."


class ScriptsConfig(BaseModel):
    """[scripts] section."""

    model_config = {"frozen": True}

    files: tuple[str, ...] = ("src/js/alert.js", "src/js/project.js")
    bundle: str = "project.js"


class LessConfig(BaseModel):
    """[less] section."""

    model_config = {"frozen": True}

    output_name: str = "styles.min.css"


class NotifierConfig(BaseModel):
    """[notifier] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    messages: dict[str, str] = Field(
        default_factory=lambda: {
            "sass": "CSS was successfully compiled!",
            "js": "Javascript is ready!",
            "kit": "HTML was delivered!",
        }
    )
    prefix: str = "====="
    suffix: str = "====="
    exclusions: tuple[str, ...] = (".map",)


class ImagesConfig(BaseModel):
    """[images] section."""

    model_config = {"frozen": True}

    cache_path: str = ".assetctl/cache.db"
    jpeg_quality: int = Field(default=85, ge=1, le=95)


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = 3000
    livereload_port: int = 35729
    open_browser: bool = True
    delay: float | None = None


class ZipConfig(BaseModel):
    """[zip] section."""

    model_config = {"frozen": True}

    name: str = "project.zip"
    exclude: tuple[str, ...] = ("node_modules/**", ".assetctl/**")


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    jobs: int = Field(default=1, ge=1)
