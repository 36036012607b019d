"""Site configuration.

SiteConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SiteConfig(site_dir="blog", enable_index_url=True)
    """

    # Layout
    site_dir: str | Path = "."
    destination_dir: str | Path = "_site"

    # URLs — "posts/hello/" instead of "posts/hello.html"
    enable_index_url: bool = False

    # Templates
    autoescape: bool = False  # Context values are pre-rendered HTML
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Markdown
    markdown_plugins: tuple[str, ...] | None = None  # None = all patitas plugins
    highlight: bool = False

    @property
    def site_path(self) -> Path:
        return Path(self.site_dir)

    @property
    def destination_path(self) -> Path:
        """Output directory, resolved against the site directory when relative."""
        dest = Path(self.destination_dir)
        if dest.is_absolute():
            return dest
        return self.site_path / dest

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SiteConfig:
        """Build a config from a plain mapping (e.g. a parsed config file).

        Raises:
            ConfigurationError: If *data* contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown site configuration keys: {', '.join(unknown)}"
            raise ConfigurationError(msg)
        values = dict(data)
        plugins = values.get("markdown_plugins")
        if plugins is not None:
            values["markdown_plugins"] = tuple(plugins)
        return cls(**values)
