"""
Task options.

Options come from three places, later ones winning: built-in defaults, a
JSON config file using the camelCase keys of the build task, and
command line overrides. The result is validated into an Options object.

    {
        "i18n": "locales/i18n.json",
        "variablesFile": "build/variables.json",
        "minify": true,
        "locales": [
            {"id": "en", "localeCue": "English", "localeCueCode": "en", "isPrimary": true},
            {"id": "es", "localeCue": "En Español", "localeCueCode": "es"}
        ],
        "files": [{"src": "templates/**/*.html", "dest": "build"}]
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError
from .locales import DEFAULT_LOCALES, primary_locale, resolve_locales

logger = logging.getLogger(__name__)

DEFAULTS = {
    "flatten": False,
    "minify": False,
    "primaryAtRoot": False,
    "variablesFile": "variables.json",
    "crawlerTemplate": "index.html",
    "crawlerOutput": "index.php",
    "files": [],
}

KNOWN_KEYS = set(DEFAULTS) | {"i18n", "tmx", "locales", "fbCrawlerPHP", "crawlerLocale"}


@dataclass(frozen=True)
class FileMapping:
    src: tuple
    dest: Path
    locale: Optional[str] = None


@dataclass
class Options:
    i18n: Optional[Path] = None
    tmx: Optional[Path] = None
    variables_file: Path = Path(DEFAULTS["variablesFile"])
    flatten: bool = False
    minify: bool = False
    primary_at_root: bool = False
    locales: tuple = DEFAULT_LOCALES
    locales_configured: bool = False
    crawler_fragment: Optional[Path] = None
    crawler_template: str = DEFAULTS["crawlerTemplate"]
    crawler_locale: Optional[str] = None
    crawler_output: str = DEFAULTS["crawlerOutput"]
    files: list = field(default_factory=list)

    @property
    def primary(self):
        return primary_locale(self.locales)

    @property
    def source_path(self):
        return self.tmx or self.i18n


def _optional_path(value):
    return Path(value) if value else None


def parse_file_mapping(entry):
    # Each file should have src and dest; locale is optional.
    if not isinstance(entry, dict) or "src" not in entry or "dest" not in entry:
        raise ConfigurationError(
            "Configuration is not properly set up. Each file must have src and dest."
        )
    src = entry["src"]
    if isinstance(src, str):
        src = [src]
    if not src or not all(isinstance(pattern, str) and pattern for pattern in src):
        raise ConfigurationError(f"File src must be a glob pattern or a list of them: {entry['src']!r}")
    return FileMapping(src=tuple(src), dest=Path(entry["dest"]), locale=entry.get("locale"))


def read_config_file(path):
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f'The config file "{path}" was not found.')
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f'"{path}" is not valid JSON: {e}') from e
    if not isinstance(data, dict):
        raise ConfigurationError(f'"{path}" must contain a JSON object of options.')
    return data


def build_options(raw):
    """Validate a merged dict of camelCase options into Options."""
    unknown = sorted(set(raw) - KNOWN_KEYS)
    if unknown:
        logger.warning("⚠️ Ignoring unknown options: %s", ", ".join(unknown))

    if not raw.get("i18n") and not raw.get("tmx"):
        raise ConfigurationError("Configuration is not properly set up. i18n or tmx option not provided.")
    if raw.get("i18n") and raw.get("tmx"):
        raise ConfigurationError("Configuration is not properly set up. Use either i18n or tmx, not both.")

    locales_configured = bool(raw.get("locales"))
    locales = resolve_locales(raw["locales"]) if locales_configured else DEFAULT_LOCALES

    options = Options(
        i18n=_optional_path(raw.get("i18n")),
        tmx=_optional_path(raw.get("tmx")),
        variables_file=Path(raw.get("variablesFile") or DEFAULTS["variablesFile"]),
        flatten=bool(raw.get("flatten")),
        minify=bool(raw.get("minify")),
        primary_at_root=bool(raw.get("primaryAtRoot")),
        locales=locales,
        locales_configured=locales_configured,
        crawler_fragment=_optional_path(raw.get("fbCrawlerPHP")),
        crawler_template=raw.get("crawlerTemplate") or DEFAULTS["crawlerTemplate"],
        crawler_locale=raw.get("crawlerLocale"),
        crawler_output=raw.get("crawlerOutput") or DEFAULTS["crawlerOutput"],
        files=[parse_file_mapping(entry) for entry in raw.get("files") or []],
    )

    ids = {locale.id for locale in options.locales}
    for mapping in options.files:
        if mapping.locale and mapping.locale not in ids and not options.tmx:
            raise ConfigurationError(f'File mapping locale "{mapping.locale}" is not a configured locale.')

    if options.crawler_fragment and not options.crawler_fragment.is_file():
        raise ConfigurationError(f'The crawler fragment "{options.crawler_fragment}" was not found.')

    return options


def load_options(path=None, overrides=None):
    raw = dict(DEFAULTS)
    if path:
        raw.update(read_config_file(path))
    overrides = overrides or {}
    # A source given on the command line replaces the configured one.
    if overrides.get("i18n"):
        raw.pop("tmx", None)
    if overrides.get("tmx"):
        raw.pop("i18n", None)
    for key, value in overrides.items():
        if value is not None:
            raw[key] = value
    return build_options(raw)

