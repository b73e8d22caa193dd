import glob
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

GLOB_CHARS = set("*?[")


def static_prefix(pattern):
    """Directory part of a glob pattern before its first wildcard component."""
    parts = Path(pattern).parts
    prefix = []
    for part in parts[:-1]:
        if GLOB_CHARS & set(part):
            break
        prefix.append(part)
    return Path(*prefix) if prefix else Path(".")


def expand_sources(mapping):
    """
    Expand the src patterns of a file mapping.

    Yields (file, base) pairs in sorted order, where base is the static
    prefix the file's destination path is computed relative to.
    """
    seen = set()
    for pattern in mapping.src:
        matches = sorted(glob.glob(pattern, recursive=True))
        if not matches:
            logger.warning('⚠️ The source file "%s" was not found.', pattern)
        base = static_prefix(pattern)
        for match in matches:
            path = Path(match)
            if path.is_file() and path not in seen:
                seen.add(path)
                yield path, base


def locale_slug(locale, primary_at_root=False):
    if locale.is_primary and primary_at_root:
        return ""
    return locale.id


def destination(dest, slug, file, base, flatten=False):
    """Generate the output path of file for one locale."""
    if flatten:
        relative = Path(file.name)
    else:
        try:
            relative = file.relative_to(base)
        except ValueError:
            relative = Path(file.name)
    folder = Path(dest) / slug if slug else Path(dest)
    return folder / relative


def write_html(path, content):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info('✅ Successfully generated translated HTML file "%s".', path)
    return path


def read_text(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
