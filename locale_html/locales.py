from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class Locale:
    """A target locale and the label shown for it in a language switcher."""
    id: str
    is_primary: bool = False
    cue: str = ""
    cue_code: str = ""

    @property
    def label(self):
        return self.cue or self.id

    @property
    def code(self):
        return self.cue_code or self.id


DEFAULT_LOCALES = (
    Locale(id="en", is_primary=True, cue="English", cue_code="en"),
    Locale(id="es", cue="En Español", cue_code="es"),
)


def locale_from_dict(data):
    """Build a Locale from a task-style descriptor ({"id", "localeCue", ...})."""
    if isinstance(data, str):
        return Locale(id=data)
    if not isinstance(data, dict) or not data.get("id"):
        raise ConfigurationError(f"Locale descriptor must have an id: {data!r}")
    return Locale(
        id=str(data["id"]),
        is_primary=bool(data.get("isPrimary", False)),
        cue=data.get("localeCue", ""),
        cue_code=data.get("localeCueCode", ""),
    )


def resolve_locales(descriptors):
    """
    Validate an ordered list of locales.

    Ids must be unique and exactly one locale may be primary; when none is
    flagged the first one becomes primary.
    """
    locales = [d if isinstance(d, Locale) else locale_from_dict(d) for d in descriptors]
    if not locales:
        raise ConfigurationError("At least one locale must be configured.")

    seen = set()
    for locale in locales:
        if locale.id in seen:
            raise ConfigurationError(f'Locale "{locale.id}" is configured more than once.')
        seen.add(locale.id)

    primaries = [locale for locale in locales if locale.is_primary]
    if len(primaries) > 1:
        ids = ", ".join(locale.id for locale in primaries)
        raise ConfigurationError(f"Only one locale can be primary, got: {ids}")
    if not primaries:
        first = locales[0]
        locales[0] = Locale(id=first.id, is_primary=True, cue=first.cue, cue_code=first.cue_code)

    return tuple(locales)


def primary_locale(locales):
    return next(locale for locale in locales if locale.is_primary)


def merge_discovered(configured, tags):
    """
    Combine configured locales with the language tags found in a TMX document.

    The primary locale always comes first. Configured descriptors keep their
    labels; tags without a descriptor get a bare Locale.
    """
    primary = primary_locale(configured)
    by_id = {locale.id: locale for locale in configured}

    merged = [primary]
    for tag in tags:
        if tag == primary.id or any(locale.id == tag for locale in merged):
            continue
        merged.append(by_id.get(tag, Locale(id=tag)))
    return tuple(merged)
