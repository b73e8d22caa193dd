"""
i18n reference table.

The table maps locale id -> variable name -> display text. It is built once
per run from the translation units and is never mutated afterwards; the same
object feeds every template render and is written out as the reference file.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from .errors import VariableCollisionError
from .naming import normalize

logger = logging.getLogger(__name__)

# Bookkeeping fields stamped into every locale for the language switcher.
RESERVED_NAMES = ("localeId", "localeCode", "localeCueCode", "localeCue", "currentYear")


class ReferenceTable:
    def __init__(self, locales, entries, variables):
        self.locales = tuple(locales)
        self._entries = entries
        self.variables = tuple(variables)

    def for_locale(self, locale_id):
        return dict(self._entries[locale_id])

    def context(self, locale_id):
        """
        Render scope for one locale.

        Every variable known to the table is bound; names a locale has no
        translation for render as an empty string.
        """
        scope = dict.fromkeys(self.variables, "")
        scope.update(self._entries[locale_id])
        return scope

    def to_dict(self):
        return {locale.id: dict(self._entries[locale.id]) for locale in self.locales}

    def write(self, path):
        """Persist the table as pretty-printed JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=4, ensure_ascii=False)
            f.write("\n")
        return path


def _cue_for(locales, index):
    other = locales[(index + 1) % len(locales)]
    return other.label, other.code


def _bookkeeping(locales, index, year):
    locale = locales[index]
    cue, cue_code = _cue_for(locales, index)
    return {
        "localeId": locale.id,
        "localeCode": "" if locale.is_primary else locale.id,
        "localeCueCode": cue_code,
        "localeCue": cue,
        "currentYear": year,
    }


def build(units, locales, year=None):
    """
    Build the reference table from translation units.

    The primary locale falls back to the unit key when it has no explicit
    variant. Other locales only get the variants that exist. Two keys that
    normalize to the same variable name raise VariableCollisionError.
    """
    year = year or datetime.now().strftime("%Y")
    entries = {}
    for index, locale in enumerate(locales):
        entries[locale.id] = _bookkeeping(locales, index, year)

    variables = list(RESERVED_NAMES)
    owners = {}
    for unit in units:
        if not unit.key:
            continue

        variable = normalize(unit.key)
        if not variable:
            logger.debug("Skipping \"%s\": no letters or digits to name a variable", unit.key)
            continue
        if variable in RESERVED_NAMES:
            raise VariableCollisionError(
                f'"{unit.key}" normalizes to "{variable}", which is a reserved variable name.'
            )
        if variable in owners:
            raise VariableCollisionError(
                f'"{unit.key}" and "{owners[variable]}" both normalize to "{variable}".'
            )
        owners[variable] = unit.key
        variables.append(variable)

        for locale in locales:
            text = unit.variants.get(locale.id)
            if text is not None:
                entries[locale.id][variable] = text
            elif locale.is_primary:
                entries[locale.id][variable] = unit.key

    logger.debug("Built reference table: %d variables, %d locales", len(owners), len(entries))
    return ReferenceTable(locales, entries, variables)
