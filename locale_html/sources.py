"""
Locale source readers.

Two formats are supported and both are read into the same ordered list of
TranslationUnit objects:

- a JSON dictionary: {"<source phrase>": {"<locale>": "<translated text>"}}
- a TMX document: <tmx><body><tu tuid="..."><tuv xml:lang="..."><seg>...</seg>
  </tuv></tu></body></tmx>

Readers never raise for a broken source. They return an Outcome carrying
either the parsed LocaleSource or the error, and the caller decides whether
to abort.
"""

import json
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigurationError, SourceParseError
from .outcome import Outcome

logger = logging.getLogger(__name__)

XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
LANG_ATTRS = (XML_LANG, "lang")


@dataclass
class TranslationUnit:
    key: str
    variants: dict = field(default_factory=dict)


@dataclass
class LocaleSource:
    path: Path
    units: list
    tags: list = field(default_factory=list)


def _collect_tags(units):
    tags = []
    for unit in units:
        for tag in unit.variants:
            if tag not in tags:
                tags.append(tag)
    return tags


def read_json_source(path):
    path = Path(path)
    if not path.is_file():
        return Outcome.failure(ConfigurationError(f'The i18n file "{path}" was not found.'))

    try:
        with open(path, "r", encoding="utf-8") as f:
            dictionary = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Outcome.failure(SourceParseError(f'"{path}" is not valid JSON: {e}'))

    if not isinstance(dictionary, dict):
        return Outcome.failure(SourceParseError(f'"{path}" must contain a JSON object of phrases.'))

    units = []
    for key, translations in dictionary.items():
        if translations is None:
            logger.debug("Skipping \"%s\": no translations", key)
            continue
        if not isinstance(translations, dict):
            return Outcome.failure(SourceParseError(
                f'Translations for "{key}" in "{path}" must be an object of locale/text pairs.'
            ))
        # A null translation counts as missing.
        variants = {locale: text for locale, text in translations.items() if text is not None}
        units.append(TranslationUnit(key=key, variants=variants))

    logger.debug("Read %d phrases from %s", len(units), path)
    return Outcome.success(LocaleSource(path=path, units=units, tags=_collect_tags(units)))


def _variant_lang(tuv):
    for attr in LANG_ATTRS:
        if tuv.get(attr):
            return tuv.get(attr)
    return None


def _segment_text(tuv):
    seg = tuv.find("seg")
    if seg is None:
        return None
    # Inline TMX markup (<bpt>, <ph>, ...) is flattened to its text.
    return "".join(seg.itertext())


def read_tmx_source(path, primary_id):
    """Read a TMX document. Units without a tuid are keyed by their primary segment."""
    path = Path(path)
    if not path.is_file():
        return Outcome.failure(ConfigurationError(f'The tmx file "{path}" was not found.'))

    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        return Outcome.failure(SourceParseError(f'"{path}" is not a valid TMX document: {e}'))

    body = root.find("body")
    if root.tag != "tmx" or body is None:
        return Outcome.failure(SourceParseError(f'"{path}" has no <tmx><body> element.'))

    units = []
    for tu in body.iter("tu"):
        variants = {}
        for tuv in tu.findall("tuv"):
            lang = _variant_lang(tuv)
            text = _segment_text(tuv)
            if lang and text is not None:
                variants[lang] = text

        key = tu.get("tuid") or variants.get(primary_id)
        if not key:
            logger.debug("Skipping translation unit without tuid or %s segment", primary_id)
            continue
        units.append(TranslationUnit(key=key, variants=variants))

    logger.debug("Read %d translation units from %s", len(units), path)
    return Outcome.success(LocaleSource(path=path, units=units, tags=_collect_tags(units)))


def read_source(options):
    """Read whichever locale source the options point at."""
    if options.tmx:
        return read_tmx_source(options.tmx, options.primary.id)
    return read_json_source(options.i18n)
