import json

import pytest

from locale_html.errors import VariableCollisionError
from locale_html.locales import DEFAULT_LOCALES, Locale
from locale_html.reference import RESERVED_NAMES, build
from locale_html.sources import TranslationUnit


def units(data):
    return [TranslationUnit(key=key, variants=variants) for key, variants in data.items()]


def test_build_welcome_example():
    table = build(units({"Welcome": {"es": "Bienvenido"}}), DEFAULT_LOCALES, year="2024")

    assert table.for_locale("en")["welcome"] == "Welcome"
    assert table.for_locale("es")["welcome"] == "Bienvenido"


def test_bookkeeping_fields():
    table = build([], DEFAULT_LOCALES, year="2024")

    assert table.for_locale("en") == {
        "localeId": "en",
        "localeCode": "",
        "localeCueCode": "es",
        "localeCue": "En Español",
        "currentYear": "2024",
    }
    assert table.for_locale("es") == {
        "localeId": "es",
        "localeCode": "es",
        "localeCueCode": "en",
        "localeCue": "English",
        "currentYear": "2024",
    }


def test_cue_cycles_through_locales():
    locales = (
        Locale(id="en", is_primary=True, cue="English"),
        Locale(id="es", cue="Español"),
        Locale(id="fr", cue="Français", cue_code="fr-FR"),
    )
    table = build([], locales, year="2024")

    assert table.for_locale("en")["localeCue"] == "Español"
    assert table.for_locale("es")["localeCueCode"] == "fr-FR"
    assert table.for_locale("fr")["localeCue"] == "English"


def test_current_year_defaults_to_now():
    table = build([], DEFAULT_LOCALES)
    year = table.for_locale("en")["currentYear"]
    assert len(year) == 4 and year.isdigit()


def test_primary_variant_wins_over_key():
    table = build(units({"Colour": {"en": "Color", "es": "Color"}}), DEFAULT_LOCALES, year="2024")
    assert table.for_locale("en")["colour"] == "Color"


def test_missing_translation_is_absent():
    table = build(units({"Only English": {}}), DEFAULT_LOCALES, year="2024")

    assert table.for_locale("en")["onlyEnglish"] == "Only English"
    assert "onlyEnglish" not in table.for_locale("es")
    assert table.context("es")["onlyEnglish"] == ""
    assert "onlyEnglish" in table.variables


def test_empty_keys_are_skipped():
    table = build(units({"": {"es": "vacío"}}), DEFAULT_LOCALES, year="2024")
    assert set(table.for_locale("es")) == set(RESERVED_NAMES)


def test_collision_is_an_error():
    with pytest.raises(VariableCollisionError):
        build(units({"Hello World": {}, "hello world": {}}), DEFAULT_LOCALES, year="2024")


def test_collision_with_reserved_name():
    with pytest.raises(VariableCollisionError):
        build(units({"Current Year": {}}), DEFAULT_LOCALES, year="2024")


def test_to_dict_follows_locale_order():
    locales = (Locale(id="es"), Locale(id="en", is_primary=True))
    table = build(units({"Welcome": {"es": "Bienvenido"}}), locales, year="2024")
    assert list(table.to_dict()) == ["es", "en"]


def test_for_locale_returns_a_copy():
    table = build(units({"Welcome": {"es": "Bienvenido"}}), DEFAULT_LOCALES, year="2024")
    table.for_locale("es")["welcome"] = "changed"
    assert table.for_locale("es")["welcome"] == "Bienvenido"


def test_write_reference_file(tmp_path):
    table = build(units({"Welcome": {"es": "Bienvenido"}}), DEFAULT_LOCALES, year="2024")
    path = table.write(tmp_path / "out" / "variables.json")

    text = path.read_text(encoding="utf-8")
    assert json.loads(text) == table.to_dict()
    assert '    "en": {' in text
    assert "En Español" in text


def test_keys_without_letters_or_digits_are_skipped():
    table = build(units({"!!!": {"es": "¡¡¡"}, "???": {}, "Welcome": {}}), DEFAULT_LOCALES, year="2024")

    assert "" not in table.for_locale("en")
    assert "" not in table.variables
    assert table.for_locale("en")["welcome"] == "Welcome"
