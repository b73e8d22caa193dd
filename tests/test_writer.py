from pathlib import Path

from locale_html.config import FileMapping
from locale_html.locales import Locale
from locale_html.writer import destination, expand_sources, locale_slug, static_prefix, write_html


def test_static_prefix():
    assert static_prefix("templates/**/*.html") == Path("templates")
    assert static_prefix("src/pages/*.html") == Path("src/pages")
    assert static_prefix("src/pages/index.html") == Path("src/pages")
    assert static_prefix("*.html") == Path(".")


def test_destination_keeps_relative_path():
    path = destination(Path("build"), "es", Path("templates/about/team.html"), Path("templates"))
    assert path == Path("build/es/about/team.html")


def test_destination_flatten():
    path = destination(Path("build"), "es", Path("templates/about/team.html"), Path("templates"), flatten=True)
    assert path == Path("build/es/team.html")


def test_destination_without_slug():
    path = destination(Path("build"), "", Path("templates/index.html"), Path("templates"))
    assert path == Path("build/index.html")


def test_locale_slug():
    en = Locale(id="en", is_primary=True)
    es = Locale(id="es")
    assert locale_slug(en) == "en"
    assert locale_slug(en, primary_at_root=True) == ""
    assert locale_slug(es, primary_at_root=True) == "es"


def test_expand_sources(site):
    mapping = FileMapping(src=(str(site / "templates" / "**" / "*.html"),), dest=site / "build")
    found = list(expand_sources(mapping))

    assert [path.relative_to(base) for path, base in found] == [
        Path("about/team.html"),
        Path("index.html"),
    ]


def test_expand_sources_warns_on_no_match(site, caplog):
    mapping = FileMapping(src=(str(site / "nowhere" / "*.html"),), dest=site / "build")
    assert list(expand_sources(mapping)) == []
    assert "was not found" in caplog.text


def test_write_html_creates_folders(tmp_path):
    path = write_html(tmp_path / "a" / "b" / "index.html", "<p>ñ</p>")
    assert path.read_text(encoding="utf-8") == "<p>ñ</p>"
