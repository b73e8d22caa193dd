import json

import pytest

from locale_html.config import load_options

TMX_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<tmx version="1.4">
  <header srclang="en" datatype="plaintext" segtype="sentence" adminlang="en" o-tmf="none" creationtool="test" creationtoolversion="1"/>
  <body>
    <tu tuid="Hello World">
      <tuv xml:lang="es"><seg>Hola Mundo</seg></tuv>
      <tuv xml:lang="fr"><seg>Bonjour le monde</seg></tuv>
    </tu>
    <tu>
      <tuv xml:lang="en"><seg>Goodbye</seg></tuv>
      <tuv xml:lang="de"><seg>Auf Wiedersehen</seg></tuv>
    </tu>
    <tu>
      <tuv xml:lang="es"><seg>sin clave</seg></tuv>
    </tu>
  </body>
</tmx>
"""


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path):
    """A small site: two templates and a JSON dictionary."""
    templates = tmp_path / "templates"
    (templates / "about").mkdir(parents=True)
    (templates / "index.html").write_text(
        "<html><head><title><%= welcome %></title></head>"
        "<body><p><%= helloWorld %></p></body></html>\n",
        encoding="utf-8",
    )
    (templates / "about" / "team.html").write_text(
        "<h1><%= team %></h1>\n<p><%= onlyEnglish %></p>\n", encoding="utf-8"
    )
    write_json(tmp_path / "i18n.json", {
        "Welcome": {"es": "Bienvenido"},
        "Hello World": {"es": "Hola Mundo"},
        "Team": {"es": "Equipo"},
        "Only English": {},
    })
    return tmp_path


@pytest.fixture
def make_options(site):
    def factory(**overrides):
        raw = {
            "i18n": str(site / "i18n.json"),
            "variablesFile": str(site / "build" / "variables.json"),
            "files": [{"src": str(site / "templates" / "**" / "*.html"), "dest": str(site / "build")}],
        }
        raw.update(overrides)
        return load_options(overrides=raw)
    return factory
