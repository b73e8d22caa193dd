"""
locale-html: render HTML templates once per locale from a JSON dictionary or
a TMX translation memory.
"""

from .config import Options, load_options
from .errors import (
    ConfigurationError,
    LocaleHtmlError,
    PostProcessError,
    SourceParseError,
    TemplateRenderError,
    VariableCollisionError,
)
from .locales import Locale
from .naming import normalize
from .pipeline import RunSummary, run
from .reference import ReferenceTable, build
from .render import render

__version__ = "0.4.0"
