class LocaleHtmlError(Exception):
    """Base class for every failure raised by a locale-html run."""


class ConfigurationError(LocaleHtmlError):
    """A required option is missing or a referenced file does not exist."""


class SourceParseError(LocaleHtmlError):
    """The locale source (JSON dictionary or TMX document) is malformed."""


class VariableCollisionError(SourceParseError):
    """Two keys normalize to the same template variable name."""


class TemplateRenderError(LocaleHtmlError):
    """A template references a variable that is not in the reference table."""


class PostProcessError(LocaleHtmlError):
    """Minification or crawler injection failed for one output."""
