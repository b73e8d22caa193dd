from jinja2 import Environment, StrictUndefined, TemplateError

from .errors import TemplateRenderError

# Underscore-style delimiters: <%= name %> prints, <% ... %> runs a statement.
TEMPLATE_SYNTAX = {
    "variable_start_string": "<%=",
    "variable_end_string": "%>",
    "block_start_string": "<%",
    "block_end_string": "%>",
    "comment_start_string": "<%#",
    "comment_end_string": "%>",
}


def make_environment():
    return Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        **TEMPLATE_SYNTAX,
    )


_environment = make_environment()


def compile_template(template_text):
    try:
        return _environment.from_string(template_text)
    except TemplateError as e:
        raise TemplateRenderError(str(e)) from e


def render(template_text, mapping):
    """Substitute the placeholders of template_text from mapping."""
    return render_compiled(compile_template(template_text), mapping)


def render_compiled(template, mapping):
    try:
        return template.render(mapping)
    except TemplateError as e:
        raise TemplateRenderError(str(e)) from e
