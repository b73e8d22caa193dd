"""
Post-processing of rendered HTML: minification and crawler injection.

Minification works on the token stream, not on a parsed tree. Tags are copied
through byte for byte, so markup that relies on optional end tags
(<li>a<li>b, <p>one<p>two) keeps its structure; only text between tags and
comments are touched.
"""

import logging
from collections import namedtuple

import regex as re

from .errors import PostProcessError
from .outcome import Outcome

logger = logging.getLogger(__name__)

HEAD_CLOSE = "</head>"

HTML_WHITESPACE = re.compile(r'[ \t\n\r\f]+')
CONDITIONAL_COMMENT = re.compile(r'^<!--\s*\[if\b|<!\[endif\]\s*-->$', re.IGNORECASE)

ATTRIBUTES = r'''(?:[^>"']|"[^"]*"|'[^']*')*'''
COMMENT = re.compile(r'<!--.*?-->', re.DOTALL)
# Contents are kept verbatim.
RAW_TEXT_START = re.compile(r'<(pre|textarea|script|style)(?![\w:-])', re.IGNORECASE)
RAW_TEXT = re.compile(r'<(pre|textarea|script|style)(?![\w:-])' + ATTRIBUTES + r'>.*?</\1\s*>', re.DOTALL | re.IGNORECASE)
TAG = re.compile(r'</?([A-Za-z][A-Za-z0-9:-]*)' + ATTRIBUTES + r'>')
DECLARATION = re.compile(r'<[!?][^>]*>')

# Whitespace next to these tags is significant and collapses to one space;
# around every other tag it is dropped.
INLINE_TAGS = {
    "a", "abbr", "acronym", "b", "bdi", "bdo", "big", "br", "button", "cite",
    "code", "data", "del", "dfn", "em", "font", "i", "img", "input", "ins",
    "kbd", "label", "mark", "math", "meter", "nobr", "object", "output",
    "picture", "progress", "q", "rp", "rt", "ruby", "s", "samp", "select",
    "small", "span", "strike", "strong", "sub", "sup", "svg", "textarea",
    "time", "tt", "u", "var", "video", "audio", "wbr"
}

Token = namedtuple("Token", "kind text name")


def is_conditional_comment(comment):
    return bool(CONDITIONAL_COMMENT.search(comment))


def _append_text(tokens, text):
    if tokens and tokens[-1].kind == "text":
        tokens[-1] = Token("text", tokens[-1].text + text, None)
    else:
        tokens.append(Token("text", text, None))


def tokenize(html):
    """
    Split html into text, comment, raw-text element, tag and declaration tokens.

    Raises PostProcessError for an unterminated comment or raw-text element.
    """
    tokens = []
    pos = 0
    while pos < len(html):
        start = html.find("<", pos)
        if start == -1:
            _append_text(tokens, html[pos:])
            break
        if start > pos:
            _append_text(tokens, html[pos:start])

        if html.startswith("<!--", start):
            match = COMMENT.match(html, start)
            if not match:
                raise PostProcessError(f"Unterminated comment at offset {start}")
            tokens.append(Token("comment", match.group(), None))
        elif RAW_TEXT_START.match(html, start):
            match = RAW_TEXT.match(html, start)
            if not match:
                name = RAW_TEXT_START.match(html, start).group(1)
                raise PostProcessError(f"Unterminated <{name}> at offset {start}")
            tokens.append(Token("raw", match.group(), match.group(1).lower()))
        else:
            match = TAG.match(html, start)
            if match:
                tokens.append(Token("tag", match.group(), match.group(1).lower()))
            else:
                match = DECLARATION.match(html, start)
                if match:
                    tokens.append(Token("decl", match.group(), None))
                else:
                    # A stray "<" is text.
                    _append_text(tokens, "<")
                    pos = start + 1
                    continue
        pos = match.end()
    return tokens


def _strip_comments(tokens):
    kept = []
    for token in tokens:
        if token.kind == "comment" and not is_conditional_comment(token.text):
            continue
        if token.kind == "text":
            _append_text(kept, token.text)
        else:
            kept.append(token)
    return kept


def _is_boundary(neighbor):
    """True when whitespace next to neighbor (None = document edge) can go."""
    if neighbor is None:
        return True
    if neighbor.kind == "text":
        return False
    if neighbor.kind in ("tag", "raw"):
        return neighbor.name not in INLINE_TAGS
    return True


def _collapse_whitespace(tokens):
    out = []
    for index, token in enumerate(tokens):
        if token.kind != "text":
            out.append(token.text)
            continue

        previous = tokens[index - 1] if index > 0 else None
        following = tokens[index + 1] if index + 1 < len(tokens) else None

        collapsed = HTML_WHITESPACE.sub(" ", token.text)
        if collapsed.startswith(" ") and _is_boundary(previous):
            collapsed = collapsed[1:]
        if collapsed.endswith(" ") and _is_boundary(following):
            collapsed = collapsed[:-1]
        out.append(collapsed)
    return "".join(out)


def minify(html):
    """
    Remove comments and collapse whitespace in rendered HTML.

    Returns an Outcome; a failure carries a PostProcessError and the caller
    is expected to drop the output.
    """
    try:
        tokens = _strip_comments(tokenize(html))
    except PostProcessError as e:
        return Outcome.failure(PostProcessError(f"Minification failed: {e}"))
    return Outcome.success(_collapse_whitespace(tokens))


def inject(html, fragment):
    """
    Splice fragment into html right before the first </head>.

    Textual, not HTML-aware. Without a </head> marker the fragment is
    appended to the end of the document.
    """
    index = html.find(HEAD_CLOSE)
    if index == -1:
        logger.debug("No %s marker found, appending crawler fragment", HEAD_CLOSE)
        return html + fragment
    return html[:index] + fragment + html[index:]
