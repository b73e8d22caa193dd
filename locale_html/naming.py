import regex as re

MAX_VARIABLE_LENGTH = 30
TRUNCATION_MARKER = "_"

WORD_START = re.compile(r'^([a-z])|\s+([a-z])')
NON_ALNUM = re.compile(r'[^A-Za-z0-9]')


def ucwords(text):
    """Capitalize the first letter of every word in text."""
    return WORD_START.sub(lambda m: m.group(0).upper(), str(text))


def normalize(text):
    """
    Convert a string of words to a camel-cased template variable name.

    "Hello World" -> "helloWorld". Names longer than MAX_VARIABLE_LENGTH are
    cut and marked with a trailing underscore, and names that would start
    with a digit get a leading underscore.
    """
    words = NON_ALNUM.sub("", ucwords(text))
    if len(words) > MAX_VARIABLE_LENGTH:
        words = words[:MAX_VARIABLE_LENGTH] + TRUNCATION_MARKER

    if words[:1].isdigit():
        words = "_" + words

    return words[:1].lower() + words[1:]
