"""
One locale-html run.

    read locale source -> build reference table -> for each template, for each
    locale: render -> minify -> write -> (crawler injection) -> write reference

Configuration and source failures abort the run before anything is written.
Template and post-processing failures only skip the affected output.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import LocaleHtmlError, TemplateRenderError
from .locales import merge_discovered, primary_locale
from .postprocess import inject, minify
from .reference import build
from .render import compile_template, render_compiled
from .sources import read_source
from .writer import destination, expand_sources, locale_slug, read_text, write_html

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    written: list = field(default_factory=list)
    failed: list = field(default_factory=list)
    reference_file: Path = None
    aborted: bool = False

    @property
    def exit_code(self):
        return 1 if self.aborted or self.failed else 0

    def fail(self, path, reason):
        self.failed.append((Path(path), str(reason)))


def _abort(summary, error):
    logger.warning("⚠️ %s", error)
    summary.aborted = True
    return summary


def run_locales(options, source):
    if options.tmx:
        return merge_discovered(options.locales, source.tags)
    return options.locales


def _is_crawler_page(options, locale, file, base, crawler_locale):
    if not options.crawler_fragment or locale.id != crawler_locale:
        return False
    try:
        return file.relative_to(base) == Path(options.crawler_template)
    except ValueError:
        return False


def _warn_unknown_locales(options, locales):
    """A mapping or crawler locale that is not a run locale would produce nothing."""
    ids = [locale.id for locale in locales]
    for mapping in options.files:
        if mapping.locale and mapping.locale not in ids:
            logger.warning(
                '⚠️ File mapping locale "%s" matches none of the locales: %s', mapping.locale, ", ".join(ids)
            )
    if options.crawler_fragment and options.crawler_locale and options.crawler_locale not in ids:
        logger.warning(
            '⚠️ crawlerLocale "%s" matches none of the locales: %s', options.crawler_locale, ", ".join(ids)
        )


class Run:
    def __init__(self, options):
        self.options = options
        self.summary = RunSummary()
        self.table = None
        self.crawler_fragment = None

    def execute(self):
        options = self.options

        outcome = read_source(options)
        if not outcome.ok:
            return _abort(self.summary, outcome.error)
        source = outcome.value

        locales = run_locales(options, source)
        try:
            self.table = build(source.units, locales)
        except LocaleHtmlError as e:
            return _abort(self.summary, e)

        if options.crawler_fragment:
            try:
                self.crawler_fragment = read_text(options.crawler_fragment)
            except (OSError, UnicodeDecodeError) as e:
                return _abort(self.summary, f'Could not read crawler fragment "{options.crawler_fragment}": {e}')

        _warn_unknown_locales(options, locales)

        for mapping in options.files:
            targets = [locale for locale in locales if not mapping.locale or locale.id == mapping.locale]
            for file, base in expand_sources(mapping):
                self.generate(file, base, mapping.dest, targets)

        self.write_reference()
        logger.info(
            "Generated %d files, %d failed.", len(self.summary.written), len(self.summary.failed)
        )
        return self.summary

    def render_all(self, file, locales):
        """Render file for every locale, or for none if any render fails."""
        try:
            template = compile_template(read_text(file))
            return {locale.id: render_compiled(template, self.table.context(locale.id)) for locale in locales}
        except TemplateRenderError as e:
            logger.warning(
                '⚠️ "%s" had a variable that was not found in "%s": %s',
                file, self.options.source_path, e
            )
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('⚠️ Could not read template "%s": %s', file, e)
        self.summary.fail(file, "template")
        return None

    def generate(self, file, base, dest, locales):
        options = self.options
        rendered = self.render_all(file, locales)
        if rendered is None:
            return

        crawler_locale = options.crawler_locale or primary_locale(self.table.locales).id
        for locale in locales:
            html = rendered[locale.id]
            target = destination(dest, locale_slug(locale, options.primary_at_root), file, base, options.flatten)

            if options.minify:
                outcome = minify(html)
                if not outcome.ok:
                    logger.warning('⚠️ Skipping "%s": %s', target, outcome.error)
                    self.summary.fail(target, outcome.error)
                    continue
                html = outcome.value

            self.write(target, html)

            if _is_crawler_page(options, locale, file, base, crawler_locale):
                self.write(target.with_name(options.crawler_output), inject(html, self.crawler_fragment))

    def write(self, target, html):
        try:
            self.summary.written.append(write_html(target, html))
        except OSError as e:
            logger.warning('⚠️ Could not write "%s": %s', target, e)
            self.summary.fail(target, e)

    def write_reference(self):
        path = self.options.variables_file
        try:
            self.summary.reference_file = self.table.write(path)
        except OSError as e:
            logger.warning('⚠️ Could not write reference file "%s": %s', path, e)
            self.summary.fail(path, e)
            return
        logger.info('✅ Successfully generated internationalization reference file: "%s".', path)


def run(options):
    return Run(options).execute()
