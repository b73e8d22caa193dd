import argparse
import logging
import sys

from .config import load_options
from .errors import ConfigurationError
from .pipeline import run

logger = logging.getLogger(__name__)


def setup_logging(verbose=False, quiet=False):
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="locale-html",
        description="Translate HTML templates into one static HTML file per locale.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument("--config", "-c", help="JSON file with task options (i18n, locales, files, ...)")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--i18n", help="JSON dictionary: {phrase: {locale: text}}")
    source.add_argument("--tmx", help="TMX translation memory document")

    parser.add_argument("--variables-file", help="Where to write the i18n reference JSON")
    parser.add_argument("--src", action="append", help="Template glob pattern (repeatable, needs --dest)")
    parser.add_argument("--dest", help="Destination folder for --src templates")
    parser.add_argument("--flatten", action="store_true", default=None,
                        help="Write outputs as dest/<locale>/<file name>")
    parser.add_argument("--minify", action="store_true", default=None, help="Minify generated HTML")
    parser.add_argument("--primary-at-root", action="store_true", default=None,
                        help="Write primary locale outputs directly under dest")
    parser.add_argument("--crawler", help="Markup fragment to inject into the primary index page")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true")
    verbosity.add_argument("--quiet", "-q", action="store_true")
    return parser


def overrides_from_args(args):
    overrides = {
        "i18n": args.i18n,
        "tmx": args.tmx,
        "variablesFile": args.variables_file,
        "flatten": args.flatten,
        "minify": args.minify,
        "primaryAtRoot": args.primary_at_root,
        "fbCrawlerPHP": args.crawler,
    }
    if args.src:
        overrides["files"] = [{"src": args.src, "dest": args.dest}]
    return overrides


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.src and not args.dest:
        parser.error("--src requires --dest")
    if not args.config and not (args.i18n or args.tmx):
        parser.error("either --config or one of --i18n/--tmx is required")

    setup_logging(args.verbose, args.quiet)

    try:
        options = load_options(args.config, overrides_from_args(args))
    except ConfigurationError as e:
        logger.warning("⚠️ %s", e)
        return 1

    return run(options).exit_code


if __name__ == "__main__":
    sys.exit(main())
