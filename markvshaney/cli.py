import argparse
import logging
import sys
import time

from . import interop, settings, sources
from .chain import Chain
from .errors import MarkovError
from .generator import Generator, default_rng

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} should be a positive number") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} should be a positive number")
    return number


def build(args) -> int:
    start_time = time.perf_counter()
    chain = Chain(args.prefix_len)
    skipped = sources.build_from_files(chain, args.inputs, skip_unreadable=not args.abort_on_error)
    if skipped:
        logger.warning(f"Skipped {len(skipped)} unreadable input(s): {', '.join(skipped)}")
    sources.write_modelfile(chain, sources.model_path(args.output))
    logger.info(f"Total time taken to build the model: {time.perf_counter() - start_time:0.4f} seconds")
    return 0


def generate(args) -> int:
    chain = sources.read_modelfile(sources.model_path(args.model))
    generator = Generator(chain, rng=default_rng(args.seed), logging=args.trace)
    words = generator.generate(args.count)
    if len(words) < args.count:
        logger.warning(f"Chain ran out of continuations after {len(words)} of {args.count} words")
    print(generator.output)
    return 0


def export(args) -> int:
    chain = sources.read_modelfile(sources.model_path(args.model))
    interop.export_json(chain, args.output)
    return 0


def import_(args) -> int:
    chain = interop.import_json(args.input)
    sources.write_modelfile(chain, sources.model_path(args.output))
    return 0


def make_parser() -> argparse.ArgumentParser:
    bare_name = ("A bare name with no directory or extension, such as 'corpus', "
                 f"means {settings.MODELS_DIR}/corpus.txt.")

    parser = argparse.ArgumentParser(prog="markvshaney",
                                     description="Build word-prefix Markov chain models and generate text from them.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser("build", help="Build a modelfile from one or more text files.")
    build_parser.add_argument("prefix_len", type=positive_int, help="Number of words in each prefix.")
    build_parser.add_argument("output", help=f"Modelfile to write. {bare_name}")
    build_parser.add_argument("inputs", nargs="+", help="Text files to read, in order.")
    build_parser.add_argument("--abort-on-error", action="store_true",
                              help="Stop at the first unreadable input instead of skipping it.")
    build_parser.set_defaults(func=build)

    generate_parser = subparsers.add_parser("generate", help="Print text generated from a modelfile.")
    generate_parser.add_argument("model", help=f"Modelfile to read. {bare_name}")
    generate_parser.add_argument("count", type=positive_int, help="Maximum number of words to generate.")
    generate_parser.add_argument("--seed", type=int, default=None, help="Seed for the random source.")
    generate_parser.add_argument("--trace", action="store_true", help="Log every step of the walk.")
    generate_parser.set_defaults(func=generate)

    export_parser = subparsers.add_parser("export", help="Write a modelfile as markovify chain JSON.")
    export_parser.add_argument("model", help=f"Modelfile to read. {bare_name}")
    export_parser.add_argument("output", help="JSON file to write.")
    export_parser.set_defaults(func=export)

    import_parser = subparsers.add_parser("import", help="Convert a markovify JSON model into a modelfile.")
    import_parser.add_argument("input", help="markovify Chain or Text JSON file.")
    import_parser.add_argument("output", help=f"Modelfile to write. {bare_name}")
    import_parser.set_defaults(func=import_)

    return parser


def main(argv=None) -> int:
    args = make_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
                        format=settings.LOG_FORMAT)

    try:
        return args.func(args)
    except MarkovError as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
