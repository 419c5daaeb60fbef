import argparse
import logging
import sys

from .errors import ParseError
from .pipeline import CleanOptions, clean_file


def build_parser():
    parser = argparse.ArgumentParser(
        prog='jsclean',
        description='Rewrite obfuscated or minified JavaScript into a canonical, readable form.')
    parser.add_argument('input_file', help='The path to the JavaScript file to clean.')
    parser.add_argument('-o', '--out', metavar='FILE',
                        help='Write the result to FILE instead of standard output.')
    parser.add_argument('--no-flatten', action='store_true',
                        help='Keep comma expressions and multi-variable declarations.')
    parser.add_argument('--no-beautify', action='store_true',
                        help='Skip the final js-beautify pass.')
    parser.add_argument('--max-rounds', type=int, default=4, metavar='N',
                        help='Maximum number of rewrite rounds (default: 4).')
    parser.add_argument('--indent', type=int, default=2, metavar='N',
                        help='Indent size used when beautifying (default: 2).')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log every rewrite.')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    options = CleanOptions(
        flatten=not args.no_flatten,
        pretty=not args.no_beautify,
        max_rounds=args.max_rounds,
        indent_size=args.indent,
    )
    try:
        cleaned = clean_file(args.input_file, options)
    except FileNotFoundError:
        print(f"Error: Input file not found at {args.input_file}", file=sys.stderr)
        return 1
    except ParseError as e:
        print(f"Error parsing JavaScript: {e}", file=sys.stderr)
        return 1

    if args.out:
        with open(args.out, 'w', encoding='utf-8') as f:
            f.write(cleaned)
        print(f"Cleaned code written to {args.out}")
    else:
        sys.stdout.write(cleaned)
        if not cleaned.endswith('\n'):
            sys.stdout.write('\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
