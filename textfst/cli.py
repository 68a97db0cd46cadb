"""
Command-line front end.

Usage:
    python -m textfst convert 'a1 b'          # A one B
    python -m textfst convert --verbose       # prompts for a line on stdin
    python -m textfst reverse hello --no-save

On success the machine and its symbol tables are written to `--save-dir`
(default: the working directory).  Unsupported characters and empty
compositions exit with status 1.
"""
import argparse
import sys

from arsenal import colors

from textfst.compose import CompositionMismatch
from textfst.decode import decode, output_tokens
from textfst.fst import UnsupportedSymbol
from textfst.pipeline import Converter, Reversal


PROMPTS = {
    'convert': 'Enter a string (letters, digits, spaces): ',
    'reverse': 'Enter the string or number to reverse: ',
}


def read_text(args):
    if args.text is not None:
        return args.text
    return input(PROMPTS[args.command])


def convert(args):
    text = read_text(args)
    converter = Converter()
    composed = converter.transduce(text)
    output = decode(composed, converter.osymbols)
    print('Original: ', text)
    print('Converted:', colors.light.green % output)
    if args.verbose:
        print('Composed: ', repr(composed))
        print('Tokens:   ', output_tokens(composed, converter.osymbols))
    if not args.no_save:
        for path in converter.save(args.save_dir):
            print(colors.mark(True), 'wrote', path)


def reverse(args):
    text = read_text(args)
    rev = Reversal(text)
    print('Original:', text)
    print('Reversed:', colors.light.green % rev())
    if not args.no_save:
        for path in rev.save(args.save_dir):
            print(colors.mark(True), 'wrote', path)


COMMANDS = {
    'convert': convert,
    'reverse': reverse,
}


def make_parser():
    parser = argparse.ArgumentParser(prog='textfst', description=__doc__.strip().split('\n')[0])
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('convert', help='upper-case letters, spell out digits, keep spaces')
    p.add_argument('text', nargs='?', help='input line (prompted for when omitted)')
    p.add_argument('--verbose', '-v', action='store_true', help='show the composed machine and its tokens')

    q = sub.add_parser('reverse', help='reverse a string with a string-specific transducer')
    q.add_argument('text', nargs='?', help='input line (prompted for when omitted)')

    for x in (p, q):
        x.add_argument('--save-dir', '-o', default='.', help='directory for the machine and symbol tables')
        x.add_argument('--no-save', action='store_true', help='do not write any files')

    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)
    try:
        COMMANDS[args.command](args)
    except (UnsupportedSymbol, CompositionMismatch) as e:
        print(colors.light.red % f'error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
