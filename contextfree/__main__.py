#!/usr/bin/env python3

import logging
from argparse import ArgumentParser
from sys import exit as sys_exit

from .bnf import load
from .cnf import is_cnf, transform_into_cnf
from .cyk import CYKRecognizer
from .errors import GrammarError
from .wellformed import is_well_formed, normalize

parser = ArgumentParser(prog="contextfree")
parser.add_argument("grammar", help="Grammar file, one A::=aB|b line per nonterminal")
parser.add_argument("words", nargs='*', help="Words to test with the CYK algorithm")
parser.add_argument("-w", "--well-formed", dest="well_formed", action="store_const", const=True, default=False,
                    help="Transform the grammar into a well-formed grammar")
parser.add_argument("-c", "--cnf", dest="cnf", action="store_const", const=True, default=False,
                    help="Transform the grammar into Chomsky Normal Form")
parser.add_argument("-t", "--trace", dest="trace", action="store_const", const=True, default=False,
                    help="Print the CYK table of each word")
parser.add_argument("-q", "--quiet", dest="quiet", action="store_const", const=True, default=False,
                    help="Don't output the grammar")
parser.add_argument("-v", "--verbose", dest="verbose", action="store_const", const=True, default=False,
                    help="Debug mode, log every transformation")


def main(argv=None):
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        grammar = load(args.grammar)
        if args.well_formed or (args.cnf and not is_well_formed(grammar)):
            normalize(grammar)
        if args.cnf and not is_cnf(grammar):
            transform_into_cnf(grammar)
        if not args.quiet:
            print(grammar, end="")

        derived = True
        if args.words:
            recognizer = CYKRecognizer(grammar)
            for word in args.words:
                table = recognizer.table(word)
                if args.trace:
                    table.print_table()
                print("{}: {}".format(word, "yes" if table.derived else "no"))
                derived = derived and table.derived
    except (GrammarError, OSError, UnicodeDecodeError) as exc:
        sys_exit("error: {}".format(exc))

    return 0 if derived else 1


if __name__ == '__main__':
    sys_exit(main())
