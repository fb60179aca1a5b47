"""
Read and write grammars in the ``A::=aB|b`` notation.

One nonterminal per line, alternatives separated by ``|``, ``l`` is the
empty word. Blank lines and lines starting with ``#`` are skipped. The
first nonterminal defined is the start symbol.
"""


import logging

from .errors import ParsingError, ValidationError
from .grammar import Grammar
from .symbols import EPSILON_CHAR, NONTERMINAL_CHARS, TERMINAL_CHARS

logger = logging.getLogger(__name__)

ARROW = "::="


def loads(text: str) -> Grammar:
    grammar = Grammar()

    def declare(name, line, lineno):
        if name in NONTERMINAL_CHARS:
            if not any(nt.name == name for nt in grammar.nonterminals):
                grammar.add_nonterminal(name)
        elif name in TERMINAL_CHARS:
            if not any(t.name == name for t in grammar.terminals):
                grammar.add_terminal(name)
        else:
            raise ParsingError("Invalid symbol {!r}".format(name), line, lineno)

    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        lhs, arrow, rhs = line.partition(ARROW)
        lhs = lhs.strip()
        if not arrow:
            raise ParsingError("Missing {!r}".format(ARROW), line, lineno)
        if len(lhs) != 1 or lhs not in NONTERMINAL_CHARS:
            raise ParsingError("Invalid left-hand side {!r}".format(lhs), line, lineno)

        declare(lhs, line, lineno)
        if grammar.start is None:
            grammar.set_start_symbol(lhs)

        for production in rhs.split("|"):
            production = "".join(production.split())
            if production != EPSILON_CHAR:
                for name in production:
                    declare(name, line, lineno)
            try:
                grammar.add_production(lhs, production)
            except ValidationError as exc:
                raise ParsingError(str(exc), line, lineno) from exc

    logger.debug("Loaded %r", grammar)
    return grammar


def load(path: str) -> Grammar:
    with open(path, "r") as fd:
        return loads(fd.read())


def dumps(grammar: Grammar) -> str:
    return str(grammar)
