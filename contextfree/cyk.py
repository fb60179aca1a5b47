"""
The Cocke-Younger-Kasami algorithm decides whether a word belongs to
the language of a grammar in Chomsky Normal Form, bottom-up, by dynamic
programming over the substrings of the word.
"""


import logging
from collections import defaultdict
from io import StringIO
from itertools import chain
from typing import Dict, FrozenSet, Tuple

from .cnf import is_cnf
from .errors import PreconditionError, WordError
from .grammar import Grammar
from .symbols import EPSILON, Symbol

logger = logging.getLogger(__name__)

EMPTY_CELL = "∅"


def cell_to_str(cell: FrozenSet[Symbol]) -> str:
    if not cell:
        return EMPTY_CELL
    return "{%s}" % ",".join(sorted(symbol.name for symbol in cell))


class CYKRecognizer:
    """
    Membership test for a grammar in Chomsky Normal Form.

    The rules are indexed once, by terminal for the ``A::=a`` rules and
    by pair of nonterminals for the ``A::=BC`` rules, every
    :func:`table <contextfree.cyk.CYKRecognizer.table>` reuses them.
    """

    def __init__(self, grammar: Grammar):
        if not grammar.nonterminals:
            raise PreconditionError("The grammar has no nonterminal")
        if grammar.start is None:
            raise PreconditionError("The grammar has no start symbol")
        if not is_cnf(grammar):
            raise PreconditionError("The grammar is not in Chomsky Normal Form")

        self.grammar = grammar
        self.by_terminal = defaultdict(set)
        self.by_pair = defaultdict(set)
        for lhs, rhss in grammar.productions.items():
            for rhs in rhss:
                if rhs is EPSILON:
                    continue
                if len(rhs) == 1:
                    self.by_terminal[rhs[0]].add(lhs)
                else:
                    self.by_pair[rhs].add(lhs)

    def table(self, word: str) -> "CYKTable":
        """Compute the table of every substring of the word"""
        for index, char in enumerate(word):
            if Symbol.terminal(char) not in self.grammar.terminals:
                raise WordError("Unknown terminal {!r}".format(char), word, index)

        n = len(word)
        cells = {}
        for i, char in enumerate(word, start=1):
            cells[i, i] = frozenset(self.by_terminal.get(Symbol.terminal(char), ()))

        for span in range(2, n + 1):
            for i in range(1, n - span + 2):
                j = i + span - 1
                cell = set()
                for k in range(i, j):
                    for left in cells[i, k]:
                        for right in cells[k + 1, j]:
                            cell.update(self.by_pair.get((left, right), ()))
                cells[i, j] = frozenset(cell)

        return CYKTable(self.grammar, word, cells)

    def match(self, word: str) -> bool:
        """Accept or reject the given word"""
        return self.table(word).derived


class CYKTable:
    """
    Result of the CYK algorithm on a word.

    ``cells[i, j]`` (1 <= i <= j <= n) holds the nonterminals deriving
    the substring going from the i-th to the j-th character.
    """

    def __init__(self, grammar: Grammar, word: str,
                 cells: Dict[Tuple[int, int], FrozenSet[Symbol]]):
        self.grammar = grammar
        self.word = word
        self.cells = cells

    def __getitem__(self, key: Tuple[int, int]) -> FrozenSet[Symbol]:
        return self.cells[key]

    @property
    def derived(self) -> bool:
        start = self.grammar.start
        if not self.word:
            return EPSILON in self.grammar.productions.get(start, ())
        return start in self.cells[1, len(self.word)]

    def __str__(self):
        """
        Draw the triangle, one row per substring length, one column
        per starting position. The cell of row ``s``, column ``i``
        is ``cells[i, i+s-1]``.
        """
        n = len(self.word)
        with StringIO() as buffer:
            print("CYK table of {!r}".format(self.word), file=buffer)

            if not n:
                start = frozenset([self.grammar.start]) if self.derived else frozenset()
                print("l │ {}".format(cell_to_str(start)), file=buffer)
            else:
                headers = ["{}:{}".format(i, char) for i, char in enumerate(self.word, start=1)]
                texts = {key: cell_to_str(cell) for key, cell in self.cells.items()}
                width = max(map(len, chain(headers, texts.values())))
                lw = len(str(n))
                bar = "─" * (width + 2)
                tmpl = " {:<%d} " % width

                print(" " * lw, "┌" + "┬".join([bar] * n) + "┐", file=buffer)
                print(" " * lw, "│" + "│".join(map(tmpl.format, headers)) + "│", file=buffer)
                print(" " * lw, "├" + "┼".join([bar] * n) + "┤", file=buffer)
                for span in range(1, n + 1):
                    row = [texts[i, i + span - 1] for i in range(1, n - span + 2)]
                    print("{:>{}}".format(span, lw), "│" + "│".join(map(tmpl.format, row)) + "│", file=buffer)
                print(" " * lw, "└" + bar + "┘", file=buffer)

            print("{!r} is {}derived from {}".format(
                self.word, "" if self.derived else "not ", self.grammar.start), file=buffer)
            return buffer.getvalue()

    def print_table(self) -> None:
        """Pretty print the table"""
        print(self, end="")


def is_derived_using_cyk(grammar: Grammar, word: str) -> bool:
    derived = CYKRecognizer(grammar).match(word)
    logger.debug("%r derived: %s", word, derived)
    return derived


def cyk_state_to_str(grammar: Grammar, word: str) -> str:
    """Every cell the CYK algorithm computes for the word"""
    return str(CYKRecognizer(grammar).table(word))
