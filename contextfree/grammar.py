"""
A context-free grammar is made of two disjoint alphabets, the terminals
and the nonterminals, a set of productions rewriting a nonterminal into
a sequence of symbols and a start symbol (the axiom).
"""


import logging
from io import StringIO
from operator import attrgetter
from typing import Dict, List, Optional, Set

from .errors import PreconditionError, ValidationError
from .symbols import (EPSILON, EPSILON_CHAR, NONTERMINAL_CHARS,
                      TERMINAL_CHARS, RightHandSide, Symbol, rhs_to_str)

logger = logging.getLogger(__name__)


class Grammar:
    """
    Context-Free Grammar

    Symbols are single characters: uppercase letters are nonterminals,
    lowercase letters and digits are terminals. The lowercase ``l`` is
    reserved for the empty word (lambda) and can only be used as a whole
    production.

    The mutation methods validate their input before touching anything,
    a :func:`ValidationError <contextfree.errors.ValidationError>`
    leaves the grammar as it was. The transformations of
    :mod:`contextfree.wellformed` and :mod:`contextfree.cnf` work
    directly on the attributes and keep the same invariants:

    * ``terminals`` and ``nonterminals`` are disjoint,
    * the keys of ``productions`` are nonterminals and map to non-empty
      sets of right-hand sides made of declared symbols,
    * ``start``, when set, is a nonterminal.
    """

    def __init__(self):
        self.nonterminals: Set[Symbol] = set()
        self.terminals: Set[Symbol] = set()
        self.productions: Dict[Symbol, Set[RightHandSide]] = {}
        self.start: Optional[Symbol] = None

    def __repr__(self):
        return "<{} {} nonterminals, {} terminals, start {}>".format(
            self.__class__.__name__,
            len(self.nonterminals),
            len(self.terminals),
            self.start)

    def __str__(self):
        return self.get_grammar()

    def __eq__(self, other):
        if not isinstance(other, Grammar):
            return NotImplemented
        return (self.nonterminals == other.nonterminals
                and self.terminals == other.terminals
                and self.productions == other.productions
                and self.start == other.start)

    def copy(self) -> "Grammar":
        """Create an independent grammar with the same content"""
        other = type(self)()
        other.nonterminals = set(self.nonterminals)
        other.terminals = set(self.terminals)
        other.productions = {
            lhs: set(rhss) for lhs, rhss in self.productions.items()}
        other.start = self.start
        return other

    def clear(self) -> None:
        """Forget everything, ready for a new grammar"""
        self.nonterminals.clear()
        self.terminals.clear()
        self.productions.clear()
        self.start = None

    def symbol(self, name: str) -> Symbol:
        """Find the declared symbol of that name"""
        for symbol in (Symbol.nonterminal(name), Symbol.terminal(name)):
            if symbol in self.nonterminals or symbol in self.terminals:
                return symbol
        raise ValidationError("Undeclared symbol {!r}".format(name))

    def _nonterminal(self, name: str) -> Symbol:
        nonterminal = Symbol.nonterminal(name)
        if nonterminal not in self.nonterminals:
            raise ValidationError("Undeclared nonterminal {!r}".format(name))
        return nonterminal

    def parse_production(self, production: str) -> RightHandSide:
        if production == EPSILON_CHAR:
            return EPSILON
        if not production:
            raise ValidationError("Empty production, use {!r} for lambda".format(EPSILON_CHAR))
        if EPSILON_CHAR in production:
            raise ValidationError("Lambda must be a production on its own: {!r}".format(production))
        return tuple(self.symbol(name) for name in production)

    def _discard_mentions(self, symbol: Symbol) -> None:
        for lhs in list(self.productions):
            rhss = {
                rhs for rhs in self.productions[lhs]
                if rhs is EPSILON or symbol not in rhs
            }
            if rhss:
                self.productions[lhs] = rhss
            else:
                del self.productions[lhs]

    # Nonterminals

    def add_nonterminal(self, name: str) -> None:
        if len(name) != 1 or name not in NONTERMINAL_CHARS:
            raise ValidationError("A nonterminal must be an uppercase letter: {!r}".format(name))
        nonterminal = Symbol.nonterminal(name)
        if nonterminal in self.nonterminals:
            raise ValidationError("Nonterminal {!r} already declared".format(name))
        self.nonterminals.add(nonterminal)

    def remove_nonterminal(self, name: str) -> None:
        """
        Remove the nonterminal, its productions and every production
        where it appears.
        """
        nonterminal = self._nonterminal(name)
        self.nonterminals.remove(nonterminal)
        self.productions.pop(nonterminal, None)
        self._discard_mentions(nonterminal)
        if self.start == nonterminal:
            logger.debug("Start symbol %s removed", nonterminal)
            self.start = None

    def get_nonterminals(self) -> Set[Symbol]:
        return set(self.nonterminals)

    # Terminals

    def add_terminal(self, name: str) -> None:
        if len(name) != 1 or name not in TERMINAL_CHARS:
            raise ValidationError(
                "A terminal must be a lowercase letter or a digit other "
                "than {!r}: {!r}".format(EPSILON_CHAR, name))
        terminal = Symbol.terminal(name)
        if terminal in self.terminals:
            raise ValidationError("Terminal {!r} already declared".format(name))
        self.terminals.add(terminal)

    def remove_terminal(self, name: str) -> None:
        """Remove the terminal and every production where it appears"""
        terminal = Symbol.terminal(name)
        if terminal not in self.terminals:
            raise ValidationError("Undeclared terminal {!r}".format(name))
        self.terminals.remove(terminal)
        self._discard_mentions(terminal)

    def get_terminals(self) -> Set[Symbol]:
        return set(self.terminals)

    # Start symbol

    def set_start_symbol(self, name: str) -> None:
        self.start = self._nonterminal(name)

    def get_start_symbol(self) -> Symbol:
        if self.start is None:
            raise PreconditionError("The start symbol is not set")
        return self.start

    # Productions

    def add_production(self, name: str, production: str) -> None:
        """
        Add the production ``name ::= production``, ``production`` is
        a string of declared symbols or ``l`` for the empty word.
        """
        lhs = self._nonterminal(name)
        rhs = self.parse_production(production)
        if rhs in self.productions.get(lhs, ()):
            raise ValidationError("Production {}::={} already exists".format(name, production))
        self.productions.setdefault(lhs, set()).add(rhs)

    def remove_production(self, name: str, production: str) -> bool:
        lhs = self._nonterminal(name)
        rhs = self.parse_production(production)
        rhss = self.productions.get(lhs, set())
        if rhs not in rhss:
            raise ValidationError("Production {}::={} does not exist".format(name, production))
        rhss.remove(rhs)
        if not rhss:
            del self.productions[lhs]
        return True

    def get_productions(self, name: str) -> List[str]:
        """Right-hand sides of the nonterminal, sorted"""
        lhs = Symbol.nonterminal(name)
        return sorted(map(rhs_to_str, self.productions.get(lhs, ())))

    def productions_to_str(self, name: str) -> str:
        """Format the productions of a nonterminal as ``A::=aB|b``"""
        productions = self.get_productions(name)
        if not productions:
            return ""
        return "{}::={}".format(name, "|".join(productions))

    def get_grammar(self) -> str:
        """Format every nonterminal having productions, in ascending order"""
        with StringIO() as buffer:
            for nonterminal in sorted(self.nonterminals, key=attrgetter("name")):
                line = self.productions_to_str(nonterminal.name)
                if line:
                    print(line, file=buffer)
            return buffer.getvalue()

    def is_cfg(self) -> bool:
        """Whether every production is a context-free rule over declared symbols"""
        symbols = self.nonterminals | self.terminals
        for lhs, rhss in self.productions.items():
            if lhs not in self.nonterminals:
                return False
            for rhs in rhss:
                if rhs is not EPSILON and not symbols.issuperset(rhs):
                    return False
        return True
