"""
Chomsky Normal Form

Every rule is ``A::=BC`` or ``A::=a``, the start symbol may also have
``S::=l`` when the language has the empty word.
"""


import logging
from typing import List

from .errors import PreconditionError, ValidationError
from .grammar import Grammar
from .symbols import (EPSILON, NONTERMINAL_CHARS, RightHandSide, Symbol,
                      rhs_to_str, rule_to_str)
from .wellformed import is_well_formed

logger = logging.getLogger(__name__)


def _is_cnf_rule(grammar: Grammar, lhs: Symbol, rhs: RightHandSide) -> bool:
    if rhs is EPSILON:
        return lhs == grammar.start
    if len(rhs) == 1:
        return rhs[0] in grammar.terminals
    return len(rhs) == 2 and all(symbol in grammar.nonterminals for symbol in rhs)


def check_cnf_production(grammar: Grammar, nonterminal: str, production: str) -> None:
    """
    Ensure ``nonterminal ::= production`` is a ``A::=BC`` or a ``A::=a``
    rule, ``S::=l`` is accepted when S is the start symbol.
    """
    lhs = grammar.symbol(nonterminal)
    if lhs.is_terminal:
        raise ValidationError("{!r} is not a nonterminal".format(nonterminal))
    rhs = grammar.parse_production(production)
    if not _is_cnf_rule(grammar, lhs, rhs):
        raise ValidationError(
            "{} is not in Chomsky Normal Form".format(rule_to_str(lhs, rhs)))


def _start_on_right(grammar: Grammar) -> bool:
    return any(
        rhs is not EPSILON and grammar.start in rhs
        for rhss in grammar.productions.values() for rhs in rhss)


def is_cnf(grammar: Grammar) -> bool:
    """
    Whether every rule is in Chomsky Normal Form and the start symbol,
    when it has a lambda rule, appears on no right-hand side.
    """
    if EPSILON in grammar.productions.get(grammar.start, ()) and _start_on_right(grammar):
        return False
    return all(
        lhs in grammar.nonterminals and _is_cnf_rule(grammar, lhs, rhs)
        for lhs, rhss in grammar.productions.items()
        for rhs in rhss
    )


def _fresh_nonterminal(grammar: Grammar) -> Symbol:
    for name in reversed(NONTERMINAL_CHARS):
        nonterminal = Symbol.nonterminal(name)
        if nonterminal not in grammar.nonterminals:
            grammar.nonterminals.add(nonterminal)
            return nonterminal
    raise PreconditionError("Every nonterminal name is in use already")


def transform_into_cnf(grammar: Grammar) -> List[Symbol]:
    """
    Transform a well-formed grammar into its Chomsky Normal Form
    equivalent, return the nonterminals it introduced.

    1. A start symbol with a lambda rule that appears on a right-hand
       side is replaced by a new one having the same rules, the old one
       loses its lambda rule.
    2. In rules longer than one, terminals are replaced by a
       nonterminal producing only that terminal.
    3. Rules longer than two are split from the right, ``A::=BCD``
       becomes ``A::=BX`` and ``X::=CD``.

    New nonterminals take the unused uppercase letters, from Z down to
    A. A grammar needing more than the 26 letters raises
    :class:`PreconditionError <contextfree.errors.PreconditionError>`
    and is left untouched, as on any other failure.
    """
    if not is_well_formed(grammar):
        raise PreconditionError("Only a well-formed grammar can be transformed into CNF")

    work = grammar.copy()
    introduced = []

    def fresh():
        nonterminal = _fresh_nonterminal(work)
        introduced.append(nonterminal)
        return nonterminal

    # Axiom
    start_rhss = work.productions.get(work.start, set())
    if EPSILON in start_rhss and _start_on_right(work):
        new_start = fresh()
        work.productions[new_start] = set(start_rhss)
        start_rhss.remove(EPSILON)
        if not start_rhss:
            del work.productions[work.start]
        logger.debug("New start symbol %s replaces %s", new_start, work.start)
        work.start = new_start

    # Terminals
    dedicated = {}
    for lhs in sorted(work.productions):
        rhss = work.productions[lhs]
        if lhs == work.start or len(rhss) != 1:
            continue
        rhs = next(iter(rhss))
        if rhs is not EPSILON and len(rhs) == 1 and rhs[0].is_terminal:
            dedicated.setdefault(rhs[0], lhs)

    def isolate(symbol):
        if not symbol.is_terminal:
            return symbol
        if symbol not in dedicated:
            dedicated[symbol] = fresh()
            work.productions[dedicated[symbol]] = {(symbol,)}
            logger.debug("%s introduced for %s", dedicated[symbol], symbol)
        return dedicated[symbol]

    for lhs in sorted(work.productions):
        work.productions[lhs] = {
            rhs if rhs is EPSILON or len(rhs) < 2 else tuple(map(isolate, rhs))
            for rhs in sorted(work.productions[lhs], key=rhs_to_str)
        }

    # Binarization
    suffixes = {}

    def binarize(rhs):
        if rhs is EPSILON or len(rhs) <= 2:
            return rhs
        tail = rhs[1:]
        if tail not in suffixes:
            suffixes[tail] = fresh()
            work.productions[suffixes[tail]] = {binarize(tail)}
            logger.debug("%s introduced for %s", suffixes[tail], rule_to_str(suffixes[tail], tail))
        return (rhs[0], suffixes[tail])

    for lhs in sorted(work.productions):
        work.productions[lhs] = set(map(binarize, sorted(work.productions[lhs], key=rhs_to_str)))

    grammar.nonterminals = work.nonterminals
    grammar.terminals = work.terminals
    grammar.productions = work.productions
    grammar.start = work.start
    return introduced
