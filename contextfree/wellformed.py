"""
A well-formed grammar has no useless production (``A::=A``), no lambda
production but a single one on the start symbol, no unit production
(``A::=B``) and no useless symbol.

Every transformation works in place on the given grammar, preserves
the generated language and reports what it changed.
"""


import logging
from collections import defaultdict, deque, namedtuple
from typing import Dict, Iterable, List, Set

from .errors import PreconditionError
from .grammar import Grammar
from .symbols import EPSILON, RightHandSide, Symbol, is_unit, rule_to_str

logger = logging.getLogger(__name__)

Productions = Dict[Symbol, Set[RightHandSide]]

NormalizationReport = namedtuple("NormalizationReport", [
    "useless_productions",
    "lambda_productions",
    "unit_productions",
    "useless_symbols",
])


def _fixpoint(productions: Productions, seeds: Iterable[Symbol],
              through_terminals: bool) -> Set[Symbol]:
    """
    Collect the nonterminals having a right-hand side whose nonterminals
    are all collected already, starting from ``seeds``.

    Each rule waits on the distinct nonterminals it is made of and fires
    when the last one gets collected. Rules with a terminal never fire
    unless ``through_terminals``.
    """
    found = set(seeds)
    missing = {}
    waiting = defaultdict(list)
    for lhs, rhss in productions.items():
        for rhs in rhss:
            if rhs is EPSILON:
                continue
            if not through_terminals and any(s.is_terminal for s in rhs):
                continue
            needed = {symbol for symbol in rhs if not symbol.is_terminal}
            missing[lhs, rhs] = len(needed)
            for symbol in needed:
                waiting[symbol].append((lhs, rhs))
            if not needed:
                found.add(lhs)

    queue = deque(found)
    while queue:
        symbol = queue.popleft()
        for lhs, rhs in waiting.pop(symbol, ()):
            missing[lhs, rhs] -= 1
            if not missing[lhs, rhs] and lhs not in found:
                found.add(lhs)
                queue.append(lhs)
    return found


def _unit_closure(productions: Productions, nonterminal: Symbol) -> Set[Symbol]:
    closure = {nonterminal}
    queue = deque([nonterminal])
    while queue:
        for rhs in productions.get(queue.popleft(), ()):
            if is_unit(rhs) and rhs[0] not in closure:
                closure.add(rhs[0])
                queue.append(rhs[0])
    return closure


def _non_unit(productions: Productions, nonterminals: Iterable[Symbol]) -> Set[RightHandSide]:
    return {
        rhs
        for nonterminal in nonterminals
        for rhs in productions.get(nonterminal, ())
        if rhs is not EPSILON and not is_unit(rhs)
    }


# Useless productions

def has_useless_productions(grammar: Grammar) -> bool:
    return any((lhs,) in rhss for lhs, rhss in grammar.productions.items())


def remove_useless_productions(grammar: Grammar) -> List[str]:
    """Remove the ``A::=A`` rules, return them"""
    removed = []
    for lhs in sorted(grammar.productions):
        rhss = grammar.productions[lhs]
        if (lhs,) in rhss:
            rhss.remove((lhs,))
            removed.append(rule_to_str(lhs, (lhs,)))
            if not rhss:
                del grammar.productions[lhs]
    logger.debug("Useless productions removed: %s", removed)
    return removed


# Lambda productions

def nullable_symbols(grammar: Grammar) -> Set[Symbol]:
    """Nonterminals deriving the empty word"""
    seeds = [lhs for lhs, rhss in grammar.productions.items() if EPSILON in rhss]
    return _fixpoint(grammar.productions, seeds, through_terminals=False)


def _variants(rhs: RightHandSide, nullable: Set[Symbol]) -> Set[RightHandSide]:
    """
    Non-empty right-hand sides obtained by deleting some nullable
    occurrences, one bit of the mask per occurrence.
    """
    positions = [idx for idx, symbol in enumerate(rhs) if symbol in nullable]
    variants = set()
    for mask in range(1, 2 ** len(positions)):
        dropped = {pos for bit, pos in enumerate(positions) if mask & (1 << bit)}
        variant = tuple(symbol for idx, symbol in enumerate(rhs) if idx not in dropped)
        if variant:
            variants.add(variant)
    return variants


def _lambda_free(grammar: Grammar) -> Productions:
    nullable = nullable_symbols(grammar)
    logger.debug("Nullable symbols: %s", sorted(nullable))

    expanded = {}
    unit_variants = defaultdict(set)
    for lhs, rhss in grammar.productions.items():
        expanded[lhs] = set()
        for rhs in rhss:
            if rhs is EPSILON:
                continue
            expanded[lhs].add(rhs)
            for variant in _variants(rhs, nullable):
                if is_unit(variant) and variant not in rhss:
                    unit_variants[lhs].add(variant)
                else:
                    expanded[lhs].add(variant)

    # A new A::=B is left out when A already has every non-unit rule B
    # leads to through unit rules.
    graph = {lhs: expanded[lhs] | unit_variants[lhs] for lhs in expanded}
    for lhs, variants in unit_variants.items():
        for variant in variants:
            target = variant[0]
            if target == lhs or _non_unit(graph, _unit_closure(graph, target)) <= expanded[lhs]:
                logger.debug("Redundant variant %s skipped", rule_to_str(lhs, variant))
            else:
                expanded[lhs].add(variant)

    if grammar.start in nullable:
        expanded[grammar.start].add(EPSILON)

    return {lhs: rhss for lhs, rhss in expanded.items() if rhss}


def has_lambda_productions(grammar: Grammar) -> bool:
    """
    Whether lambda rules remain to be eliminated. The start symbol may
    keep ``S::=l`` once its other rules no longer rely on it.
    """
    return _lambda_free(grammar) != grammar.productions


def remove_lambda_productions(grammar: Grammar) -> List[Symbol]:
    """
    Replace the lambda rules by the variants of the other rules where
    nullable symbols are left out. Only the start symbol keeps a lambda
    rule, and only when it is nullable.

    Return the nonterminals whose productions changed.
    """
    before = grammar.productions
    after = _lambda_free(grammar)
    modified = sorted(
        lhs for lhs in before.keys() | after.keys()
        if before.get(lhs) != after.get(lhs)
    )
    grammar.productions = after
    logger.debug("Lambda productions treated on: %s", modified)
    return modified


# Unit productions

def unit_closure(grammar: Grammar, nonterminal: Symbol) -> Set[Symbol]:
    """Nonterminals reachable from ``nonterminal`` by unit rules, itself included"""
    return _unit_closure(grammar.productions, nonterminal)


def has_unit_productions(grammar: Grammar) -> bool:
    return any(is_unit(rhs) for rhss in grammar.productions.values() for rhs in rhss)


def remove_unit_productions(grammar: Grammar) -> List[str]:
    """
    Give every nonterminal the non-unit rules of the nonterminals it
    reaches by unit rules, then drop the unit rules. Return them.
    """
    productions = grammar.productions
    removed = sorted(
        rule_to_str(lhs, rhs)
        for lhs, rhss in productions.items()
        for rhs in rhss
        if is_unit(rhs)
    )

    new_productions = {}
    for lhs, rhss in productions.items():
        closure = _unit_closure(productions, lhs)
        logger.debug("Unit closure of %s: %s", lhs, sorted(closure))
        new_rhss = {rhs for rhs in rhss if not is_unit(rhs)}
        new_rhss |= _non_unit(productions, closure - {lhs})
        if new_rhss:
            new_productions[lhs] = new_rhss

    grammar.productions = new_productions
    logger.debug("Unit productions removed: %s", removed)
    return removed


# Useless symbols

def generative_symbols(grammar: Grammar) -> Set[Symbol]:
    """Nonterminals deriving a word made of terminals only, maybe empty"""
    seeds = [lhs for lhs, rhss in grammar.productions.items() if EPSILON in rhss]
    return _fixpoint(grammar.productions, seeds, through_terminals=True)


def _reachable(start: Symbol, productions: Productions) -> Set[Symbol]:
    reachable = {start}
    queue = deque([start])
    while queue:
        for rhs in productions.get(queue.popleft(), ()):
            if rhs is EPSILON:
                continue
            for symbol in rhs:
                if not symbol.is_terminal and symbol not in reachable:
                    reachable.add(symbol)
                    queue.append(symbol)
    return reachable


def reachable_symbols(grammar: Grammar) -> Set[Symbol]:
    """Nonterminals appearing in a derivation from the start symbol"""
    if grammar.start is None:
        raise PreconditionError("No start symbol to compute the reachable symbols from")
    return _reachable(grammar.start, grammar.productions)


def _useful(grammar: Grammar):
    """Productions, nonterminals and terminals a reduced grammar keeps"""
    if grammar.start is None:
        raise PreconditionError("No start symbol to compute the reachable symbols from")

    generative = generative_symbols(grammar)
    logger.debug("Generative symbols: %s", sorted(generative))

    def productive(rhs):
        return rhs is EPSILON or all(s.is_terminal or s in generative for s in rhs)

    productions = {
        lhs: {rhs for rhs in rhss if productive(rhs)}
        for lhs, rhss in grammar.productions.items()
        if lhs in generative
    }
    reachable = _reachable(grammar.start, productions)
    logger.debug("Reachable symbols: %s", sorted(reachable))

    nonterminals = (generative & reachable) | {grammar.start}
    productions = {
        lhs: rhss for lhs, rhss in productions.items()
        if lhs in nonterminals and rhss
    }
    terminals = {
        symbol
        for rhss in productions.values()
        for rhs in rhss if rhs is not EPSILON
        for symbol in rhs if symbol.is_terminal
    }
    return productions, nonterminals, terminals


def has_useless_symbols(grammar: Grammar) -> bool:
    productions, nonterminals, terminals = _useful(grammar)
    return (productions != grammar.productions
            or nonterminals != grammar.nonterminals
            or terminals != grammar.terminals)


def remove_useless_symbols(grammar: Grammar) -> List[Symbol]:
    """
    Remove the nonterminals that are not both generative and reachable
    from the start symbol, then the terminals no rule uses anymore.

    Return the removed nonterminals followed by the removed terminals.
    """
    productions, nonterminals, terminals = _useful(grammar)
    removed = (sorted(grammar.nonterminals - nonterminals)
               + sorted(grammar.terminals - terminals))
    grammar.productions = productions
    grammar.nonterminals = nonterminals
    grammar.terminals = terminals
    logger.debug("Useless symbols removed: %s", removed)
    return removed


# Composite

def is_well_formed(grammar: Grammar) -> bool:
    return (grammar.start is not None
            and not has_useless_productions(grammar)
            and not has_lambda_productions(grammar)
            and not has_unit_productions(grammar)
            and not has_useless_symbols(grammar))


def normalize(grammar: Grammar) -> NormalizationReport:
    """
    Transform the grammar into a well-formed grammar, the steps must run
    in that order:

    1. remove the useless productions,
    2. remove the lambda productions, it exposes new unit productions,
    3. remove the unit productions,
    4. remove the useless symbols the previous steps left behind.
    """
    if grammar.start is None:
        raise PreconditionError("A start symbol is required to normalize the grammar")
    useless_productions = remove_useless_productions(grammar)
    lambda_productions = remove_lambda_productions(grammar)
    unit_productions = remove_unit_productions(grammar)
    useless_symbols = remove_useless_symbols(grammar)
    return NormalizationReport(
        useless_productions, lambda_productions, unit_productions, useless_symbols)


transform_to_well_formed_grammar = normalize
