from dataclasses import dataclass
from string import ascii_lowercase, ascii_uppercase, digits
from typing import NewType, Tuple, Union

EPSILON_CHAR = "l"
NONTERMINAL_CHARS = ascii_uppercase
TERMINAL_CHARS = (ascii_lowercase + digits).replace(EPSILON_CHAR, "")


@dataclass(frozen=True, order=True)
class Symbol:
    """A grammar symbol, its kind is explicit and never guessed"""

    name: str
    is_terminal: bool = False

    @classmethod
    def terminal(cls, name: str) -> "Symbol":
        return cls(name, True)

    @classmethod
    def nonterminal(cls, name: str) -> "Symbol":
        return cls(name, False)

    def __str__(self):
        return self.name


class _Epsilon:
    """The empty word, a right-hand side of its own"""

    def __repr__(self):
        return "EPSILON"

    def __str__(self):
        return EPSILON_CHAR

    def __reduce__(self):
        # copy, deepcopy and pickle keep the singleton
        return "EPSILON"


EpsilonType = NewType("EpsilonType", _Epsilon)
EPSILON = EpsilonType(_Epsilon())
RightHandSide = Union[Tuple[Symbol, ...], EpsilonType]


def rhs_to_str(rhs: RightHandSide) -> str:
    if rhs is EPSILON:
        return EPSILON_CHAR
    return "".join(symbol.name for symbol in rhs)


def rule_to_str(lhs: Symbol, rhs: RightHandSide) -> str:
    return "{}::={}".format(lhs, rhs_to_str(rhs))


def is_unit(rhs: RightHandSide) -> bool:
    """A single nonterminal on the right"""
    return rhs is not EPSILON and len(rhs) == 1 and not rhs[0].is_terminal
