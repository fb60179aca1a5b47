"""Context-free grammars, their normal forms and the CYK algorithm"""

import logging

from .bnf import dumps, load, loads
from .cnf import check_cnf_production, is_cnf, transform_into_cnf
from .cyk import CYKRecognizer, CYKTable, cyk_state_to_str, is_derived_using_cyk
from .errors import (GrammarError, ParsingError, PreconditionError,
                     ValidationError, WordError)
from .grammar import Grammar
from .symbols import EPSILON, Symbol
from .wellformed import (has_lambda_productions, has_unit_productions,
                         has_useless_productions, has_useless_symbols,
                         is_well_formed, normalize, remove_lambda_productions,
                         remove_unit_productions, remove_useless_productions,
                         remove_useless_symbols, transform_to_well_formed_grammar)

logging.getLogger(__name__).addHandler(logging.NullHandler())
