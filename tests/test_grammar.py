"""Test the grammar data model and its mutations"""

import unittest

from contextfree import EPSILON, Grammar, PreconditionError, Symbol, ValidationError

S, A = Symbol.nonterminal("S"), Symbol.nonterminal("A")
a, b = Symbol.terminal("a"), Symbol.terminal("b")


def sample():
    grammar = Grammar()
    grammar.add_nonterminal("S")
    grammar.add_nonterminal("A")
    grammar.add_terminal("a")
    grammar.add_terminal("b")
    grammar.set_start_symbol("S")
    grammar.add_production("S", "aA")
    grammar.add_production("S", "b")
    grammar.add_production("A", "a")
    grammar.add_production("A", "l")
    return grammar


class TestSymbols(unittest.TestCase):
    def test_add_nonterminal(self):
        grammar = Grammar()
        grammar.add_nonterminal("S")
        self.assertEqual(grammar.get_nonterminals(), {S})
        self.assertFalse(S.is_terminal)

    def test_add_nonterminal_lowercase(self):
        with self.assertRaises(ValidationError):
            Grammar().add_nonterminal("s")

    def test_add_nonterminal_twice(self):
        grammar = Grammar()
        grammar.add_nonterminal("S")
        with self.assertRaises(ValidationError):
            grammar.add_nonterminal("S")

    def test_add_terminal(self):
        grammar = Grammar()
        grammar.add_terminal("a")
        grammar.add_terminal("0")
        self.assertEqual(grammar.get_terminals(), {a, Symbol.terminal("0")})
        self.assertTrue(a.is_terminal)

    def test_add_terminal_lambda(self):
        with self.assertRaises(ValidationError):
            Grammar().add_terminal("l")

    def test_add_terminal_uppercase(self):
        with self.assertRaises(ValidationError):
            Grammar().add_terminal("A")

    def test_add_terminal_twice(self):
        grammar = Grammar()
        grammar.add_terminal("a")
        with self.assertRaises(ValidationError):
            grammar.add_terminal("a")

    def test_sets_are_copies(self):
        grammar = sample()
        grammar.get_terminals().clear()
        self.assertEqual(grammar.terminals, {a, b})

    def test_remove_nonterminal(self):
        grammar = sample()
        grammar.remove_nonterminal("A")
        self.assertEqual(grammar.nonterminals, {S})
        self.assertEqual(grammar.get_productions("S"), ["b"])
        self.assertNotIn(A, grammar.productions)

    def test_remove_start_symbol(self):
        grammar = sample()
        grammar.remove_nonterminal("S")
        self.assertIsNone(grammar.start)
        self.assertEqual(set(grammar.productions), {A})

    def test_remove_unknown_nonterminal(self):
        with self.assertRaises(ValidationError):
            sample().remove_nonterminal("X")

    def test_remove_terminal(self):
        grammar = sample()
        grammar.remove_terminal("a")
        self.assertEqual(grammar.get_productions("S"), ["b"])
        self.assertEqual(grammar.get_productions("A"), ["l"])

    def test_remove_terminal_emptying_a_nonterminal(self):
        grammar = sample()
        grammar.remove_terminal("b")
        grammar.remove_terminal("a")
        self.assertNotIn(S, grammar.productions)
        self.assertIn(S, grammar.nonterminals)

    def test_symbol(self):
        grammar = sample()
        self.assertEqual(grammar.symbol("S"), S)
        self.assertEqual(grammar.symbol("a"), a)
        with self.assertRaises(ValidationError):
            grammar.symbol("c")


class TestStartSymbol(unittest.TestCase):
    def test_unset(self):
        with self.assertRaises(PreconditionError):
            Grammar().get_start_symbol()

    def test_set(self):
        self.assertEqual(sample().get_start_symbol(), S)

    def test_set_undeclared(self):
        grammar = Grammar()
        with self.assertRaises(ValidationError):
            grammar.set_start_symbol("S")
        self.assertIsNone(grammar.start)


class TestProductions(unittest.TestCase):
    def test_add(self):
        grammar = sample()
        self.assertEqual(grammar.productions[S], {(a, A), (b,)})
        self.assertEqual(grammar.productions[A], {(a,), EPSILON})

    def test_add_undeclared_nonterminal(self):
        with self.assertRaises(ValidationError):
            sample().add_production("X", "a")

    def test_add_undeclared_symbol(self):
        grammar = sample()
        before = grammar.copy()
        with self.assertRaises(ValidationError):
            grammar.add_production("S", "aX")
        self.assertEqual(grammar, before)

    def test_add_twice(self):
        with self.assertRaises(ValidationError):
            sample().add_production("S", "b")

    def test_add_lambda_inside(self):
        with self.assertRaises(ValidationError):
            sample().add_production("S", "al")

    def test_add_empty(self):
        with self.assertRaises(ValidationError):
            sample().add_production("S", "")

    def test_remove(self):
        grammar = sample()
        self.assertTrue(grammar.remove_production("S", "b"))
        self.assertEqual(grammar.get_productions("S"), ["aA"])

    def test_remove_last(self):
        grammar = sample()
        grammar.remove_production("A", "a")
        grammar.remove_production("A", "l")
        self.assertNotIn(A, grammar.productions)
        self.assertIn(A, grammar.nonterminals)

    def test_remove_missing(self):
        with self.assertRaises(ValidationError):
            sample().remove_production("S", "a")

    def test_get_productions_sorted(self):
        grammar = sample()
        grammar.add_production("S", "A")
        self.assertEqual(grammar.get_productions("S"), ["A", "aA", "b"])
        self.assertEqual(grammar.get_productions("X"), [])


class TestFormatting(unittest.TestCase):
    def test_productions_to_str(self):
        grammar = sample()
        self.assertEqual(grammar.productions_to_str("S"), "S::=aA|b")
        self.assertEqual(grammar.productions_to_str("A"), "A::=a|l")

    def test_productions_to_str_empty(self):
        grammar = sample()
        grammar.add_nonterminal("B")
        self.assertEqual(grammar.productions_to_str("B"), "")

    def test_grammar(self):
        self.assertEqual(str(sample()), "A::=a|l\nS::=aA|b\n")
        self.assertEqual(Grammar().get_grammar(), "")


class TestLifecycle(unittest.TestCase):
    def test_clear(self):
        grammar = sample()
        grammar.clear()
        self.assertEqual(grammar, Grammar())
        self.assertIsNone(grammar.start)

    def test_copy(self):
        grammar = sample()
        other = grammar.copy()
        self.assertEqual(grammar, other)
        other.add_production("S", "a")
        other.add_terminal("c")
        self.assertNotEqual(grammar, other)
        self.assertEqual(grammar.get_productions("S"), ["aA", "b"])

    def test_is_cfg(self):
        grammar = sample()
        self.assertTrue(grammar.is_cfg())
        grammar.productions[Symbol.nonterminal("X")] = {(a,)}
        self.assertFalse(grammar.is_cfg())

    def test_is_cfg_unknown_symbol(self):
        grammar = sample()
        grammar.productions[S].add((Symbol.terminal("c"),))
        self.assertFalse(grammar.is_cfg())
