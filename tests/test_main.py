"""Test the command line interface"""

import os
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO

from contextfree.__main__ import main


class MainCase(unittest.TestCase):
    def grammar_file(self, text):
        fd, path = tempfile.mkstemp(suffix=".bnf")
        self.addCleanup(os.remove, path)
        with os.fdopen(fd, "w") as file:
            file.write(text)
        return path

    def run_main(self, *argv):
        with StringIO() as buffer:
            with redirect_stdout(buffer):
                code = main(list(argv))
            return code, buffer.getvalue()


class TestMain(MainCase):
    def test_words(self):
        path = self.grammar_file("S::=AB\nA::=a\nB::=b\n")
        code, output = self.run_main(path, "ab", "aab")
        self.assertEqual(code, 1)
        self.assertEqual(output, "A::=a\nB::=b\nS::=AB\nab: yes\naab: no\n")

    def test_all_derived(self):
        path = self.grammar_file("S::=AB\nA::=a\nB::=b\n")
        code, output = self.run_main("-q", path, "ab")
        self.assertEqual(code, 0)
        self.assertEqual(output, "ab: yes\n")

    def test_cnf(self):
        path = self.grammar_file("S::=aSb|l\n")
        code, output = self.run_main("-c", "-q", path, "", "ab", "aabb")
        self.assertEqual(code, 0)
        self.assertEqual(output, ": yes\nab: yes\naabb: yes\n")

    def test_well_formed(self):
        path = self.grammar_file("S::=A|b\nA::=a\nB::=b\n")
        code, output = self.run_main("-w", path)
        self.assertEqual(code, 0)
        self.assertEqual(output, "S::=a|b\n")

    def test_trace(self):
        path = self.grammar_file("S::=AB\nA::=a\nB::=b\n")
        code, output = self.run_main("-q", "-t", path, "ab")
        self.assertEqual(code, 0)
        self.assertTrue(output.startswith("CYK table of 'ab'\n"))
        self.assertTrue(output.endswith("'ab' is derived from S\nab: yes\n"))

    def test_not_cnf(self):
        path = self.grammar_file("S::=aSb|ab\n")
        with self.assertRaises(SystemExit):
            self.run_main("-q", path, "ab")

    def test_missing_file(self):
        with self.assertRaises(SystemExit):
            self.run_main(os.path.join(tempfile.gettempdir(), "missing.bnf"))

    def test_bad_grammar(self):
        path = self.grammar_file("S=a\n")
        with self.assertRaises(SystemExit):
            self.run_main(path)

    def test_undecodable_file(self):
        fd, path = tempfile.mkstemp(suffix=".bnf")
        self.addCleanup(os.remove, path)
        with os.fdopen(fd, "wb") as file:
            file.write(b"S::=a\xff\n")
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(path)
        self.assertTrue(str(ctx.exception.code).startswith("error: "))
