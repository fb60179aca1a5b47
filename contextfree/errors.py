"""Everything that can go wrong with a grammar"""


class GrammarError(Exception):
    """Base class of the errors raised by contextfree"""


class ValidationError(GrammarError):
    """Malformed input to a grammar mutation, the grammar is unchanged"""


class PreconditionError(GrammarError):
    """The grammar does not fulfil what the operation requires"""


class ParsingError(ValidationError):
    def __init__(self, message, line, lineno):
        super().__init__("{}. At line {}: {}".format(message, lineno, line))
        self.lineno = lineno


class WordError(GrammarError):
    def __init__(self, message, word, index):
        substr = word[max(index-3, 0):min(index+3, len(word))]
        super().__init__("{}. At index {}: {}".format(message, index, substr))
        self.word = word
        self.index = index
