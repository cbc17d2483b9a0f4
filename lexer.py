from enum import Enum

from sly import Lexer


class Instruction(Enum):
    RIGHT = '>'
    LEFT = '<'
    PLUS = '+'
    MINUS = '-'
    PUT = '.'
    GET = ','
    LOOP = '['
    JMP = ']'

    def __str__(self):
        return self.value


class BrainfuckLexer(Lexer):
  tokens = {
    'RIGHT', 'LEFT',
    'PLUS', 'MINUS',
    'PUT', 'GET',
    'LOOP', 'JMP',
  }

  # anything that is not one of the eight symbols (or a newline) is a comment
  ignore_comment = r'[^<>+\-.,\[\]\n]+'

  RIGHT = r'>'
  LEFT = r'<'
  PLUS = r'\+'
  MINUS = r'-'
  PUT = r'\.'
  GET = r','
  LOOP = r'\['
  JMP = r'\]'

  def error(self, t):
      self.index += 1

  @_(r'\n+')
  def ignore_newline(self, t):
    self.lineno += t.value.count('\n')


def tokenize(data):
    """Lazily yields sly tokens (with lineno) for every recognized character."""
    return BrainfuckLexer().tokenize(data)


def instructions(tokens):
    for tok in tokens:
        yield Instruction[tok.type]
