import io
import unittest

from mython.lexer import (
	Lexer, LexicalError, Token, tokenize, Id, Number, String, Char,
	CLASS, RETURN, IF, ELSE, DEF, PRINT, AND, OR, NOT, NONE, TRUE, FALSE,
	NUMBER, EQ, NOT_EQ, LESS_OR_EQ, GREATER_OR_EQ, INDENT, DEDENT, NEWLINE, EOF,
)

def T(kind): return Token(kind)

class TokenTests(unittest.TestCase):

	def test_equality_ignores_offset(self):
		self.assertEqual(Token(NUMBER, 7, offset=3), Number(7))
		self.assertNotEqual(Number(7), Number(8))
		self.assertNotEqual(Id("x"), String("x"))
		self.assertEqual(T(INDENT), Token(INDENT, offset=12))

	def test_display(self):
		self.assertEqual("Number{42}", repr(Number(42)))
		self.assertEqual("Id{x}", repr(Id("x")))
		self.assertEqual("Char{+}", repr(Char("+")))
		self.assertEqual("String{hi}", repr(String("hi")))
		self.assertEqual("Eof", repr(T(EOF)))
		self.assertEqual("LessOrEq", repr(T(LESS_OR_EQ)))

	def test_terminal_names(self):
		self.assertEqual("(", Char("(").terminal())
		self.assertEqual("Id", Id("x").terminal())
		self.assertEqual("Class", T(CLASS).terminal())


class LexerTests(unittest.TestCase):

	def test_nothing_but_blanks_and_comments(self):
		for text in ["", "\n\n", "   \n", "# just a comment", "  # indented comment\n\n    \n# another"]:
			with self.subTest(text=text):
				self.assertEqual([T(EOF)], tokenize(text))

	def test_simple_line(self):
		self.assertEqual(
			[Id("x"), Char("="), Number(42), Char("+"), String("hi"), T(NEWLINE), T(EOF)],
			tokenize('x = 42 + "hi"\n'),
		)

	def test_last_line_needs_no_line_break(self):
		self.assertEqual([Id("x"), T(NEWLINE), T(EOF)], tokenize("x"))

	def test_keywords(self):
		text = "class return if else def print and or not None True False classy"
		expect = [T(k) for k in (CLASS, RETURN, IF, ELSE, DEF, PRINT, AND, OR, NOT, NONE, TRUE, FALSE)]
		expect += [Id("classy"), T(NEWLINE), T(EOF)]
		self.assertEqual(expect, tokenize(text))

	def test_identifiers(self):
		self.assertEqual([Id("_a1"), Id("b_2"), Id("__init__"), T(NEWLINE), T(EOF)], tokenize("_a1 b_2 __init__"))

	def test_numbers_stop_at_non_digits(self):
		self.assertEqual([Number(12), Id("ab"), Number(3), T(NEWLINE), T(EOF)], tokenize("12ab 3"))

	def test_comparisons(self):
		self.assertEqual(
			[T(EQ), T(NOT_EQ), T(LESS_OR_EQ), T(GREATER_OR_EQ), Char("<"), Char(">"), Char("!"), Char("="), T(NEWLINE), T(EOF)],
			tokenize("== != <= >= < > ! ="),
		)

	def test_comment_ends_the_line(self):
		self.assertEqual([Id("x"), T(NEWLINE), T(EOF)], tokenize("x # and then some 'stuff\n"))

	def test_punctuation(self):
		self.assertEqual(
			[Id("a"), Char("."), Id("b"), Char("("), Char(")"), Char(":"), Char(","), T(NEWLINE), T(EOF)],
			tokenize("a.b():,"),
		)

	def test_indentation(self):
		text = "a\n    b\nc\n"
		expect = [
			Id("a"), T(NEWLINE),
			T(INDENT), T(INDENT), Id("b"), T(NEWLINE),
			T(DEDENT), T(DEDENT), Id("c"), T(NEWLINE),
			T(EOF),
		]
		self.assertEqual(expect, tokenize(text))

	def test_open_blocks_close_at_end_of_input(self):
		expect = [Id("a"), T(NEWLINE), T(INDENT), Id("b"), T(NEWLINE), T(INDENT), Id("c"), T(NEWLINE), T(DEDENT), T(DEDENT), T(EOF)]
		self.assertEqual(expect, tokenize("a\n  b\n    c"))
		self.assertEqual(expect, tokenize("a\n  b\n    c\n\n"))

	def test_blank_lines_do_not_touch_indentation(self):
		text = "a\n\n      # comment\n   \n  b\n"
		expect = [Id("a"), T(NEWLINE), T(INDENT), Id("b"), T(NEWLINE), T(DEDENT), T(EOF)]
		self.assertEqual(expect, tokenize(text))

	def test_bad_indent(self):
		with self.assertRaises(LexicalError) as cm:
			tokenize("a\n   b\n")
		self.assertEqual("bad indent size", cm.exception.message)
		self.assertEqual(2, cm.exception.offset)

	def test_escapes(self):
		self.assertEqual([String("a\nb"), T(NEWLINE), T(EOF)], tokenize('"a\\nb"'))
		self.assertEqual(
			[String("\t\r\"'\\"), String('say "hi"'), T(NEWLINE), T(EOF)],
			tokenize(r'''"\t\r\"\'\\" 'say "hi"' '''),
		)

	def test_bad_strings(self):
		for text in ['"abc', '"abc\ndef"', "'abc\\q'", '"abc\\', "'abc\r'"]:
			with self.subTest(text=text):
				with self.assertRaises(LexicalError):
					tokenize(text)

	def test_current_and_next(self):
		lexer = Lexer("x 1")
		self.assertEqual(Id("x"), lexer.current_token())
		self.assertEqual(Number(1), lexer.next_token())
		self.assertEqual(Number(1), lexer.current_token())
		self.assertEqual(T(NEWLINE), lexer.next_token())
		self.assertEqual(T(EOF), lexer.next_token())
		self.assertEqual(T(EOF), lexer.next_token())
		self.assertEqual(T(EOF), lexer.current_token())

	def test_reads_a_stream(self):
		self.assertEqual([Id("x"), T(NEWLINE), T(EOF)], tokenize(io.StringIO("x\n")))

	def test_windows_line_breaks(self):
		self.assertEqual(
			[Id("a"), T(NEWLINE), T(INDENT), Id("b"), T(NEWLINE), T(DEDENT), T(EOF)],
			tokenize("a\r\n  b  # note\r\n\r\n"),
		)

	def test_offsets(self):
		tokens = tokenize("ab = \"c\"\n  d")
		self.assertEqual([0, 3, 5, 8, 11, 11, 12, 13, 12], [t.offset for t in tokens])

if __name__ == '__main__':
	unittest.main()
