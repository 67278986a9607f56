import io
import os
import unittest
from contextlib import redirect_stdout

from funlang.lang.error import ErrorHandler, GenericException
from funlang.lang.session import Session
from funlang.pure.tokens import SAMPLE_TOKENS, Token, TokenType

SAMPLES = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", "samples")


class SessionTestCase(unittest.TestCase):

    def test_preprocess_line(self):
        should_skip = ["", "   ", "\n", ";; comment", "  ;; indented comment"]
        for case in should_skip:
            self.assertIsNone(Session.preprocess_line(case, 1), case)

        should_raise = ["ident foo", "fun", "sep ("]
        for case in should_raise:
            self.assertRaises(GenericException, Session.preprocess_line, case, 1)

        should_pass = {
            "keyword fun": Token(TokenType.KEYWORD, "fun"),
            "IDENTIFIER foo\n": Token(TokenType.IDENTIFIER, "foo"),
            "separator ,": Token(TokenType.SEPARATOR, ","),
            "string hello, world!": Token(TokenType.STRING, "hello, world!"),
            "string  padded ": Token(TokenType.STRING, " padded "),
            "eof": Token(TokenType.EOF),
        }
        for case, expected in should_pass.items():
            self.assertEqual(expected, Session.preprocess_line(case, 1), case)

    def test_tokenize_lines(self):
        tokens = Session.tokenize_lines([";; foo()", "identifier foo", "", "separator (", "separator )"])
        self.assertEqual([Token(TokenType.IDENTIFIER, "foo"), Token(TokenType.SEPARATOR, "("),
                          Token(TokenType.SEPARATOR, ")"), Token(TokenType.EOF)], tokens)

        self.assertEqual([Token(TokenType.EOF)], Session.tokenize_lines([]))
        self.assertEqual([Token(TokenType.EOF)], Session.tokenize_lines(["eof"]))

    def test_load(self):
        self.assertEqual(list(SAMPLE_TOKENS), Session.load(os.path.join(SAMPLES, "hello.tok")))
        self.assertRaises(GenericException, Session.load, os.path.join(SAMPLES, "missing.tok"))

    def test_run_sample(self):
        out = io.StringIO()
        sess = Session(ErrorHandler(fatal=False), out=out)

        self.assertEqual(["hello, world!", "first second three"], sess.run())
        self.assertEqual("hello, world!\nfirst second three\n", out.getvalue())

    def test_run_file(self):
        sess = Session(ErrorHandler(fatal=False), os.path.join(SAMPLES, "hello.tok"), out=io.StringIO())
        self.assertEqual(["hello, world!", "first second three"], sess.run())

    def test_dump(self):
        dump = Session(ErrorHandler(fatal=False)).dump()

        self.assertTrue(dump.startswith("Program(nodes=["))
        self.assertIn("FunctionDeclare(name='sayHello', nodes=[", dump)
        self.assertIn("FunctionCall(name='println', arguments=['first', 'second', 'three'])", dump)

    def test_parse_failure(self):
        sess = Session(ErrorHandler(fatal=False), "<test>", tokens=Session.tokenize_lines(["separator }"]))
        self.assertRaises(GenericException, sess.run)
        self.assertIsNone(sess.program)

    def test_trailing_tokens(self):
        cases = {
            ("identifier println", "separator (", "separator )", "separator }"): [""],
            ("identifier println", "separator (", "string a", "separator )", "eof",
             "identifier println", "separator (", "string b", "separator )"): ["a"],
        }
        for case, expected in cases.items():
            error_handler = ErrorHandler(fatal=False)
            sess = Session(error_handler, "<test>", tokens=Session.tokenize_lines(case), out=io.StringIO())

            with redirect_stdout(io.StringIO()) as stdout:
                self.assertEqual(expected, sess.run(), case)

            self.assertEqual(1, len(error_handler.warnings), case)
            self.assertIn("unparsed tokens", stdout.getvalue(), case)

    def test_parse_twice(self):
        sess = Session(ErrorHandler(fatal=False), out=io.StringIO())

        first = sess.parse()
        second = sess.parse()
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

        sess.run()
        self.assertEqual(first, sess.parse())
        self.assertEqual(first.display(), sess.dump())


if __name__ == '__main__':
    unittest.main()
