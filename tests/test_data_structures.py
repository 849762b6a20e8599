import unittest
from pydantic import ValidationError

from deptree.core.data_structures import Span, Token
from deptree.core.errors import CorruptTreeError
from deptree.store import TokenStore


def make_token(index, text, head, **kwargs):
    return Token(index=index, text=text, pos="NOUN", head=head, dep="dep",
                 char_start=kwargs.pop("char_start", 0), char_end=kwargs.pop("char_end", len(text)), **kwargs)


class TestToken(unittest.TestCase):
    def test_tag_defaults_to_pos(self):
        token = make_token(0, "Мама", 0)
        self.assertEqual(token.tag, "NOUN")
        self.assertTrue(token.is_root)
        self.assertEqual(token.span, (0, 4))

    def test_invalid_coordinates(self):
        with self.assertRaises(ValidationError):
            make_token(0, "Мама", 0, char_start=4, char_end=4)

    def test_token_is_immutable(self):
        token = make_token(0, "Мама", 0)
        with self.assertRaises(ValidationError):
            token.head = 1

    def test_text_with_ws(self):
        token = make_token(0, "Мама", 0, whitespace=" ")
        self.assertEqual(token.text_with_ws, "Мама ")


class TestSpan(unittest.TestCase):
    def test_bounds(self):
        span = Span(start=2, end=5, root=3)
        self.assertEqual(len(span), 3)
        self.assertTrue(span.contains(4))
        self.assertFalse(span.contains(5))
        self.assertEqual(list(span.as_range()), [2, 3, 4])

    def test_overlaps(self):
        a = Span(start=0, end=3, root=0)
        self.assertTrue(a.overlaps(Span(start=2, end=4, root=2)))
        self.assertFalse(a.overlaps(Span(start=3, end=4, root=3)))

    def test_invalid_span(self):
        with self.assertRaises(ValidationError):
            Span(start=3, end=3, root=3)
        with self.assertRaises(ValidationError):
            Span(start=0, end=2, root=5)


class TestTokenStore(unittest.TestCase):
    def test_indices_must_match_positions(self):
        with self.assertRaises(CorruptTreeError):
            TokenStore([make_token(1, "a", 1)])

    def test_words_and_heads(self):
        store = TokenStore([make_token(0, "a", 1), make_token(1, "b", 1)])
        self.assertEqual(store.words, ["a", "b"])
        self.assertEqual(store.heads, [1, 1])
        self.assertEqual(len(store), 2)


if __name__ == '__main__':
    unittest.main()
