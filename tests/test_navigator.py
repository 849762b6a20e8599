import unittest
from deptree.core.errors import CorruptTreeError, OutOfRangeError
from deptree.ingestion.readers import document_from_parse


def autonomous_cars(toward_head: int = 2):
    # "toward" по умолчанию зависит от "shift" (как в разборе spaCy)
    words = ["Autonomous", "cars", "shift", "insurance", "liability", "toward", "manufacturers"]
    heads = [1, 2, 2, 4, 2, toward_head, 5]
    labels = ["amod", "nsubj", "ROOT", "compound", "dobj", "prep", "pobj"]
    tags = ["ADJ", "NOUN", "VERB", "NOUN", "NOUN", "ADP", "NOUN"]
    return document_from_parse(words, heads, labels, tags)


def credit_holders():
    words = ["Credit", "and", "mortgage", "account", "holders", "must", "submit", "their", "requests"]
    heads = [4, 0, 0, 4, 6, 6, 6, 8, 6]
    labels = ["nmod", "cc", "conj", "compound", "nsubj", "aux", "ROOT", "poss", "dobj"]
    tags = ["NOUN", "CCONJ", "NOUN", "NOUN", "NOUN", "VERB", "VERB", "PRON", "NOUN"]
    return document_from_parse(words, heads, labels, tags)


def bright_apples():
    words = ["bright", "red", "apples", "on", "the", "tree"]
    heads = [2, 2, 2, 2, 5, 3]
    labels = ["amod", "amod", "ROOT", "prep", "det", "pobj"]
    tags = ["ADJ", "ADJ", "NOUN", "ADP", "DET", "NOUN"]
    return document_from_parse(words, heads, labels, tags)


def crossing():
    # Синтетический пример пересечения дуг: A -> C, B -> D (0 < 1 < 2 < 3)
    return document_from_parse(
        ["A", "B", "C", "D"],
        [2, 3, 2, 2],
        ["obj", "obj", "root", "xcomp"],
        ["NOUN", "NOUN", "VERB", "VERB"],
    )


class TestTreeNavigator(unittest.TestCase):
    def setUp(self):
        self.nav = autonomous_cars().navigator

    def words(self, indices):
        return [self.nav[i].text for i in indices]

    def test_children_of_root(self):
        self.assertEqual(self.nav.root, 2)
        self.assertEqual(self.words(self.nav.children(2)), ["cars", "liability", "toward"])

    def test_ancestors(self):
        self.assertEqual(self.words(self.nav.ancestors(6)), ["toward", "shift"])
        self.assertEqual(list(self.nav.ancestors(2)), [])

    def test_ancestors_through_noun_attachment(self):
        # Вариант, где "toward" присоединено к "liability"
        nav = autonomous_cars(toward_head=4).navigator
        self.assertEqual([nav[i].text for i in nav.ancestors(6)], ["toward", "liability", "shift"])
        self.assertEqual([nav[i].text for i in nav.children(2)], ["cars", "liability"])

    def test_sequences_are_restartable(self):
        # Каждый вызов — новый обход
        first = list(self.nav.subtree(4))
        second = list(self.nav.subtree(4))
        self.assertEqual(first, second)
        self.assertEqual(first, [3, 4])

    def test_lefts_and_rights(self):
        nav = bright_apples().navigator
        self.assertEqual([nav[i].text for i in nav.lefts(2)], ["bright", "red"])
        self.assertEqual([nav[i].text for i in nav.rights(2)], ["on"])
        self.assertEqual(nav.n_lefts(2), 2)
        self.assertEqual(nav.n_rights(2), 1)

    def test_edges(self):
        nav = credit_holders().navigator
        self.assertEqual(nav.left_edge(4), 0)
        self.assertEqual(nav.right_edge(4), 4)
        span = nav.span_of(4)
        self.assertEqual((span.start, span.end, span.root), (0, 5, 4))
        self.assertEqual(nav.span_text(span), "Credit and mortgage account holders")

    def test_depth(self):
        self.assertEqual(self.nav.depth(2), 0)
        self.assertEqual(self.nav.depth(6), 2)

    def test_out_of_range(self):
        with self.assertRaises(OutOfRangeError):
            list(self.nav.children(7))
        with self.assertRaises(OutOfRangeError):
            self.nav.left_edge(-1)
        with self.assertRaises(IndexError):
            self.nav[100]
        with self.assertRaises(OutOfRangeError):
            self.nav.is_ancestor(10, 0)


class TestTreeProperties(unittest.TestCase):
    """Свойства, которые должны выполняться для любого корректного дерева."""

    def setUp(self):
        self.docs = [autonomous_cars(), autonomous_cars(4), credit_holders(), bright_apples(), crossing()]

    def test_ancestor_walk_reaches_root(self):
        for doc in self.docs:
            nav = doc.navigator
            for t in range(len(nav)):
                chain = list(nav.ancestors(t))
                self.assertLessEqual(len(chain), len(nav))
                if t != nav.root:
                    self.assertEqual(chain[-1], nav.root)

    def test_subtree_of_root_is_document(self):
        for doc in self.docs:
            nav = doc.navigator
            self.assertEqual(list(nav.subtree(nav.root)), list(range(len(nav))))

    def test_is_ancestor_matches_ancestors(self):
        for doc in self.docs:
            nav = doc.navigator
            n = len(nav)
            for a in range(n):
                for b in range(n):
                    self.assertEqual(nav.is_ancestor(a, b), a in list(nav.ancestors(b)))

    def test_lefts_plus_rights_equals_children(self):
        for doc in self.docs:
            nav = doc.navigator
            for t in range(len(nav)):
                self.assertEqual(nav.n_lefts(t) + nav.n_rights(t), len(list(nav.children(t))))
                self.assertEqual(list(nav.lefts(t)) + list(nav.rights(t)), list(nav.children(t)))

    def test_projective_subtrees_are_contiguous(self):
        for doc in self.docs[:4]:
            nav = doc.navigator
            self.assertTrue(nav.is_projective())
            for t in range(len(nav)):
                self.assertEqual(list(nav.subtree(t)), list(range(nav.left_edge(t), nav.right_edge(t) + 1)))

    def test_non_projective_subtree_has_gap(self):
        nav = crossing().navigator
        self.assertFalse(nav.is_projective())
        self.assertEqual(list(nav.subtree(3)), [1, 3])
        self.assertEqual((nav.left_edge(3), nav.right_edge(3)), (1, 3))


class TestCorruptTrees(unittest.TestCase):
    def test_cycle_in_ancestors(self):
        # Один корень (0), но 1 и 2 ссылаются друг на друга
        doc = document_from_parse(["a", "b", "c"], [0, 2, 1], ["root", "dep", "dep"], ["X", "X", "X"])
        with self.assertRaises(CorruptTreeError):
            list(doc.navigator.ancestors(1))
        with self.assertRaises(CorruptTreeError):
            list(doc.navigator.subtree(1))

    def test_no_root(self):
        with self.assertRaises(CorruptTreeError):
            document_from_parse(["a", "b"], [1, 0], ["dep", "dep"], ["X", "X"])

    def test_multiple_roots(self):
        with self.assertRaises(CorruptTreeError):
            document_from_parse(["a", "b"], [0, 1], ["root", "root"], ["X", "X"])

    def test_head_outside_document(self):
        with self.assertRaises(CorruptTreeError):
            document_from_parse(["a", "b"], [0, 5], ["root", "dep"], ["X", "X"])


if __name__ == '__main__':
    unittest.main()
