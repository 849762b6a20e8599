import unittest
from conllu import parse

from deptree.ingestion.readers import document_from_conllu, document_from_parse
from deptree.render import build_arcs, to_conllu, to_displacy


class TestDisplacySerialization(unittest.TestCase):
    def setUp(self):
        self.doc = document_from_parse(
            ["bright", "red", "apples", "on", "the", "tree"],
            [2, 2, 2, 2, 5, 3],
            ["amod", "amod", "ROOT", "prep", "det", "pobj"],
            ["ADJ", "ADJ", "NOUN", "ADP", "DET", "NOUN"],
        )

    def test_words(self):
        data = to_displacy(self.doc.navigator)
        self.assertEqual(data["words"][0], {"text": "bright", "tag": "ADJ"})
        self.assertEqual(len(data["words"]), 6)

    def test_arcs_direction(self):
        data = to_displacy(self.doc.navigator)
        arcs = data["arcs"]
        # Корень дуги не порождает
        self.assertEqual(len(arcs), 5)
        self.assertEqual(arcs[0], {"start": 0, "end": 2, "label": "amod", "direction": "left"})
        self.assertEqual(arcs[2], {"start": 2, "end": 3, "label": "prep", "direction": "right"})
        for arc in arcs:
            self.assertLess(arc["start"], arc["end"])

    def test_arcs_after_merge(self):
        self.doc.merge(3, 6)
        arcs = build_arcs(self.doc.navigator)
        self.assertEqual([(a.start, a.end, a.label) for a in arcs], [(0, 2, "amod"), (1, 2, "amod"), (2, 3, "prep")])


class TestConlluExport(unittest.TestCase):
    CONLLU = """
# text = Мама мыла раму.
1\tМама\tмама\tNOUN\t_\t_\t2\tnsubj\t_\t_
2\tмыла\tмыть\tVERB\t_\t_\t0\troot\t_\t_
3\tраму\tрама\tNOUN\t_\t_\t2\tobj\t_\tSpaceAfter=No
4\t.\t.\tPUNCT\t_\t_\t2\tpunct\t_\t_

"""

    def test_round_trip(self):
        doc = document_from_conllu(parse(self.CONLLU)[0])
        serialized = to_conllu(doc.navigator)

        sentence = parse(serialized)[0]
        self.assertEqual(sentence.metadata["text"], "Мама мыла раму.")
        self.assertEqual([t["head"] for t in sentence], [2, 0, 2, 2])
        self.assertEqual(sentence[2]["misc"], {"SpaceAfter": "No"})

        again = document_from_conllu(sentence)
        self.assertEqual(
            [(t.text, t.head, t.dep, t.whitespace, t.span) for t in again],
            [(t.text, t.head, t.dep, t.whitespace, t.span) for t in doc],
        )


if __name__ == '__main__':
    unittest.main()
