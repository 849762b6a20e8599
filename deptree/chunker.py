import logging
from typing import List

from deptree.config import LabelScheme
from deptree.core.data_structures import Span
from deptree.navigator import TreeNavigator

logger = logging.getLogger(__name__)


class ChunkExtractor:
    """
    Выделяет плоские именные группы (noun chunks) по дереву зависимостей.

    Правила языка целиком задаются LabelScheme:
    какие метки могут быть вершиной, какие правые зависимые обрезают группу,
    какие токены срезаются с краев.
    """

    def __init__(self, scheme: LabelScheme):
        self.scheme = scheme

    def is_anchor(self, nav: TreeNavigator, i: int) -> bool:
        token = nav[i]
        if self.scheme.anchor_pos and token.pos not in self.scheme.anchor_pos:
            return False
        if token.dep in self.scheme.anchor_labels:
            return True
        if self.scheme.conj_label and token.dep == self.scheme.conj_label:
            # Поднимаемся по ряду однородных членов к первому
            first = nav[token.head]
            for _ in range(len(nav)):
                if first.dep != self.scheme.conj_label or first.is_root:
                    break
                first = nav[first.head]
            return first.dep in self.scheme.anchor_labels
        return False

    def _trimmable(self, nav: TreeNavigator, i: int) -> bool:
        token = nav[i]
        return token.dep in self.scheme.trim_labels or token.pos in self.scheme.trim_pos

    def candidate(self, nav: TreeNavigator, anchor: int) -> Span:
        """
        [left_edge, right_edge + 1) вершины, обрезанный по правилам схемы.
        Вершина никогда не срезается, поэтому результат непуст.
        """
        edges = nav.span_of(anchor)
        start, end = edges.start, edges.end

        for r in nav.rights(anchor):
            if nav[r].dep in self.scheme.boundary_labels:
                end = max(min(end, nav.left_edge(r)), anchor + 1)
                break

        while start < anchor and self._trimmable(nav, start):
            start += 1
        while end - 1 > anchor and self._trimmable(nav, end - 1):
            end -= 1

        return Span(start=start, end=end, root=anchor)

    def extract(self, nav: TreeNavigator) -> List[Span]:
        chunks: List[Span] = []
        for i in range(len(nav)):
            if not self.is_anchor(nav, i):
                continue
            span = self.candidate(nav, i)
            # Более поздний кандидат, пересекающийся с уже выданной группой, пропускается
            if any(span.overlaps(c) for c in chunks):
                continue
            chunks.append(span)

        logger.debug(f"Extracted {len(chunks)} noun chunks ({self.scheme.lang})")
        return chunks
