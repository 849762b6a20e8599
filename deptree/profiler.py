import logging
from typing import Any, Dict, List, Tuple

import networkx as nx

from deptree.document import ParseContext
from deptree.navigator import TreeNavigator

logger = logging.getLogger(__name__)


class TreeProfiler:
    """
    Набор метрик по одному документу: глубина дерева, проективность,
    длины дуг, число именных групп.
    """

    def profile(self, ctx: ParseContext) -> Dict[str, Any]:
        nav = ctx.navigator
        arcs = self._arcs(nav)
        return {
            "text_len": len(nav),
            "tree_depth": self._calculate_tree_depth(nav),
            "is_projective": nav.is_projective(),
            "crossing_arcs": self._count_crossing_arcs(arcs),
            "mean_arc_length": sum(e - s for s, e in arcs) / len(arcs) if arcs else 0.0,
            "noun_chunks": len(ctx.noun_chunks()),
        }

    @staticmethod
    def _arcs(nav: TreeNavigator) -> List[Tuple[int, int]]:
        # Дуга всегда от min к max для проверки пересечений
        return [tuple(sorted((t.index, t.head))) for t in nav.store if not t.is_root]

    @staticmethod
    def _calculate_tree_depth(nav: TreeNavigator) -> int:
        """
        Максимальная глубина дерева в ребрах от корня до самого глубокого листа.
        """
        g = nx.DiGraph()
        g.add_node(nav.root)
        for t in nav.store:
            if not t.is_root:
                g.add_edge(t.head, t.index)

        # shortest_path в невзвешенном графе дает BFS уровни
        lengths = nx.shortest_path_length(g, source=nav.root)
        return max(lengths.values())

    @staticmethod
    def _count_crossing_arcs(arcs: List[Tuple[int, int]]) -> int:
        """
        Число пар пересекающихся дуг (start < end < start < end).
        """
        count = 0
        for i in range(len(arcs)):
            for j in range(i + 1, len(arcs)):
                s1, e1 = arcs[i]
                s2, e2 = arcs[j]

                # Одна дуга начинается внутри другой, но заканчивается снаружи
                if s1 < s2 < e1 < e2 or s2 < s1 < e2 < e1:
                    count += 1
        return count
