import logging
from typing import Iterator, Optional

from deptree.arcs import ArcIndex
from deptree.core.data_structures import Span, Token
from deptree.core.errors import CorruptTreeError
from deptree.store import TokenStore

logger = logging.getLogger(__name__)


class TreeNavigator:
    """
    API навигации по дереву зависимостей только для чтения.

    Работает над неизменяемым снимком (TokenStore + ArcIndex), поэтому
    безопасен для параллельного чтения из нескольких потоков.
    Все последовательности (children, subtree, ancestors...) — генераторы:
    каждый вызов пересчитывает их заново, повторный вызов дает новый обход.
    """

    __slots__ = ("store", "arcs")

    def __init__(self, store: TokenStore, arcs: Optional[ArcIndex] = None):
        self.store = store
        self.arcs = arcs if arcs is not None else ArcIndex.build(store)

    def __len__(self) -> int:
        return len(self.store)

    def __getitem__(self, t: int) -> Token:
        return self.store[t]

    @property
    def root(self) -> int:
        return self.arcs.root

    def head(self, t: int) -> int:
        return self.store[t].head

    # --- Прямые зависимые ---

    def children(self, t: int) -> Iterator[int]:
        self.store.check_index(t)
        yield from self.arcs.children(t)

    def lefts(self, t: int) -> Iterator[int]:
        self.store.check_index(t)
        yield from self.arcs.lefts(t)

    def rights(self, t: int) -> Iterator[int]:
        self.store.check_index(t)
        yield from self.arcs.rights(t)

    def n_lefts(self, t: int) -> int:
        return self.arcs.n_lefts(self.store.check_index(t))

    def n_rights(self, t: int) -> int:
        return self.arcs.n_rights(self.store.check_index(t))

    # --- Предки ---

    def ancestors(self, t: int) -> Iterator[int]:
        """
        Цепочка родителей от head(t) до корня включительно (сам t не входит).
        Больше n шагов без неподвижной точки означает цикл.
        """
        current = self.store.check_index(t)
        limit = len(self.store)
        steps = 0
        while True:
            head = self.store[current].head
            if head == current:
                return
            steps += 1
            if steps > limit:
                raise CorruptTreeError(f"Ancestor walk from token {t} exceeded {limit} steps (cycle)")
            yield head
            current = head

    def is_ancestor(self, a: int, b: int) -> bool:
        self.store.check_index(a)
        return any(x == a for x in self.ancestors(b))

    def depth(self, t: int) -> int:
        return sum(1 for _ in self.ancestors(t))

    # --- Поддеревья ---

    def subtree(self, t: int) -> Iterator[int]:
        """
        {t} ∪ поддеревья всех детей, по возрастанию индекса.
        Обход итеративный (явный стек), чтобы не упираться в глубину рекурсии.
        """
        self.store.check_index(t)
        seen = set()
        stack = [t]
        while stack:
            node = stack.pop()
            if node in seen:
                raise CorruptTreeError(f"Token {node} reached twice in subtree of {t} (cycle)")
            seen.add(node)
            stack.extend(self.arcs.children(node))
        yield from sorted(seen)

    def left_edge(self, t: int) -> int:
        return min(self.subtree(t))

    def right_edge(self, t: int) -> int:
        return max(self.subtree(t))

    def span_of(self, t: int) -> Span:
        """
        Контигуальные границы поддерева.
        Для непроективного дерева диапазон может включать чужие токены —
        для точного состава используйте subtree(t).
        """
        members = list(self.subtree(t))
        return Span(start=members[0], end=members[-1] + 1, root=t)

    def is_projective(self) -> bool:
        # Проективно <=> каждое поддерево занимает непрерывный диапазон
        for t in range(len(self.store)):
            members = list(self.subtree(t))
            if members[-1] - members[0] + 1 != len(members):
                return False
        return True

    # --- Текст ---

    def span_text(self, span: Span) -> str:
        self.store.check_index(span.start)
        self.store.check_index(span.end - 1)
        tokens = self.store.slice(span.start, span.end)
        return "".join(t.text_with_ws for t in tokens[:-1]) + tokens[-1].text

    def __repr__(self):
        return f"TreeNavigator({len(self.store)} tokens, root={self.root})"
