import logging
from typing import List, Tuple

from deptree.core.errors import CorruptTreeError, OutOfRangeError
from deptree.store import TokenStore

logger = logging.getLogger(__name__)


class ArcIndex:
    """
    Производная структура над head-индексами: для каждого токена упорядоченный
    список детей, разбитый на левых и правых зависимых.

    Строится за один проход O(n) и пересобирается целиком после каждого слияния.
    """

    __slots__ = ("_children", "_n_lefts", "_root")

    def __init__(self, children: Tuple[Tuple[int, ...], ...], n_lefts: Tuple[int, ...], root: int):
        self._children = children
        self._n_lefts = n_lefts
        self._root = root

    @classmethod
    def build(cls, store: TokenStore) -> "ArcIndex":
        n = len(store)
        children: List[List[int]] = [[] for _ in range(n)]
        roots = []

        # Проход в порядке документа => списки детей уже отсортированы
        for token in store:
            head = token.head
            if head == token.index:
                roots.append(token.index)
                continue
            if not 0 <= head < n:
                raise CorruptTreeError(
                    f"Token {token.index} ('{token.text}'): HEAD {head} outside document of length {n}"
                )
            children[head].append(token.index)

        if len(roots) != 1:
            raise CorruptTreeError(f"Found {len(roots)} roots (expected 1): {roots}")

        # Число левых детей = число детей с индексом меньше родителя
        n_lefts = []
        for i, kids in enumerate(children):
            count = 0
            for child in kids:
                if child > i:
                    break
                count += 1
            n_lefts.append(count)

        logger.debug(f"ArcIndex built for {n} tokens, root={roots[0]}")
        return cls(tuple(tuple(kids) for kids in children), tuple(n_lefts), roots[0])

    def __len__(self) -> int:
        return len(self._children)

    @property
    def root(self) -> int:
        return self._root

    def _check(self, t: int) -> int:
        # То же правило, что и в TokenStore.check_index: отрицательные индексы запрещены
        if not isinstance(t, int) or not 0 <= t < len(self._children):
            raise OutOfRangeError(t, len(self._children))
        return t

    def children(self, t: int) -> Tuple[int, ...]:
        return self._children[self._check(t)]

    def lefts(self, t: int) -> Tuple[int, ...]:
        return self._children[self._check(t)][:self._n_lefts[t]]

    def rights(self, t: int) -> Tuple[int, ...]:
        return self._children[self._check(t)][self._n_lefts[t]:]

    def n_lefts(self, t: int) -> int:
        return self._n_lefts[self._check(t)]

    def n_rights(self, t: int) -> int:
        return len(self._children[self._check(t)]) - self._n_lefts[t]
