from typing import Iterable, Iterator, List, Tuple

from deptree.core.data_structures import Token
from deptree.core.errors import CorruptTreeError, OutOfRangeError


class TokenStore:
    """
    Упорядоченная неизменяемая последовательность токенов с доступом по индексу.
    Любое изменение (слияние) создает новый TokenStore.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Tuple[Token, ...] = tuple(tokens)
        for i, token in enumerate(self._tokens):
            if token.index != i:
                raise CorruptTreeError(f"Token '{token.text}' has index {token.index}, expected {i}")

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __getitem__(self, i: int) -> Token:
        return self._tokens[self.check_index(i)]

    def check_index(self, i: int) -> int:
        # Отрицательные индексы не поддерживаем: после слияния они легко маскируют ошибку
        if not isinstance(i, int) or not 0 <= i < len(self._tokens):
            raise OutOfRangeError(i, len(self._tokens))
        return i

    @property
    def heads(self) -> List[int]:
        return [t.head for t in self._tokens]

    @property
    def words(self) -> List[str]:
        return [t.text for t in self._tokens]

    def slice(self, start: int, end: int) -> Tuple[Token, ...]:
        return self._tokens[start:end]

    def __repr__(self):
        return f"TokenStore({' '.join(self.words)!r})"
