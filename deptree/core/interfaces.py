# deptree/core/interfaces.py
from abc import ABC, abstractmethod
from typing import List, Tuple

# (head_index, dependency_label, pos) для одного токена
ParsedTriple = Tuple[int, str, str]


class BaseParser(ABC):
    @abstractmethod
    def parse(self, words: List[str]) -> List[ParsedTriple]:
        """
        Принимает токенизированное предложение.
        Возвращает для каждого слова тройку (head_index, deprel, pos):
        head_index 0-based, ровно у одного токена head_index == i (корень).
        """
        pass
