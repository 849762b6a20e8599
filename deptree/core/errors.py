# deptree/core/errors.py


class DependencyTreeError(Exception):
    """Базовое исключение для всех ошибок модели документа."""


class CorruptTreeError(DependencyTreeError):
    """
    Нарушена структура дерева: нет корня, несколько корней,
    HEAD вне документа или цикл в цепочке родителей.
    Ошибка фатальная — её нельзя глотать.
    """


class InvalidSpanError(DependencyTreeError):
    """
    Диапазон не совпадает с границами поддерева ровно одного токена.
    Вызывающий код может пересчитать границы через left_edge/right_edge и повторить.
    """

    def __init__(self, start: int, end: int, reason: str):
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(f"Invalid span [{start}, {end}): {reason}")


class OutOfRangeError(DependencyTreeError, IndexError):
    """Индекс за пределами текущего документа (частый случай — после слияния)."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of range for document of length {length}")
