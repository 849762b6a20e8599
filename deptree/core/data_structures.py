# deptree/core/data_structures.py
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Dict, Literal, Tuple


class Token(BaseModel):
    """
    Универсальная единица анализа.
    Гарантирует, что у каждого токена есть координаты в исходном тексте.

    Токен неизменяем: слияние создает новые объекты, а не правит старые.
    """
    model_config = ConfigDict(frozen=True)

    index: int  # 0-based позиция в документе
    text: str  # Original text substring
    whitespace: str = ""  # Пробел после токена ("" или " ")
    lemma: str = ""
    pos: str  # UPOS (NOUN, VERB, etc.)
    tag: str = ""  # Тонкий тег (XPOS); если пуст — совпадает с pos
    head: int  # 0-based индекс родителя; у корня head == index
    dep: str  # Dependency relation (nsubj, obj)

    # Система координат
    char_start: int
    char_end: int

    misc: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode='before')
    @classmethod
    def default_tag(cls, data):
        # Если тонкий тег не задан, берем UPOS
        if isinstance(data, dict) and not data.get("tag"):
            data = {**data, "tag": data.get("pos", "")}
        return data

    @model_validator(mode='after')
    def check_coordinates(self):
        if self.index < 0 or self.head < 0:
            raise ValueError(f"Negative index/head for token '{self.text}': {self.index}/{self.head}")
        if self.char_end <= self.char_start:
            raise ValueError(f"Invalid span for token '{self.text}': {self.char_start}-{self.char_end}")
        return self

    @property
    def span(self) -> Tuple[int, int]:
        return self.char_start, self.char_end

    @property
    def is_root(self) -> bool:
        return self.head == self.index

    @property
    def text_with_ws(self) -> str:
        return self.text + self.whitespace


class Span(BaseModel):
    """Полуоткрытый диапазон [start, end) по индексам токенов плюс кэш индекса корня."""
    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    root: int

    @model_validator(mode='after')
    def check_bounds(self):
        if not 0 <= self.start < self.end:
            raise ValueError(f"Invalid span bounds: [{self.start}, {self.end})")
        if not self.start <= self.root < self.end:
            raise ValueError(f"Span root {self.root} outside [{self.start}, {self.end})")
        return self

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, i: int) -> bool:
        return self.start <= i < self.end

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end

    def as_range(self) -> range:
        return range(self.start, self.end)


class Arc(BaseModel):
    """Дуга для сервиса визуализации: start < end всегда, направление — отдельным полем."""
    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    label: str
    direction: Literal["left", "right"]
