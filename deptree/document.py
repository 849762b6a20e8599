import logging
import threading
from typing import Callable, Iterable, List, Optional

from deptree.chunker import ChunkExtractor
from deptree.config import DEFAULT_LANG, LabelScheme, get_label_scheme
from deptree.core.data_structures import Span, Token
from deptree.core.errors import InvalidSpanError
from deptree.merger import SpanMerger
from deptree.navigator import TreeNavigator
from deptree.store import TokenStore

logger = logging.getLogger(__name__)


class Document:
    """
    Документ: текущий снимок (TokenStore + ArcIndex) и единственная мутирующая операция — merge.

    Дисциплина "один писатель": merge выполняется под блокировкой и публикует
    новый навигатор одним присваиванием. Читатели, успевшие взять navigator
    до слияния, продолжают видеть старое дерево.
    """

    def __init__(self, tokens: Iterable[Token], text: Optional[str] = None):
        self.text = text
        self._lock = threading.Lock()
        self._merger = SpanMerger()
        self._nav = TreeNavigator(TokenStore(tokens))

    @property
    def navigator(self) -> TreeNavigator:
        return self._nav

    @property
    def tokens(self) -> TokenStore:
        return self._nav.store

    def __len__(self) -> int:
        return len(self._nav)

    def __getitem__(self, i: int) -> Token:
        return self._nav[i]

    def __iter__(self):
        return iter(self._nav.store)

    def merge(self, start: int, end: int) -> Span:
        with self._lock:
            result = self._merger.merge(self._nav, start, end)
            self._nav = TreeNavigator(result.store)
            new_length = len(result.store)
        logger.debug(f"Document merged [{start}, {end}), new length {new_length}")
        return result.span

    def merge_spans(self, spans: Iterable[Span]) -> List[Span]:
        with self._lock:
            self._nav, merged = self._merger.merge_spans(self._nav, spans)
        return merged

    def merge_selected(self, select: Callable[[TreeNavigator], Iterable[Span]]) -> List[Span]:
        """
        Выбор диапазонов и их слияние под одной блокировкой:
        select получает текущий навигатор, между выбором и слиянием снимок не меняется.
        """
        with self._lock:
            spans = list(select(self._nav))
            self._nav, merged = self._merger.merge_spans(self._nav, spans)
        return merged

    def __repr__(self):
        return f"Document({' '.join(self._nav.store.words)!r})"


class ParseContext:
    """
    Явный контекст вместо глобального "активного пайплайна":
    документ + схема меток языка передаются вместе в каждую операцию.
    """

    def __init__(self, document: Document, lang: str = DEFAULT_LANG, scheme: Optional[LabelScheme] = None):
        self.document = document
        self.scheme = scheme if scheme is not None else get_label_scheme(lang)
        self.chunker = ChunkExtractor(self.scheme)

    @property
    def lang(self) -> str:
        return self.scheme.lang

    @property
    def navigator(self) -> TreeNavigator:
        return self.document.navigator

    def noun_chunks(self) -> List[Span]:
        return self.chunker.extract(self.document.navigator)

    def noun_chunk_texts(self) -> List[str]:
        nav = self.document.navigator
        return [nav.span_text(span) for span in self.chunker.extract(nav)]

    def _mergeable_chunks(self, nav: TreeNavigator) -> List[Span]:
        spans = []
        for chunk in self.chunker.extract(nav):
            if len(chunk) == 1:
                continue
            try:
                SpanMerger.find_span_root(nav, chunk.start, chunk.end)
            except InvalidSpanError as e:
                # Обрезанная группа не совпадает с поддеревом — оставляем токены как есть
                logger.warning(f"Noun chunk '{nav.span_text(chunk)}' not merged: {e.reason}")
                continue
            spans.append(chunk)
        return spans

    def merge_noun_chunks(self) -> List[Span]:
        """
        Сливает в один токен каждую именную группу, совпадающую с поддеревом своей вершины.
        Возвращает слитые токены в новой индексации.
        """
        merged = self.document.merge_selected(self._mergeable_chunks)
        logger.info(f"Merged {len(merged)} noun chunks")
        return merged
