import logging
from typing import Iterable, List, NamedTuple, Tuple

from deptree.core.data_structures import Span, Token
from deptree.core.errors import InvalidSpanError, OutOfRangeError
from deptree.navigator import TreeNavigator
from deptree.store import TokenStore

logger = logging.getLogger(__name__)


class MergeResult(NamedTuple):
    store: TokenStore
    span: Span  # Слитый токен в новой индексации (длина 1)


class SpanMerger:
    """
    Сжимает поддерево, выровненное по диапазону [start, end), в один токен
    и переписывает все внешние ссылки на HEAD.

    Операция чистая: исходный снимок не меняется, возвращается новый TokenStore.
    """

    @staticmethod
    def find_span_root(nav: TreeNavigator, start: int, end: int) -> int:
        """
        Единственный токен диапазона, чей HEAD лежит снаружи (или корень документа).
        Если таких нет или больше одного — диапазон не поддерево.
        """
        n = len(nav)
        if not 0 <= start < n:
            raise OutOfRangeError(start, n)
        if end > n:
            raise OutOfRangeError(end, n)
        if end <= start:
            raise InvalidSpanError(start, end, "empty range")

        external = [
            i for i in range(start, end)
            if nav[i].is_root or not start <= nav[i].head < end
        ]
        if len(external) != 1:
            raise InvalidSpanError(start, end, f"{len(external)} tokens have heads outside the range: {external}")

        root = external[0]
        edges = nav.span_of(root)
        if edges.start != start or edges.end != end:
            raise InvalidSpanError(
                start, end,
                f"subtree of token {root} spans [{edges.start}, {edges.end})"
            )
        return root

    def merge(self, nav: TreeNavigator, start: int, end: int) -> MergeResult:
        root = self.find_span_root(nav, start, end)
        shift = end - start - 1

        def remap(head: int) -> int:
            if start <= head < end:
                return start
            if head >= end:
                return head - shift
            return head

        inner = nav.store.slice(start, end)
        root_token = nav[root]
        merged = Token(
            index=start,
            text="".join(t.text_with_ws for t in inner[:-1]) + inner[-1].text,
            whitespace=inner[-1].whitespace,
            lemma=root_token.lemma,
            pos=root_token.pos,
            tag=root_token.tag,
            dep=root_token.dep,
            # Корень документа остается корнем: remap переводит его HEAD в start
            head=remap(root_token.head),
            char_start=inner[0].char_start,
            char_end=inner[-1].char_end,
            misc=dict(root_token.misc),
        )

        tokens: List[Token] = list(nav.store.slice(0, start))
        tokens = [t.model_copy(update={"head": remap(t.head)}) for t in tokens]
        tokens.append(merged)
        for t in nav.store.slice(end, len(nav)):
            tokens.append(t.model_copy(update={"index": t.index - shift, "head": remap(t.head)}))

        logger.debug(f"Merged [{start}, {end}) into '{merged.text}' (root token {root}), length {len(nav)} -> {len(tokens)}")
        return MergeResult(TokenStore(tokens), Span(start=start, end=start + 1, root=start))

    def merge_spans(self, nav: TreeNavigator, spans: Iterable[Span]) -> Tuple[TreeNavigator, List[Span]]:
        """
        Сливает несколько непересекающихся диапазонов.
        Идем справа налево, чтобы индексы левее текущего слияния оставались валидными.
        Возвращает новый навигатор и слитые токены в итоговой индексации.
        """
        ordered = sorted(spans, key=lambda s: s.start)
        for prev, nxt in zip(ordered, ordered[1:]):
            if prev.overlaps(nxt):
                raise InvalidSpanError(nxt.start, nxt.end, f"overlaps [{prev.start}, {prev.end})")

        current = nav
        for span in reversed(ordered):
            result = self.merge(current, span.start, span.end)
            current = TreeNavigator(result.store)

        merged = []
        offset = 0
        for span in ordered:
            pos = span.start - offset
            merged.append(Span(start=pos, end=pos + 1, root=pos))
            offset += len(span) - 1
        return current, merged
