# deptree/ingestion/readers.py
import logging
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple

from conllu import TokenList, parse_incr

from deptree.core.data_structures import Token
from deptree.core.errors import DependencyTreeError
from deptree.core.interfaces import BaseParser
from deptree.document import Document
from deptree.ingestion.validators import TreeValidator

logger = logging.getLogger(__name__)


def compute_offsets(words: Sequence[str], spaces: Sequence[bool], text: Optional[str] = None) -> List[Tuple[int, int]]:
    """
    Расставляет символьные оффсеты токенов.
    Если есть исходный текст — ищем каждое слово начиная с позиции предыдущего,
    иначе строим координаты из слов и пробелов.
    """
    offsets = []
    cursor = 0
    for word, space in zip(words, spaces):
        start = text.find(word, cursor) if text is not None else -1
        if text is not None and start == -1:
            # Мягкое падение: токен не нашелся в тексте, продолжаем по синтетической разметке
            logger.warning(f"Token '{word}' not found in text after position {cursor}")
        if start == -1:
            start = cursor
        end = start + len(word)
        offsets.append((start, end))
        cursor = end + (1 if space and text is None else 0)
    return offsets


def document_from_parse(
        words: Sequence[str],
        heads: Sequence[int],
        labels: Sequence[str],
        tags: Sequence[str],
        spaces: Optional[Sequence[bool]] = None,
        lemmas: Optional[Sequence[str]] = None,
        text: Optional[str] = None,
) -> Document:
    """
    Документ из выхода внешнего парсера: для каждого слова (head 0-based, метка, POS).
    Корень ссылается сам на себя.
    """
    n = len(words)
    if not (len(heads) == len(labels) == len(tags) == n):
        raise ValueError(
            f"Length mismatch: words={n}, heads={len(heads)}, labels={len(labels)}, tags={len(tags)}"
        )
    spaces = list(spaces) if spaces is not None else [True] * (n - 1) + [False]
    lemmas = list(lemmas) if lemmas is not None else [""] * n

    offsets = compute_offsets(words, spaces, text)
    tokens = [
        Token(
            index=i,
            text=words[i],
            whitespace=" " if spaces[i] else "",
            lemma=lemmas[i],
            pos=tags[i],
            head=heads[i],
            dep=labels[i],
            char_start=offsets[i][0],
            char_end=offsets[i][1],
        )
        for i in range(n)
    ]
    return Document(tokens, text=text)


def document_from_parser(parser: BaseParser, words: Sequence[str], text: Optional[str] = None) -> Document:
    triples = parser.parse(list(words))
    if len(triples) != len(words):
        raise ValueError(f"Parser returned {len(triples)} triples for {len(words)} words")
    heads, labels, tags = zip(*triples) if triples else ((), (), ())
    return document_from_parse(words, heads, labels, tags, text=text)


def document_from_records(records: List[Dict[str, Any]], text: Optional[str] = None) -> Document:
    """
    Документ из словарей пайплайна: id 1-based, head_id=0 у корня,
    ключи 'text', 'pos', 'rel', 'lemma', 'start_char', 'end_char'.
    """
    id_to_index = {r["id"]: i for i, r in enumerate(records)}
    tokens = []
    for i, r in enumerate(records):
        head_id = r["head_id"]
        if head_id == 0:
            head = i
        elif head_id in id_to_index:
            head = id_to_index[head_id]
        else:
            raise DependencyTreeError(f"Record {r['id']}: head_id {head_id} not found")

        # Пробел после токена определяем по зазору до следующего
        nxt = records[i + 1] if i + 1 < len(records) else None
        space = nxt is not None and nxt["start_char"] > r["end_char"]

        lemma = r.get("lemma") or ""
        tokens.append(Token(
            index=i,
            text=r["text"],
            whitespace=" " if space else "",
            lemma="" if lemma == "_" else lemma,
            pos=r.get("pos", "X"),
            head=head,
            dep=r.get("rel", "dep"),
            char_start=r["start_char"],
            char_end=r["end_char"],
        ))
    return Document(tokens, text=text)


def document_from_conllu(token_list: TokenList) -> Document:
    """
    Документ из предложения CoNLL-U (conllu.TokenList).
    Мульти-словные токены и пустые узлы пропускаются, HEAD=0 становится ссылкой на себя.
    """
    words = [t for t in token_list if isinstance(t['id'], int)]
    id_to_index = {t['id']: i for i, t in enumerate(words)}

    heads = []
    for i, t in enumerate(words):
        head = t['head']
        if head == 0:
            heads.append(i)
        elif head in id_to_index:
            heads.append(id_to_index[head])
        else:
            raise DependencyTreeError(f"Token {t['id']} ('{t['form']}'): HEAD {head} not found")

    spaces = []
    for i, t in enumerate(words):
        misc = t.get('misc') or {}
        spaces.append(misc.get('SpaceAfter') != 'No' and i < len(words) - 1)

    text = token_list.metadata.get('text')
    forms = [t['form'] for t in words]
    offsets = compute_offsets(forms, spaces, text)

    tokens = []
    for i, t in enumerate(words):
        misc = {k: str(v) for k, v in (t.get('misc') or {}).items() if v is not None and k != 'SpaceAfter'}
        tokens.append(Token(
            index=i,
            text=t['form'],
            whitespace=" " if spaces[i] else "",
            lemma=t.get('lemma') or "",
            pos=t.get('upos') or "X",
            tag=t.get('xpos') or "",
            head=heads[i],
            dep=t.get('deprel') or "dep",
            char_start=offsets[i][0],
            char_end=offsets[i][1],
            misc=misc,
        ))
    return Document(tokens, text=text)


class ConlluDocumentReader:
    """
    Потоковое чтение .conllu файлов в документы.
    Невалидные предложения логируются и пропускаются, ошибки чтения файла пробрасываются.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.skipped = 0

    def read(self, file_paths: List[Path]) -> Generator[Tuple[str, Document], None, None]:
        for fp in file_paths:
            fp = Path(fp)
            logger.info(f"Парсинг файла: {fp.name}")
            try:
                with open(fp, "r", encoding="utf-8") as f:
                    # parse_incr читает файл лениво
                    for token_list in parse_incr(f):
                        sid = token_list.metadata.get('sent_id', 'UNKNOWN')
                        val_res = TreeValidator.validate_sentence(token_list, strict=self.strict)
                        if not val_res.is_valid:
                            self.skipped += 1
                            logger.warning(f"Skipped invalid sentence {sid} in {fp.name}: {val_res.errors}")
                            continue
                        try:
                            doc = document_from_conllu(token_list)
                        except (DependencyTreeError, ValueError) as e:
                            self.skipped += 1
                            logger.warning(f"Skipped sentence {sid} in {fp.name}: {e}")
                            continue
                        yield sid, doc
            except OSError as e:
                logger.error(f"Критическая ошибка при чтении {fp}: {e}")
                raise
