import logging
from typing import Any, Dict, List, Optional

from conllu.models import Token as ConlluToken, TokenList

from deptree.core.data_structures import Arc
from deptree.navigator import TreeNavigator

logger = logging.getLogger(__name__)


def build_arcs(nav: TreeNavigator) -> List[Arc]:
    """
    Дуги для визуализации: start < end всегда.
    direction="left" — зависимое слева от вершины (стрелка влево), иначе "right".
    """
    arcs = []
    for token in nav.store:
        if token.is_root:
            continue
        if token.index < token.head:
            arcs.append(Arc(start=token.index, end=token.head, label=token.dep, direction="left"))
        else:
            arcs.append(Arc(start=token.head, end=token.index, label=token.dep, direction="right"))
    return arcs


def to_displacy(nav: TreeNavigator) -> Dict[str, List[Dict[str, Any]]]:
    """
    Сериализация только для чтения: {words: [{text, tag}], arcs: [{start, end, label, direction}]}.
    Один проход O(n) по токенам.
    """
    return {
        "words": [{"text": t.text, "tag": t.tag} for t in nav.store],
        "arcs": [arc.model_dump() for arc in build_arcs(nav)],
    }


def to_token_list(nav: TreeNavigator, metadata: Optional[Dict[str, str]] = None) -> TokenList:
    """
    Обратное преобразование в CoNLL-U: id 1-based, HEAD=0 у корня.
    Пробелы кодируются через SpaceAfter=No.
    """
    rows = []
    for t in nav.store:
        misc = {k: v for k, v in t.misc.items() if k != "SpaceAfter"}
        if not t.whitespace:
            misc["SpaceAfter"] = "No"
        # Порядок ключей = порядок колонок при сериализации
        rows.append(ConlluToken({
            "id": t.index + 1,
            "form": t.text,
            "lemma": t.lemma or None,
            "upos": t.pos,
            "xpos": t.tag if t.tag != t.pos else None,
            "feats": None,
            "head": 0 if t.is_root else t.head + 1,
            "deprel": t.dep,
            "deps": None,
            "misc": misc or None,
        }))

    if metadata is None:
        metadata = {"text": "".join(t.text_with_ws for t in nav.store).strip()}
    return TokenList(rows, metadata=metadata)


def to_conllu(nav: TreeNavigator, metadata: Optional[Dict[str, str]] = None) -> str:
    return to_token_list(nav, metadata).serialize()
