# deptree/ingestion/validators.py
import logging
from typing import Any, Dict, List, Sequence

import networkx as nx
from conllu import TokenList

logger = logging.getLogger(__name__)


class ValidationResult:
    """DTO для результатов валидации."""

    def __init__(self, is_valid: bool, errors: List[str]):
        self.is_valid = is_valid
        self.errors = errors

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors})"


class TreeValidator:
    """
    Проверки целостности дерева до построения документа.
    В отличие от ArcIndex не бросает исключений, а собирает все найденные проблемы.
    """

    @staticmethod
    def validate_heads(heads: Sequence[int]) -> ValidationResult:
        """
        heads — 0-based, корень ссылается сам на себя.
        Проверяет: ровно один корень, HEAD внутри документа, отсутствие циклов.
        """
        errors = []
        n = len(heads)
        if n == 0:
            return ValidationResult(False, ["ERROR: Пустой документ"])

        g = nx.DiGraph()
        g.add_nodes_from(range(n))
        roots = []

        for i, head in enumerate(heads):
            if head == i:
                roots.append(i)
            elif not isinstance(head, int) or not 0 <= head < n:
                errors.append(f"Token {i}: HEAD {head} ссылается на несуществующий индекс")
            else:
                g.add_edge(head, i)

        if len(roots) != 1:
            errors.append(f"ERROR: Найдено {len(roots)} корней (ожидается 1)")

        # Цикл = ошибка разметки: цепочка родителей никогда не дойдет до корня
        for cycle in nx.simple_cycles(g):
            errors.append(f"ERROR: Цикл в дереве: {sorted(cycle)}")

        return ValidationResult(len(errors) == 0, errors)

    @staticmethod
    def validate_sentence(token_list: TokenList, strict: bool = True) -> ValidationResult:
        errors = []

        # text необходим для восстановления символьных оффсетов
        if strict and 'text' not in token_list.metadata:
            errors.append("ERROR: Отсутствует метаполе 'text'")

        # Мульти-словные токены (1-2) и пустые узлы (1.1) в дерево не входят
        words = [t for t in token_list if isinstance(t['id'], int)]
        id_to_index = {t['id']: i for i, t in enumerate(words)}

        heads = []
        missing_heads = False
        for i, token in enumerate(words):
            if not token['form']:
                errors.append(f"Token {token['id']}: Пустое поле FORM")

            head = token['head']
            if head == 0:
                heads.append(i)
            elif head in id_to_index:
                heads.append(id_to_index[head])
            else:
                errors.append(f"Token {token['id']}: HEAD {head} ссылается на несуществующий ID")
                missing_heads = True

        # Без полного списка HEAD проверка корней и циклов дала бы ложные ошибки
        if not missing_heads:
            errors.extend(TreeValidator.validate_heads(heads).errors)
        return ValidationResult(len(errors) == 0, errors)

    @staticmethod
    def validate_batch(sentences: List[TokenList], strict: bool = True) -> Dict[str, Any]:
        """Агрегированная статистика валидации набора предложений."""
        stats = {
            "total": len(sentences),
            "valid": 0,
            "invalid": 0,
            "errors": []
        }

        for sent in sentences:
            res = TreeValidator.validate_sentence(sent, strict)
            if res.is_valid:
                stats["valid"] += 1
            else:
                stats["invalid"] += 1
                stats["errors"].append({"id": sent.metadata.get('sent_id', 'UNKNOWN'), "issues": res.errors})

        return stats
