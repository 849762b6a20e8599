# deptree/config.py
import logging
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_LANG = "ru"


class UnknownLanguageError(KeyError):
    """Для языка нет таблицы меток."""


class LabelScheme(BaseModel):
    """
    Набор меток, управляющий выделением именных групп для одного языка.
    Конфигурация, а не иерархия классов: новый язык = новая запись в таблице.
    """
    model_config = ConfigDict(frozen=True)

    lang: str
    # Метки, которые могут быть вершиной именной группы
    anchor_labels: FrozenSet[str]
    # POS вершины; пустое множество — любая
    anchor_pos: FrozenSet[str] = frozenset()
    # Однородный член наследует право быть вершиной от первого члена ряда
    conj_label: Optional[str] = None
    # Правые зависимые с такими метками (и их поддеревья) отрезаются от группы
    boundary_labels: FrozenSet[str] = frozenset()
    # Токены с такими метками/POS срезаются с обоих краев
    trim_labels: FrozenSet[str] = frozenset()
    trim_pos: FrozenSet[str] = frozenset()
    description: str = ""


# Таблица возможностей по языкам.
# Метки для en — схема ClearNLP (как в английских моделях spaCy),
# для ru/ud — Universal Dependencies (SynTagRus, Taiga).
LABEL_SCHEMES_CONFIG: Dict[str, Dict] = {
    "en": {
        "anchor_labels": [
            "nsubj", "nsubjpass", "dobj", "pobj", "pcomp", "dative",
            "appos", "attr", "oprd", "ROOT",
        ],
        "anchor_pos": ["NOUN", "PROPN", "PRON"],
        "conj_label": "conj",
        "boundary_labels": ["prep", "relcl", "acl", "conj", "cc", "punct", "appos", "advcl"],
        "trim_labels": ["cc", "punct", "preconj"],
        "trim_pos": ["PUNCT", "CCONJ"],
        "description": "Английский, метки ClearNLP.",
    },
    "ud": {
        "anchor_labels": [
            "nsubj", "nsubj:pass", "obj", "iobj", "obl", "obl:agent",
            "nmod", "appos", "root",
        ],
        "anchor_pos": ["NOUN", "PROPN", "PRON"],
        "conj_label": "conj",
        "boundary_labels": ["acl", "acl:relcl", "conj", "cc", "punct", "appos", "parataxis"],
        "trim_labels": ["cc", "punct", "case", "mark"],
        "trim_pos": ["PUNCT", "CCONJ", "ADP"],
        "description": "Универсальная схема Universal Dependencies.",
    },
}
# Русский использует UD-метки без изменений
LABEL_SCHEMES_CONFIG["ru"] = {**LABEL_SCHEMES_CONFIG["ud"], "description": "Русский (SynTagRus/Taiga), метки UD."}


def build_label_schemes(table: Dict[str, Dict]) -> Dict[str, LabelScheme]:
    return {lang: LabelScheme(lang=lang, **cfg) for lang, cfg in table.items()}


LABEL_SCHEMES: Dict[str, LabelScheme] = build_label_schemes(LABEL_SCHEMES_CONFIG)


def get_label_scheme(lang: str, schemes: Optional[Dict[str, LabelScheme]] = None) -> LabelScheme:
    schemes = LABEL_SCHEMES if schemes is None else schemes
    try:
        return schemes[lang]
    except KeyError:
        raise UnknownLanguageError(f"No label scheme for language '{lang}'. Available: {sorted(schemes)}")


def load_label_schemes(path: Union[str, Path]) -> Dict[str, LabelScheme]:
    """
    Читает YAML вида {lang: {anchor_labels: [...], ...}} и накладывает поверх встроенной таблицы.
    Поля, не указанные в файле, берутся из встроенной схемы языка (если она есть).
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    table = {lang: dict(cfg) for lang, cfg in LABEL_SCHEMES_CONFIG.items()}
    for key, cfg in data.items():
        lang = str(key)
        base = table.get(lang, {})
        table[lang] = {**base, **(cfg or {})}
        logger.info(f"Label scheme '{lang}' loaded from {path}")

    return build_label_schemes(table)
