from .readers import (
    ConlluDocumentReader,
    document_from_conllu,
    document_from_parse,
    document_from_parser,
    document_from_records,
)
from .validators import TreeValidator, ValidationResult
