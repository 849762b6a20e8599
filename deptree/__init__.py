from deptree.arcs import ArcIndex
from deptree.chunker import ChunkExtractor
from deptree.config import LABEL_SCHEMES, LabelScheme, UnknownLanguageError, get_label_scheme, load_label_schemes
from deptree.core.data_structures import Arc, Span, Token
from deptree.core.errors import CorruptTreeError, DependencyTreeError, InvalidSpanError, OutOfRangeError
from deptree.document import Document, ParseContext
from deptree.merger import MergeResult, SpanMerger
from deptree.navigator import TreeNavigator
from deptree.render import to_conllu, to_displacy
from deptree.store import TokenStore

__version__ = "0.1.0"
