import argparse
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from deptree.config import DEFAULT_LANG, LABEL_SCHEMES, get_label_scheme, load_label_schemes
from deptree.document import ParseContext
from deptree.ingestion.readers import ConlluDocumentReader
from deptree.profiler import TreeProfiler

# Настройка логирования
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def run_chunking(input_files, output_file: Path, lang: str, schemes_path=None):
    schemes = load_label_schemes(schemes_path) if schemes_path else LABEL_SCHEMES
    scheme = get_label_scheme(lang, schemes)

    reader = ConlluDocumentReader(strict=False)
    profiler = TreeProfiler()
    results = {}
    non_projective = 0

    logger.info(f"Extracting noun chunks (lang={lang}) from {len(input_files)} file(s)...")

    for sent_id, doc in tqdm(reader.read(input_files), desc="sentences"):
        ctx = ParseContext(doc, scheme=scheme)
        nav = ctx.navigator
        profile = profiler.profile(ctx)
        if not profile["is_projective"]:
            non_projective += 1

        results[sent_id] = {
            "chunks": [
                {"start": c.start, "end": c.end, "root": c.root, "text": nav.span_text(c)}
                for c in ctx.noun_chunks()
            ],
            "profile": profile,
        }

    logger.info(f"Saving chunks for {len(results)} sentences to {output_file}...")
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(results, f, ensure_ascii=False, indent=2)

    console = Console()
    table = Table(title="Noun chunk extraction")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Sentences", str(len(results)))
    table.add_row("Skipped (invalid)", str(reader.skipped))
    table.add_row("Non-projective", str(non_projective))
    table.add_row("Noun chunks", str(sum(len(r["chunks"]) for r in results.values())))
    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="Extract noun chunks from CoNLL-U files")
    parser.add_argument("inputs", nargs="+", type=Path, help=".conllu files")
    parser.add_argument("--output", type=Path, default=Path("noun_chunks.json"))
    parser.add_argument("--lang", default=DEFAULT_LANG)
    parser.add_argument("--schemes", type=Path, default=None, help="YAML with label scheme overrides")
    args = parser.parse_args()

    run_chunking(args.inputs, args.output, args.lang, args.schemes)


if __name__ == "__main__":
    main()
