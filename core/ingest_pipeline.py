"""
Tabular ingest pipeline for Map Studio Ingest.

Runs the tabular stages in order on one piece of pasted text:

    raw text -> parse -> infer column types -> merge with confirmed types
             -> resolve geography/projection

Classes:
    IngestResult: Everything the stages produced

Functions:
    ingest_text: Run the tabular pipeline on raw text
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from core.delimited_parser import parse_delimited_text
from core.geography import DEFAULT_SAMPLE_LIMIT, resolve_geography
from core.models import GeographyGuess, ParsedDataset
from core.type_inference import infer_column_types, merge_inferred_types
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IngestResult:
    dataset: ParsedDataset
    column_types: Dict[str, str] = field(default_factory=dict)
    geography: GeographyGuess = field(default_factory=lambda: GeographyGuess('usa-states', 'albersUsa'))


def ingest_text(
    raw_text: str,
    existing_types: Optional[Mapping] = None,
    sample_limit: int = DEFAULT_SAMPLE_LIMIT
) -> IngestResult:
    """
    Parse, type and place a block of delimited text.

    Never raises for malformed text; an empty paste yields an empty dataset
    with the default US-states geography.

    Parameters:
    -----------
    raw_text : str
        Pasted CSV/TSV text
    existing_types : Optional[Mapping]
        Column types the user already confirmed; they override inference
    sample_limit : int
        Rows inspected by the geography heuristic

    Returns:
    --------
    IngestResult
        Parsed dataset, merged column types and geography guess
    """
    dataset = parse_delimited_text(raw_text)
    inferred = infer_column_types(dataset.rows)
    column_types = merge_inferred_types(existing_types or {}, inferred)
    geography = resolve_geography(dataset.columns, dataset.rows, sample_limit)

    logger.info(
        f"Ingested {len(dataset.rows)} row(s), {len(dataset.columns)} column(s); "
        f"geography: {geography.geography} ({geography.projection})"
    )

    return IngestResult(dataset=dataset, column_types=column_types, geography=geography)
