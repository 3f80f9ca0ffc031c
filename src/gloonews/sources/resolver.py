"""Static per-domain display metadata (favicons, bias ratings)."""

import json
import logging
from pathlib import Path
from typing import Any

from gloonews.data import BiasRating, SourceRecord

logger = logging.getLogger(__name__)


class SourceMetadataResolver:
    """Look up display metadata for a source domain.

    The table is loaded once and never mutated. Unknown domains resolve to
    ``None``; callers show no favicon and "No rating available".

    Args:
        records: Source records keyed by their domain.
    """

    def __init__(self, records: list[SourceRecord]) -> None:
        self._records: dict[str, SourceRecord] = {r.domain: r for r in records}

    @classmethod
    def empty(cls) -> "SourceMetadataResolver":
        return cls([])

    def __len__(self) -> int:
        return len(self._records)

    def resolve(self, domain: str) -> SourceRecord | None:
        return self._records.get(domain)

    def bias_rating_of(self, record: SourceRecord | None) -> BiasRating | None:
        """Return the first rating present, checking MBFC, AllSides, then Ad Fontes."""
        if record is None:
            return None
        for label in (
            record.mbfc_bias_rating,
            record.allsides_bias_rating,
            record.adfontes_bias_rating,
        ):
            if not label:
                continue
            rating = BiasRating.parse(label)
            if rating is None:
                logger.warning(f"Ignoring unknown bias label {label!r} for {record.domain}")
                continue
            return rating
        return None


def _parse_record(raw: dict[str, Any]) -> SourceRecord | None:
    domain = raw.get("domain")
    if not domain:
        return None
    favicon = raw.get("logoFavIcon") or {}
    return SourceRecord(
        domain=str(domain),
        favicon_url=favicon.get("url") if isinstance(favicon, dict) else None,
        mbfc_bias_rating=raw.get("mbfcBiasRating"),
        allsides_bias_rating=raw.get("allSidesBiasRating"),
        adfontes_bias_rating=raw.get("adFontesBiasRating"),
    )


def load_source_table(path: Path | str) -> SourceMetadataResolver:
    """Load a source metadata table from JSON.

    Accepts either ``{"results": [...]}`` (the Perigon sources export) or a
    bare list of records. Records without a domain are skipped.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the top-level JSON shape is not recognized.
    """
    path = Path(path)
    with path.open() as f:
        raw = json.load(f)

    items = raw.get("results") if isinstance(raw, dict) else raw
    if not isinstance(items, list):
        raise ValueError(f"Unrecognized source table format in {path}")

    records: list[SourceRecord] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        record = _parse_record(item)
        if record is not None:
            records.append(record)

    logger.info(f"Loaded {len(records)} source records from {path}")
    return SourceMetadataResolver(records)
