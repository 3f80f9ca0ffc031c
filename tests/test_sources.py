"""Tests for SourceMetadataResolver and table loading."""

import json
import logging
from pathlib import Path

import pytest

from gloonews.data import BiasRating, SourceRecord
from gloonews.sources import SourceMetadataResolver, load_source_table


@pytest.fixture
def resolver() -> SourceMetadataResolver:
    return SourceMetadataResolver(
        [
            SourceRecord(
                domain="christianpost.com",
                favicon_url="https://cdn.example.com/cp.ico",
                mbfc_bias_rating="Right",
                allsides_bias_rating="Lean Right",
            ),
            SourceRecord(domain="wng.org", adfontes_bias_rating="Lean Right"),
            SourceRecord(domain="cbn.com"),
        ]
    )


def test_resolve_known_domain(resolver: SourceMetadataResolver) -> None:
    record = resolver.resolve("christianpost.com")
    assert record is not None
    assert record.favicon_url == "https://cdn.example.com/cp.ico"


def test_resolve_unknown_domain(resolver: SourceMetadataResolver) -> None:
    assert resolver.resolve("example.com") is None


def test_bias_rating_prefers_primary_provider(resolver: SourceMetadataResolver) -> None:
    record = resolver.resolve("christianpost.com")
    assert resolver.bias_rating_of(record) == BiasRating.RIGHT


def test_bias_rating_falls_back_to_later_provider(resolver: SourceMetadataResolver) -> None:
    record = resolver.resolve("wng.org")
    assert resolver.bias_rating_of(record) == BiasRating.LEAN_RIGHT


def test_bias_rating_absent(resolver: SourceMetadataResolver) -> None:
    assert resolver.bias_rating_of(resolver.resolve("cbn.com")) is None
    assert resolver.bias_rating_of(None) is None


def test_bias_rating_skips_unknown_label(caplog: pytest.LogCaptureFixture) -> None:
    resolver = SourceMetadataResolver(
        [SourceRecord(domain="x.com", mbfc_bias_rating="Mixed", allsides_bias_rating="Center")]
    )
    with caplog.at_level(logging.WARNING):
        rating = resolver.bias_rating_of(resolver.resolve("x.com"))
    assert rating == BiasRating.CENTER
    assert "Mixed" in caplog.text


def test_empty_resolver() -> None:
    resolver = SourceMetadataResolver.empty()
    assert len(resolver) == 0
    assert resolver.resolve("cbn.com") is None


def test_load_source_table_results_shape(tmp_path: Path) -> None:
    path = tmp_path / "sources.json"
    path.write_text(
        json.dumps(
            {
                "results": [
                    {
                        "domain": "cbn.com",
                        "logoFavIcon": {"url": "https://cdn.example.com/cbn.ico"},
                        "mbfcBiasRating": None,
                        "allSidesBiasRating": "Lean Right",
                        "adFontesBiasRating": "Right",
                    },
                    {"name": "no domain"},
                    "not a record",
                ]
            }
        )
    )

    resolver = load_source_table(path)

    assert len(resolver) == 1
    record = resolver.resolve("cbn.com")
    assert record is not None
    assert record.favicon_url == "https://cdn.example.com/cbn.ico"
    assert resolver.bias_rating_of(record) == BiasRating.LEAN_RIGHT


def test_load_source_table_bare_list(tmp_path: Path) -> None:
    path = tmp_path / "sources.json"
    path.write_text(json.dumps([{"domain": "wng.org", "logoFavIcon": None}]))

    resolver = load_source_table(path)

    record = resolver.resolve("wng.org")
    assert record is not None
    assert record.favicon_url is None


def test_load_source_table_rejects_unknown_shape(tmp_path: Path) -> None:
    path = tmp_path / "sources.json"
    path.write_text(json.dumps({"sources": {}}))
    with pytest.raises(ValueError, match="Unrecognized"):
        load_source_table(path)


def test_load_source_table_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_source_table(tmp_path / "missing.json")
