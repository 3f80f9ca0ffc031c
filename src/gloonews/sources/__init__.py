from gloonews.sources.resolver import SourceMetadataResolver, load_source_table

__all__ = [
    "SourceMetadataResolver",
    "load_source_table",
]
