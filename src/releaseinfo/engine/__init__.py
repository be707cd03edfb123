from releaseinfo.engine.extractor import Boundary, Extraction, FieldMatch, extract, parse
from releaseinfo.engine.title import normalize_title

__all__ = ["Boundary", "Extraction", "FieldMatch", "extract", "normalize_title", "parse"]
