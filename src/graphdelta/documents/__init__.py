"""Reading JSON-LD documents from disk."""

from graphdelta.documents.loader import load_document, strip_base_path

__all__ = ["load_document", "strip_base_path"]
