"""
Document loader.

Reads flattened JSON-LD documents produced by an external parser. JSON is
the usual format (.json, .jsonld); YAML is accepted for hand-written
fixtures.
"""

import json
from pathlib import Path
from typing import Any, Union

import yaml

from graphdelta.diff.domain.models import JsonLdDocument
from graphdelta.shared.domain.exceptions import DocumentLoadError
from graphdelta.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def load_document(path: Union[str, Path]) -> JsonLdDocument:
    """
    Load a JSON-LD document from a file.

    Args:
        path: Path to a .json/.jsonld or .yaml/.yml file

    Returns:
        Parsed document. Its shape is checked later by the differ.

    Raises:
        DocumentLoadError: If the file is missing or cannot be parsed
    """
    document_path = Path(path)
    if not document_path.is_file():
        raise DocumentLoadError(f"Document not found: {document_path}", context={"path": str(document_path)})

    try:
        with open(document_path, encoding="utf-8") as f:
            if document_path.suffix.lower() in YAML_SUFFIXES:
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise DocumentLoadError(
            f"Could not parse document {document_path}: {e}",
            context={"path": str(document_path)},
        ) from e

    logger.debug("document_loaded", path=str(document_path))
    return document


def strip_base_path(document: Any, prefix: str) -> Any:
    """
    Remove a directory prefix from every string in a document.

    Ids of types pulled in from other files carry the absolute path of the
    source directory; two checkouts of the same API in different places
    would otherwise differ on every such id.
    """
    if not prefix:
        return document
    if isinstance(document, str):
        return document.replace(prefix, "")
    if isinstance(document, list):
        return [strip_base_path(item, prefix) for item in document]
    if isinstance(document, dict):
        return {strip_base_path(k, prefix): strip_base_path(v, prefix) for k, v in document.items()}
    return document
