"""DocuSign data source module."""
from docusign_node.sources.external.docusign.docusign import DocuSignDataSource
from docusign_node.sources.external.docusign.pagination import request_all_items
from docusign_node.sources.external.docusign.validation import FieldKind, validate_field

__all__ = ["DocuSignDataSource", "FieldKind", "request_all_items", "validate_field"]
