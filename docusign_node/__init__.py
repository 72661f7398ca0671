"""DocuSign eSignature node for workflow automation."""

from docusign_node.nodes.docusign.items import BinaryData, NodeItem
from docusign_node.nodes.docusign.node import DocuSignNode

__version__ = "0.1.0"

__all__ = ["BinaryData", "DocuSignNode", "NodeItem"]
