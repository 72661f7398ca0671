from docusign_node.nodes.docusign.context import ItemContext, StaticParameters
from docusign_node.nodes.docusign.items import BinaryData, NodeItem
from docusign_node.nodes.docusign.node import OPERATION_HANDLERS, DocuSignNode

__all__ = [
    "BinaryData",
    "DocuSignNode",
    "ItemContext",
    "NodeItem",
    "OPERATION_HANDLERS",
    "StaticParameters",
]
