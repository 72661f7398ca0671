from docusign_node.sources.client.docusign.docusign import (
    DocuSignClient,
    DocuSignJWTConfig,
    DocuSignRESTClientViaJWT,
    DocuSignRESTClientViaToken,
    DocuSignTokenConfig,
    get_base_url,
)

__all__ = [
    "DocuSignClient",
    "DocuSignJWTConfig",
    "DocuSignRESTClientViaJWT",
    "DocuSignRESTClientViaToken",
    "DocuSignTokenConfig",
    "get_base_url",
]
