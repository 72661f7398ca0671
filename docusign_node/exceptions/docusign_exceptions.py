from typing import Any, Dict, Optional


class DocuSignNodeError(Exception):
    """Base exception for DocuSign node errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class FieldValidationError(DocuSignNodeError):
    """Raised when a parameter fails validation before any request is sent"""

    def __init__(self, label: str, constraint: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"{label} {constraint}",
            {"field": label, "constraint": constraint},
        )
        self.label = label
        self.constraint = constraint


class DocuSignApiError(DocuSignNodeError):
    """Raised when the DocuSign API answers with a non-success status"""

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            message = f"DocuSign API request failed with status {status_code}"
            if isinstance(body, dict):
                vendor_message = body.get("message")
                error_code = body.get("errorCode")
                if error_code and vendor_message:
                    message = f"{message}: {error_code} - {vendor_message}"
                elif vendor_message or error_code:
                    message = f"{message}: {vendor_message or error_code}"
        super().__init__(message, {"status_code": status_code, "body": body})
        self.status_code = status_code
        self.body = body


class UnresolvableDocumentReferenceError(DocuSignNodeError):
    """Raised when a document reference is neither a binary property nor base64"""

    def __init__(self, reference: str, item_index: Optional[int] = None) -> None:
        shown = reference if len(reference) <= 50 else f"{reference[:50]}..."
        super().__init__(
            f'Unresolvable document reference "{shown}": it is neither the name of a '
            "binary property on the input item nor valid base64 content",
            {"reference": shown, "item_index": item_index},
        )
        self.reference = reference
        self.item_index = item_index


class UnknownOperationError(DocuSignNodeError):
    """Raised when no handler is registered for a resource/operation pair"""

    def __init__(self, resource: str, operation: str) -> None:
        super().__init__(
            f"Unknown operation: {operation} for resource: {resource}",
            {"resource": resource, "operation": operation},
        )
        self.resource = resource
        self.operation = operation
