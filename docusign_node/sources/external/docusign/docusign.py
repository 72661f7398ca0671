"""DocuSign data source.

One coroutine per eSignature REST endpoint used by the DocuSign node. Paths are
relative to the account URL of the wrapped :class:`DocuSignClient`; request
bodies come from the builders in
:mod:`docusign_node.sources.external.docusign.builders`.
"""

import json
from typing import Any, Dict, List, Optional

from docusign_node.config.constants.docusign import EDIT_LOCK_HEADER
from docusign_node.config.settings import get_settings
from docusign_node.sources.client.docusign.docusign import DocuSignClient
from docusign_node.sources.external.docusign.pagination import request_all_items


class DocuSignDataSource:
    """DocuSign eSignature API wrapper.

    - Uses the account-scoped :class:`DocuSignClient`
    - JSON endpoints return decoded dicts, ``fetch_all_*`` helpers return flat lists
    - Vendor errors surface as ``DocuSignApiError``
    """

    def __init__(self, client: DocuSignClient, page_size: Optional[int] = None) -> None:
        self.client = client
        self.page_size = page_size or get_settings().page_size

    async def fetch_all(self, path: str, property_name: str, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Fetch every item of a paginated collection."""
        return await request_all_items(self.client, "GET", path, property_name, query, self.page_size)

    # ========================================================================
    # ENVELOPE OPERATIONS
    # ========================================================================

    async def create_envelope(self, envelope: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", "/envelopes", envelope)

    async def get_envelope(self, envelope_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/envelopes/{envelope_id}")

    async def list_envelopes(self, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """List envelopes. DocuSign requires ``from_date`` unless envelope ids or a folder are given."""
        return await self.client.request("GET", "/envelopes", query=query)

    async def update_envelope(
        self,
        envelope_id: str,
        body: Dict[str, Any],
        query: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Update an envelope; ``status`` transitions send, void and delete drafts."""
        return await self.client.request("PUT", f"/envelopes/{envelope_id}", body, query=query)

    async def download_document(self, envelope_id: str, document_id: str) -> bytes:
        """Download a document, or ``combined``/``archive``/``certificate``, as raw bytes."""
        return await self.client.request_binary("GET", f"/envelopes/{envelope_id}/documents/{document_id}")

    async def list_documents(self, envelope_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/envelopes/{envelope_id}/documents")

    async def list_recipients(self, envelope_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/envelopes/{envelope_id}/recipients")

    async def update_recipients(self, envelope_id: str, recipients: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("PUT", f"/envelopes/{envelope_id}/recipients", recipients)

    async def list_audit_events(self, envelope_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/envelopes/{envelope_id}/audit_events")

    async def create_recipient_view(self, envelope_id: str, view_request: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", f"/envelopes/{envelope_id}/views/recipient", view_request)

    async def create_correct_view(self, envelope_id: str, view_request: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", f"/envelopes/{envelope_id}/views/correct", view_request)

    # ========================================================================
    # TEMPLATE OPERATIONS
    # ========================================================================

    async def create_template(self, template: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", "/templates", template)

    async def get_template(self, template_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/templates/{template_id}")

    async def list_templates(self, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.client.request("GET", "/templates", query=query)

    async def update_template(self, template_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("PUT", f"/templates/{template_id}", body)

    async def delete_template(self, template_id: str) -> Dict[str, Any]:
        return await self.client.request("DELETE", f"/templates/{template_id}")

    # ========================================================================
    # BULK SEND OPERATIONS
    # ========================================================================

    async def create_bulk_send_list(self, bulk_send_list: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", "/bulk_send_lists", bulk_send_list)

    async def get_bulk_send_list(self, list_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/bulk_send_lists/{list_id}")

    async def list_bulk_send_lists(self, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.client.request("GET", "/bulk_send_lists", query=query)

    async def delete_bulk_send_list(self, list_id: str) -> Dict[str, Any]:
        return await self.client.request("DELETE", f"/bulk_send_lists/{list_id}")

    async def send_bulk_send_list(self, list_id: str, envelope_or_template_id: str) -> Dict[str, Any]:
        return await self.client.request(
            "POST",
            f"/bulk_send_lists/{list_id}/send",
            {"listId": list_id, "envelopeOrTemplateId": envelope_or_template_id},
        )

    async def get_bulk_send_batch_status(self, batch_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/bulk_send_batch/{batch_id}")

    # ========================================================================
    # POWERFORM OPERATIONS
    # ========================================================================

    async def create_power_form(self, power_form: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", "/powerforms", power_form)

    async def get_power_form(self, power_form_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/powerforms/{power_form_id}")

    async def list_power_forms(self, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.client.request("GET", "/powerforms", query=query)

    async def delete_power_form(self, power_form_id: str) -> Dict[str, Any]:
        return await self.client.request("DELETE", f"/powerforms/{power_form_id}")

    # ========================================================================
    # FOLDER OPERATIONS
    # ========================================================================

    async def list_folders(self) -> Dict[str, Any]:
        return await self.client.request("GET", "/folders")

    async def list_folder_items(self, folder_id: str, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.client.request("GET", f"/folders/{folder_id}", query=query)

    async def move_envelopes(self, folder_id: str, envelope_ids: List[str]) -> Dict[str, Any]:
        return await self.client.request("PUT", f"/folders/{folder_id}", {"envelopeIds": envelope_ids})

    async def search_folder(self, search_folder_id: str, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.client.request("GET", f"/search_folders/{search_folder_id}", query=query)

    # ========================================================================
    # BRAND OPERATIONS
    # ========================================================================

    async def create_brand(self, brand: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", "/brands", {"brands": [brand]})

    async def get_brand(self, brand_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/brands/{brand_id}")

    async def list_brands(self) -> Dict[str, Any]:
        return await self.client.request("GET", "/brands")

    async def update_brand(self, brand_id: str, brand: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("PUT", f"/brands/{brand_id}", brand)

    async def delete_brand(self, brand_id: str) -> Dict[str, Any]:
        return await self.client.request("DELETE", f"/brands/{brand_id}")

    # ========================================================================
    # SIGNING GROUP OPERATIONS
    # ========================================================================

    async def create_signing_group(self, group: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", "/signing_groups", {"groups": [group]})

    async def get_signing_group(self, signing_group_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/signing_groups/{signing_group_id}")

    async def list_signing_groups(self) -> Dict[str, Any]:
        return await self.client.request("GET", "/signing_groups", query={"include_users": True})

    async def update_signing_group(self, signing_group_id: str, group: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("PUT", f"/signing_groups/{signing_group_id}", group)

    async def delete_signing_group(self, signing_group_id: str) -> Dict[str, Any]:
        return await self.client.request(
            "DELETE",
            "/signing_groups",
            {"groups": [{"signingGroupId": signing_group_id}]},
        )

    # ========================================================================
    # ENVELOPE LOCK OPERATIONS
    # ========================================================================

    async def create_lock(self, envelope_id: str, lock_request: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("POST", f"/envelopes/{envelope_id}/lock", lock_request)

    async def get_lock(self, envelope_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/envelopes/{envelope_id}/lock")

    async def update_lock(self, envelope_id: str, lock_token: str, lock_request: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request(
            "PUT",
            f"/envelopes/{envelope_id}/lock",
            lock_request,
            headers=_edit_lock_header(lock_token),
        )

    async def delete_lock(self, envelope_id: str, lock_token: str) -> Dict[str, Any]:
        return await self.client.request(
            "DELETE",
            f"/envelopes/{envelope_id}/lock",
            headers=_edit_lock_header(lock_token),
        )

    # ========================================================================
    # DOCUMENT GENERATION OPERATIONS
    # ========================================================================

    async def get_doc_gen_form_fields(self, envelope_id: str) -> Dict[str, Any]:
        return await self.client.request("GET", f"/envelopes/{envelope_id}/docGenFormFields")

    async def update_doc_gen_form_fields(self, envelope_id: str, form_fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.request("PUT", f"/envelopes/{envelope_id}/docGenFormFields", form_fields)


def _edit_lock_header(lock_token: str) -> Dict[str, str]:
    return {EDIT_LOCK_HEADER: json.dumps({"LockToken": lock_token})}
