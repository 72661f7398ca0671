"""
DocuSign client fixtures.

The REST client is wired to an ``httpx.MockTransport`` so tests can script
vendor responses and inspect every request the node sends.
"""

import base64
import json
from typing import Any, Callable, Dict, List, Optional

import httpx  # type: ignore
import pytest  # type: ignore

from docusign_node.nodes.docusign.items import BinaryData, NodeItem
from docusign_node.nodes.docusign.node import DocuSignNode
from docusign_node.sources.client.docusign.docusign import (
    DocuSignClient,
    DocuSignRESTClientViaToken,
)
from docusign_node.sources.external.docusign.docusign import DocuSignDataSource

ACCOUNT_ID = "11111111-2222-3333-4444-555555555555"
ENVELOPE_ID = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"
TEMPLATE_ID = "12345678-1234-1234-1234-123456789abc"
ACCOUNT_URL = f"https://demo.docusign.net/restapi/v2.1/accounts/{ACCOUNT_ID}"

PDF_BYTES = b"%PDF-1.4 test document"
PDF_BASE64 = base64.b64encode(PDF_BYTES).decode("ascii")

Responder = Callable[[httpx.Request], httpx.Response]


class RecordingApi:
    """Callable for ``httpx.MockTransport`` that records requests.

    Responses come from ``responder`` when set, otherwise from the queue of
    scripted responses, otherwise an empty 200 JSON object.
    """

    def __init__(self, responder: Optional[Responder] = None) -> None:
        self.responder = responder
        self.queue: List[httpx.Response] = []
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responder is not None:
            return self.responder(request)
        if self.queue:
            return self.queue.pop(0)
        return httpx.Response(200, json={})

    def reply(self, *responses: httpx.Response) -> "RecordingApi":
        self.queue.extend(responses)
        return self

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> Any:
        content = self.requests[index].content
        return json.loads(content) if content else None

    def path(self, index: int = -1) -> str:
        return self.requests[index].url.path.split(f"/accounts/{ACCOUNT_ID}", 1)[1]


@pytest.fixture
def api() -> RecordingApi:
    return RecordingApi()


@pytest.fixture
async def docusign_client(api: RecordingApi):
    rest_client = DocuSignRESTClientViaToken(access_token="test-token")
    rest_client.client = httpx.AsyncClient(transport=httpx.MockTransport(api))
    client = DocuSignClient(client=rest_client, account_id=ACCOUNT_ID, environment="demo")
    yield client
    await client.close()


@pytest.fixture
def data_source(docusign_client: DocuSignClient) -> DocuSignDataSource:
    return DocuSignDataSource(docusign_client)


@pytest.fixture
def run_node(data_source: DocuSignDataSource):
    """Execute the node once: ``await run_node(params, items=None, continue_on_fail=False)``."""

    async def _run(
        parameters: Any,
        items: Optional[List[NodeItem]] = None,
        continue_on_fail: bool = False,
    ) -> List[NodeItem]:
        node = DocuSignNode(data_source, parameters, continue_on_fail=continue_on_fail)
        return await node.execute(items)

    return _run


@pytest.fixture
def pdf_item() -> NodeItem:
    """An input item carrying a PDF under the ``data`` binary property."""
    return NodeItem(
        json={},
        binary={"data": BinaryData(data=PDF_BASE64, mime_type="application/pdf", file_name="contract.pdf")},
    )


def envelope_create_params(faker, **overrides: Any) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "resource": "envelope",
        "operation": "create",
        "emailSubject": "Please sign",
        "signerEmail": faker.email(),
        "signerName": faker.name(),
        "document": "data",
        "documentName": "contract.pdf",
        "sendImmediately": True,
        "additionalOptions": {},
    }
    params.update(overrides)
    return params
