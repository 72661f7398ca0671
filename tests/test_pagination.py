"""Tests for collection pagination."""

from unittest.mock import AsyncMock

import pytest  # type: ignore

from docusign_node.exceptions.docusign_exceptions import DocuSignApiError
from docusign_node.sources.external.docusign.pagination import request_all_items


def _page(count: int, offset: int = 0, **extra):
    return {"envelopes": [{"envelopeId": str(offset + i)} for i in range(count)], **extra}


class TestRequestAllItems:
    @pytest.mark.asyncio
    async def test_walks_pages_until_short_page(self):
        client = AsyncMock()
        client.request.side_effect = [_page(100), _page(100, 100), _page(37, 200)]

        items = await request_all_items(client, "GET", "/envelopes", "envelopes", {"status": "sent"}, page_size=100)

        assert len(items) == 237
        assert client.request.await_count == 3
        offsets = [call.kwargs["query"]["start_position"] for call in client.request.await_args_list]
        assert offsets == [0, 100, 200]
        for call in client.request.await_args_list:
            assert call.kwargs["query"]["count"] == 100
            assert call.kwargs["query"]["status"] == "sent"

    @pytest.mark.asyncio
    async def test_stops_on_total_set_size(self):
        client = AsyncMock()
        client.request.side_effect = [_page(10, endPosition="9", totalSetSize="10")]

        items = await request_all_items(client, "GET", "/envelopes", "envelopes", page_size=10)

        assert len(items) == 10
        assert client.request.await_count == 1

    @pytest.mark.asyncio
    async def test_stops_on_empty_next_uri(self):
        client = AsyncMock()
        client.request.side_effect = [_page(5, nextUri="/next"), _page(5, 5, nextUri="")]

        items = await request_all_items(client, "GET", "/envelopes", "envelopes", page_size=5)

        assert len(items) == 10
        assert client.request.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_collection_is_empty(self):
        client = AsyncMock()
        client.request.return_value = {"resultSetSize": "0"}

        assert await request_all_items(client, "GET", "/envelopes", "envelopes") == []

    @pytest.mark.asyncio
    async def test_page_failure_propagates(self):
        client = AsyncMock()
        client.request.side_effect = [_page(100), DocuSignApiError(500, {"errorCode": "UNKNOWN"})]

        with pytest.raises(DocuSignApiError) as exc_info:
            await request_all_items(client, "GET", "/envelopes", "envelopes", page_size=100)
        assert exc_info.value.status_code == 500
