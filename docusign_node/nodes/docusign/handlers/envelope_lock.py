"""Envelope lock operations.

A lock reserves an envelope for editing by one application. The token
returned by ``create`` must accompany every later update or delete.
"""

from typing import Any, Dict

from docusign_node.config.constants.docusign import DEFAULT_LOCK_DURATION_SECONDS, DEFAULT_LOCKED_BY_APP
from docusign_node.nodes.docusign.context import ItemContext
from docusign_node.sources.external.docusign.builders import build_lock_request
from docusign_node.sources.external.docusign.validation import validate_field


def _envelope_id(ctx: ItemContext) -> str:
    return validate_field("Envelope ID", ctx.get_parameter("envelopeId"), "uuid")


def _lock_token(ctx: ItemContext) -> str:
    return validate_field("Lock Token", ctx.get_parameter("lockToken"))


async def create(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    lock_request = build_lock_request(
        ctx.get_parameter("lockDurationInSeconds", DEFAULT_LOCK_DURATION_SECONDS),
        ctx.get_parameter("lockedByApp", "") or DEFAULT_LOCKED_BY_APP,
    )
    return await ctx.data_source.create_lock(envelope_id, lock_request)


async def get(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.get_lock(_envelope_id(ctx))


async def update(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    lock_token = _lock_token(ctx)
    lock_request = build_lock_request(ctx.get_parameter("lockDurationInSeconds", DEFAULT_LOCK_DURATION_SECONDS))
    return await ctx.data_source.update_lock(envelope_id, lock_token, lock_request)


async def delete(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    return await ctx.data_source.delete_lock(envelope_id, _lock_token(ctx))


HANDLERS = {
    "create": create,
    "get": get,
    "update": update,
    "delete": delete,
}
