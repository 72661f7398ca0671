"""DocuSign workflow node.

Dispatches each input item to the handler registered for the node's
``(resource, operation)`` pair and converts handler results into output items.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from docusign_node.exceptions.docusign_exceptions import DocuSignNodeError, UnknownOperationError
from docusign_node.nodes.docusign.context import ItemContext, ParameterSource, StaticParameters
from docusign_node.nodes.docusign.handlers import (
    brand,
    bulk_send,
    document_generation,
    envelope,
    envelope_lock,
    folder,
    power_form,
    signing_group,
    template,
)
from docusign_node.nodes.docusign.handlers.common import Handler, HandlerResult
from docusign_node.nodes.docusign.items import NodeItem
from docusign_node.sources.external.docusign.docusign import DocuSignDataSource
from docusign_node.utils.logger import create_logger

logger = create_logger("docusign_node")

RESOURCE_HANDLERS: Dict[str, Dict[str, Handler]] = {
    "envelope": envelope.HANDLERS,
    "template": template.HANDLERS,
    "bulkSend": bulk_send.HANDLERS,
    "powerForm": power_form.HANDLERS,
    "folder": folder.HANDLERS,
    "brand": brand.HANDLERS,
    "signingGroup": signing_group.HANDLERS,
    "envelopeLock": envelope_lock.HANDLERS,
    "documentGeneration": document_generation.HANDLERS,
}

OPERATION_HANDLERS: Dict[Tuple[str, str], Handler] = {
    (resource, operation): handler
    for resource, handlers in RESOURCE_HANDLERS.items()
    for operation, handler in handlers.items()
}


def get_handler(resource: str, operation: str) -> Handler:
    try:
        return OPERATION_HANDLERS[(resource, operation)]
    except KeyError:
        raise UnknownOperationError(resource, operation) from None


def _to_items(result: HandlerResult, item_index: int) -> List[NodeItem]:
    if isinstance(result, NodeItem):
        result.paired_item = item_index
        return [result]
    if isinstance(result, list):
        return [NodeItem(json=entry, paired_item=item_index) for entry in result]
    return [NodeItem(json=result or {}, paired_item=item_index)]


class DocuSignNode:
    """Runs one DocuSign operation over a batch of workflow items.

    Resource and operation are read once, from the first item's parameters;
    every other parameter is resolved per item. A failing item stops the run
    unless ``continue_on_fail`` is set, in which case the error becomes that
    item's output and the remaining items are still processed.
    """

    def __init__(
        self,
        data_source: DocuSignDataSource,
        parameters: Union[ParameterSource, Mapping[str, Any], Sequence[Mapping[str, Any]]],
        continue_on_fail: bool = False,
    ) -> None:
        self.data_source = data_source
        if isinstance(parameters, (Mapping, list, tuple)):
            parameters = StaticParameters(parameters)
        self.parameters: ParameterSource = parameters
        self.continue_on_fail = continue_on_fail

    async def execute(self, items: Optional[Sequence[NodeItem]] = None) -> List[NodeItem]:
        items = list(items) if items else [NodeItem()]
        resource = self.parameters.get_parameter("resource", 0)
        operation = self.parameters.get_parameter("operation", 0)
        handler = get_handler(resource, operation)

        logger.debug(f"Executing {resource}.{operation} for {len(items)} item(s)")

        results: List[NodeItem] = []
        for item_index in range(len(items)):
            ctx = ItemContext(
                items=items,
                item_index=item_index,
                parameters=self.parameters,
                data_source=self.data_source,
            )
            try:
                try:
                    result = await handler(ctx)
                except DocuSignNodeError:
                    raise
                except Exception as e:
                    raise DocuSignNodeError(
                        f"Failed to {operation} {resource}: {e}",
                        {"resource": resource, "operation": operation},
                    ) from e
            except DocuSignNodeError as e:
                if not self.continue_on_fail:
                    raise
                logger.warning(f"{resource}.{operation} failed for item {item_index}: {e.message}")
                results.append(
                    NodeItem(
                        json={"error": e.message, "resource": resource, "operation": operation},
                        paired_item=item_index,
                    )
                )
                continue

            results.extend(_to_items(result, item_index))

        return results
