"""Per-item execution context handed to every operation handler."""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

from docusign_node.exceptions.docusign_exceptions import DocuSignNodeError
from docusign_node.nodes.docusign.items import NodeItem
from docusign_node.sources.external.docusign.docusign import DocuSignDataSource

_MISSING = object()


class ParameterSource(Protocol):
    """Resolves a node parameter for one input item."""

    def get_parameter(self, name: str, item_index: int, default: Any = _MISSING) -> Any:
        ...


class StaticParameters:
    """Parameters already resolved by the host.

    Either one mapping shared by every item, or one mapping per item (the host
    evaluated per-item expressions upfront). Per-item lookups fall back to the
    first mapping for ``resource`` and ``operation``-style node-wide values.
    """

    def __init__(self, parameters: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]) -> None:
        if isinstance(parameters, Mapping):
            self._shared: Optional[Mapping[str, Any]] = parameters
            self._per_item: List[Mapping[str, Any]] = []
        else:
            self._shared = None
            self._per_item = list(parameters)

    def _mapping_for(self, item_index: int) -> Mapping[str, Any]:
        if self._shared is not None:
            return self._shared
        if 0 <= item_index < len(self._per_item):
            return self._per_item[item_index]
        return self._per_item[0] if self._per_item else {}

    def get_parameter(self, name: str, item_index: int, default: Any = _MISSING) -> Any:
        parameters = self._mapping_for(item_index)
        if name in parameters:
            return parameters[name]
        if default is _MISSING:
            raise DocuSignNodeError(
                f'Could not get parameter "{name}"',
                {"parameter": name, "item_index": item_index},
            )
        return default


@dataclass
class ItemContext:
    """Everything a handler may read while processing one input item."""

    items: Sequence[NodeItem]
    item_index: int
    parameters: ParameterSource
    data_source: DocuSignDataSource

    def get_parameter(self, name: str, default: Any = _MISSING) -> Any:
        return self.parameters.get_parameter(name, self.item_index, default)

    def get_collection(self, name: str) -> Dict[str, Any]:
        """Return an optional collection parameter (``additionalOptions``, ``filters``...) as a dict."""
        value = self.get_parameter(name, {})
        return dict(value) if isinstance(value, Mapping) else {}


def collection_entries(container: Any, key: str) -> List[Dict[str, Any]]:
    """Entries of a repeatable fixed-collection group such as ``{"signers": [...]}``.

    A single mapping in place of the list is accepted as one entry.
    """
    if not isinstance(container, Mapping):
        return []
    entries = container.get(key)
    if entries is None:
        return []
    if isinstance(entries, Mapping):
        return [dict(entries)]
    return [dict(entry) for entry in entries if isinstance(entry, Mapping)]
