"""Workflow item model exchanged with the host."""

import base64
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field  # type: ignore


class BinaryData(BaseModel):
    """A binary attachment carried on a workflow item, stored as base64."""

    data: str
    mime_type: str = "application/octet-stream"
    file_name: Optional[str] = None
    file_extension: Optional[str] = None
    file_size: Optional[int] = None

    @classmethod
    def from_bytes(cls, content: bytes, file_name: str, mime_type: str) -> "BinaryData":
        extension = file_name.rsplit(".", 1)[1].lower() if "." in file_name else None
        return cls(
            data=base64.b64encode(content).decode("ascii"),
            mime_type=mime_type,
            file_name=file_name,
            file_extension=extension,
            file_size=len(content),
        )

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


class NodeItem(BaseModel):
    """One item flowing through a workflow: JSON data plus named binary attachments.

    ``paired_item`` points back at the index of the input item that produced it.
    """

    json_data: Dict[str, Any] = Field(default_factory=dict, alias="json")
    binary: Dict[str, BinaryData] = Field(default_factory=dict)
    paired_item: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)
