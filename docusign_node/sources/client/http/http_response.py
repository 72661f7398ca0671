from typing import Any

import httpx  # type: ignore


class HTTPResponse:
    """Thin wrapper over an httpx response.
    Args:
        response: The httpx response returned by the transport
    """

    def __init__(self, response: httpx.Response) -> None:
        self.response = response

    @property
    def status(self) -> int:
        return self.response.status_code

    def json(self) -> Any:
        return self.response.json()

    def text(self) -> str:
        return self.response.text

    def bytes(self) -> bytes:
        return self.response.content
