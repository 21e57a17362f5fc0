from typing import BinaryIO, NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Response from HTTP fetch operation.

    `body` is an unread binary stream; call `close()` once done with it so
    the underlying connection is released.
    """
    status_code: int
    body: BinaryIO
    content_type: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def close(self) -> None:
        close = getattr(self.body, "close", None)
        if close is not None:
            close()
