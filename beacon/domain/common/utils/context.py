from uuid import uuid4

from fastapi import Request


class ContextExtractor:
    """Utility for extracting request correlation identifiers."""

    REQUEST_ID_HEADER = 'x-request-id'

    @staticmethod
    def get_request_id(request: Request) -> str:
        """Return the request id, minting one when the caller sent none.

        The id is cached on ``request.state`` so every reader agrees on it.
        """
        cached = getattr(request.state, 'request_id', None)
        if cached:
            return str(cached)

        request_id = request.headers.get(ContextExtractor.REQUEST_ID_HEADER) or (
            uuid4().hex
        )
        request.state.request_id = request_id
        return request_id
