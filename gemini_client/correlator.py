"""
ResponseCorrelator - latest decoded response per request id.

Each stored response is the full snapshot of the most recent event seen for
that request. A new event replaces the previous snapshot; nothing is merged.
"""

import threading
from typing import Optional
from uuid import UUID

from gemini_client.schema import GenerateContentResponse


class ResponseCorrelator:
    """
    Thread-safe map from request id to the latest GenerateContentResponse.

    Shared by every call issued through one client. Entries live until
    clear(); there is no per-entry expiry.
    """

    def __init__(self):
        self._responses: dict[UUID, GenerateContentResponse] = {}
        self._lock = threading.Lock()

    def put(self, request_id: UUID, response: GenerateContentResponse) -> None:
        """Store a snapshot, replacing any previous one. Last write wins."""
        with self._lock:
            self._responses[request_id] = response

    def get(self, request_id: UUID) -> Optional[GenerateContentResponse]:
        """Return the latest snapshot, or None if none was recorded."""
        with self._lock:
            return self._responses.get(request_id)

    def clear(self) -> None:
        """Drop all entries. In-flight streams repopulate on their next event."""
        with self._lock:
            self._responses.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._responses)

    def __contains__(self, request_id: object) -> bool:
        with self._lock:
            return request_id in self._responses
