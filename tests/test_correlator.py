"""Tests for ResponseCorrelator - last-write-wins store keyed by request id."""

import threading
import uuid
import pytest

from gemini_client.correlator import ResponseCorrelator
from gemini_client.schema import GenerateContentResponse

from tests.conftest import make_response


def response(text: str, candidate_tokens: int = 1) -> GenerateContentResponse:
    return GenerateContentResponse.model_validate(make_response(text, candidate_tokens=candidate_tokens))


class TestResponseCorrelator:
    def test_get_unknown_id_returns_none(self, correlator):
        assert correlator.get(uuid.uuid4()) is None

    def test_put_then_get(self, correlator):
        request_id = uuid.uuid4()
        snapshot = response("a")
        correlator.put(request_id, snapshot)
        assert correlator.get(request_id) is snapshot

    def test_last_write_wins(self, correlator):
        request_id = uuid.uuid4()
        first, second = response("e1"), response("e2")

        correlator.put(request_id, first)
        correlator.put(request_id, second)

        assert correlator.get(request_id) is second
        assert len(correlator) == 1

    def test_ids_are_independent(self, correlator):
        a, b = uuid.uuid4(), uuid.uuid4()
        correlator.put(a, response("for a"))
        correlator.put(b, response("for b"))

        assert correlator.get(a).candidates[0].content.parts[0].text == "for a"
        assert correlator.get(b).candidates[0].content.parts[0].text == "for b"

    def test_clear_drops_everything(self, correlator):
        ids = [uuid.uuid4() for _ in range(3)]
        for request_id in ids:
            correlator.put(request_id, response("x"))

        correlator.clear()

        assert len(correlator) == 0
        assert all(correlator.get(request_id) is None for request_id in ids)

    def test_put_after_clear_repopulates(self, correlator):
        request_id = uuid.uuid4()
        correlator.put(request_id, response("before"))
        correlator.clear()
        correlator.put(request_id, response("after"))

        assert request_id in correlator
        assert correlator.get(request_id).candidates[0].content.parts[0].text == "after"

    def test_instances_are_isolated(self):
        request_id = uuid.uuid4()
        one, other = ResponseCorrelator(), ResponseCorrelator()
        one.put(request_id, response("x"))
        assert other.get(request_id) is None


class TestConcurrentAccess:
    def test_concurrent_puts_from_threads(self, correlator):
        ids = [uuid.uuid4() for _ in range(8)]
        barrier = threading.Barrier(len(ids))

        def writer(request_id):
            barrier.wait()
            for i in range(200):
                correlator.put(request_id, response(str(i), candidate_tokens=i))

        threads = [threading.Thread(target=writer, args=(request_id,)) for request_id in ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(correlator) == len(ids)
        for request_id in ids:
            assert correlator.get(request_id).usage_metadata.candidates_token_count == 199
