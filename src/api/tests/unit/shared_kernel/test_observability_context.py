"""Unit tests for ObservationContext."""

import dataclasses

import pytest

from shared_kernel.observability_context import ObservationContext


class TestObservationContext:
    def test_as_dict_omits_unset_fields(self):
        assert ObservationContext().as_dict() == {}

    def test_as_dict_includes_request_metadata_and_extra(self):
        context = ObservationContext(
            request_id="req-1", method="POST", path="/permissions/authorize",
            extra={"client": "bot"},
        )

        assert context.as_dict() == {
            "request_id": "req-1",
            "method": "POST",
            "path": "/permissions/authorize",
            "client": "bot",
        }

    def test_with_extra_returns_new_context(self):
        original = ObservationContext(request_id="req-1", extra={"a": 1})

        updated = original.with_extra(b=2)

        assert updated.extra == {"a": 1, "b": 2}
        assert updated.request_id == "req-1"
        assert original.extra == {"a": 1}

    def test_is_immutable(self):
        context = ObservationContext(request_id="req-1")

        with pytest.raises(dataclasses.FrozenInstanceError):
            context.request_id = "req-2"  # type: ignore[misc]
