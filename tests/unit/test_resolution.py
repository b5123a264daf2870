import threading
import time

import pytest

from xgen_docx2table.core.exceptions import ResolutionError
from xgen_docx2table.core.functions.resolution import (
    ObjectReference,
    ResolutionMap,
    ResolutionOutcome,
    ResolverPool,
    resolve_concurrently,
)


class CountingResolver:
    def __init__(self, fail=(), delay=0.0):
        self.fail = set(fail)
        self.delay = delay
        self.calls = {}
        self._lock = threading.Lock()

    def __call__(self, ref):
        with self._lock:
            self.calls[ref.identifier] = self.calls.get(ref.identifier, 0) + 1
        if self.delay:
            time.sleep(self.delay)
        if ref.identifier in self.fail:
            raise RuntimeError(f"boom {ref.identifier}")
        return f"value-{ref.identifier}"


def refs(*identifiers):
    return [ObjectReference(identifier=i, source=i.encode()) for i in identifiers]


class TestObjectReference:
    def test_read_bytes(self):
        assert ObjectReference("rId1", source=b"abc").read() == b"abc"

    def test_read_callable(self):
        assert ObjectReference("rId1", source=lambda: b"xyz").read() == b"xyz"

    def test_read_blob(self):
        class FakePart:
            blob = b"part-bytes"

        assert ObjectReference("rId1", source=FakePart()).read() == b"part-bytes"

    def test_unreadable_source(self):
        with pytest.raises(ResolutionError):
            ObjectReference("rId1").read()

    def test_equality_ignores_source(self):
        assert ObjectReference("rId1", source=b"a") == ObjectReference("rId1", source=b"b")


class TestResolutionMap:
    def test_resolver_called_once_per_key(self):
        resolution_map = ResolutionMap()
        calls = []

        def resolver():
            calls.append(1)
            return "v"

        assert resolution_map.get_or_resolve("k", resolver) == "v"
        assert resolution_map.get_or_resolve("k", resolver) == "v"
        assert len(calls) == 1
        assert "k" in resolution_map
        assert len(resolution_map) == 1

    def test_concurrent_same_key(self):
        resolution_map = ResolutionMap()
        calls = []
        lock = threading.Lock()

        def resolver():
            with lock:
                calls.append(1)
            time.sleep(0.05)
            return "v"

        results = []
        threads = [
            threading.Thread(target=lambda: results.append(resolution_map.get_or_resolve("k", resolver)))
            for _ in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == ["v"] * 8
        assert len(calls) == 1

    def test_exception_leaves_key_unset(self):
        resolution_map = ResolutionMap()

        def failing():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            resolution_map.get_or_resolve("k", failing)
        assert "k" not in resolution_map

    def test_freeze_is_read_only(self):
        resolution_map = ResolutionMap()
        resolution_map.get_or_resolve("a", lambda: "1")
        view = resolution_map.freeze()

        assert view["a"] == "1"
        with pytest.raises(TypeError):
            view["b"] = "2"
        with pytest.raises(RuntimeError):
            resolution_map.get_or_resolve("b", lambda: "2")
        # existing keys stay readable
        assert resolution_map.get_or_resolve("a", lambda: "x") == "1"


class TestResolverPool:
    def test_resolves_every_identifier(self):
        resolver = CountingResolver()
        outcome = ResolverPool(max_workers=4).resolve_all(refs("rId1", "rId2", "rId3"), resolver)

        assert dict(outcome.values) == {
            "rId1": "value-rId1",
            "rId2": "value-rId2",
            "rId3": "value-rId3",
        }
        assert outcome.ok
        assert outcome.calls == 3

    def test_duplicates_resolved_once(self):
        resolver = CountingResolver(delay=0.02)
        outcome = ResolverPool(max_workers=8).resolve_all(
            refs("rId1", "rId1", "rId1", "rId2", "rId2"), resolver
        )

        assert resolver.calls == {"rId1": 1, "rId2": 1}
        assert outcome.calls == 2
        assert len(outcome.values) == 2

    def test_runs_in_parallel(self):
        barrier = threading.Barrier(3, timeout=5)

        def resolve(ref):
            barrier.wait()
            return ref.identifier

        outcome = ResolverPool(max_workers=3).resolve_all(refs("a", "b", "c"), resolve)
        assert outcome.ok
        assert dict(outcome.values) == {"a": "a", "b": "b", "c": "c"}

    def test_failure_degrades_to_placeholder(self):
        resolver = CountingResolver(fail={"rId2"})
        outcome = ResolverPool(placeholder="?").resolve_all(refs("rId1", "rId2", "rId3"), resolver)

        assert outcome.values["rId2"] == "?"
        assert outcome.values["rId1"] == "value-rId1"
        assert outcome.values["rId3"] == "value-rId3"
        assert set(outcome.failures) == {"rId2"}
        assert "boom" in outcome.failures["rId2"]
        assert not outcome.ok

    def test_failed_duplicate_not_retried(self):
        resolver = CountingResolver(fail={"rId1"}, delay=0.02)
        outcome = ResolverPool(max_workers=4).resolve_all(refs("rId1", "rId1", "rId1"), resolver)

        assert resolver.calls == {"rId1": 1}
        assert outcome.values["rId1"] == ""

    def test_strict_raises_after_all_tasks(self):
        resolver = CountingResolver(fail={"rId1"})
        pool = ResolverPool(strict=True)

        with pytest.raises(ResolutionError) as exc_info:
            pool.resolve_all(refs("rId1", "rId2", "rId3"), resolver)

        assert set(exc_info.value.failures) == {"rId1"}
        assert resolver.calls == {"rId1": 1, "rId2": 1, "rId3": 1}

    def test_empty_references(self):
        outcome = ResolverPool().resolve_all([], CountingResolver())
        assert len(outcome.values) == 0
        assert outcome.calls == 0
        assert outcome.ok

    def test_values_are_read_only(self):
        outcome = ResolverPool().resolve_all(refs("rId1"), CountingResolver())
        with pytest.raises(TypeError):
            outcome.values["rId1"] = "changed"


class TestResolveConcurrently:
    def test_runs_all_jobs(self):
        outcomes = resolve_concurrently({
            "equations": lambda: ResolverPool().resolve_all(refs("rId1"), CountingResolver()),
            "images": lambda: ResolverPool().resolve_all(refs("rId2"), CountingResolver()),
        })

        assert set(outcomes) == {"equations", "images"}
        assert outcomes["equations"].values["rId1"] == "value-rId1"
        assert outcomes["images"].values["rId2"] == "value-rId2"

    def test_phases_overlap(self):
        barrier = threading.Barrier(2, timeout=5)

        def phase():
            barrier.wait()
            return ResolutionOutcome()

        outcomes = resolve_concurrently({"a": phase, "b": phase})
        assert set(outcomes) == {"a", "b"}

    def test_error_raised_after_other_jobs_finish(self):
        finished = []

        def slow():
            time.sleep(0.05)
            finished.append("slow")
            return ResolutionOutcome()

        def broken():
            raise ResolutionError("phase failed")

        with pytest.raises(ResolutionError):
            resolve_concurrently({"slow": slow, "broken": broken})
        assert finished == ["slow"]

    def test_no_jobs(self):
        assert resolve_concurrently({}) == {}
