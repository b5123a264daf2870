# xgen_docx2table/core/functions/resolution.py
"""
Resolution Module

Turns the embedded-object references of a document into read-only lookups
keyed by relationship id. This is the only concurrent stage of the pipeline.

Components:
- ObjectReference: relationship id + handle to the object's bytes
- ResolutionMap: thread-safe store with atomic get-or-resolve per key
- ResolverPool: fans out one task per reference and joins on all of them
- ResolutionOutcome: frozen values + per-identifier failures

Error policy:
    A failing identifier never aborts the others. It is logged and stored
    with the pool's placeholder so every identifier has an entry once the
    pool returns. With strict=True the pool raises a single ResolutionError
    carrying every failure, after all tasks have finished.

Usage Example:
    from xgen_docx2table.core.functions.resolution import ResolverPool

    pool = ResolverPool(max_workers=8)
    outcome = pool.resolve_all(references, lambda ref: upload(ref.read()))
    uri = outcome.values["rId7"]
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from xgen_docx2table.core.exceptions import ResolutionError

logger = logging.getLogger("xgen_docx2table.resolution")


@dataclass(frozen=True)
class ObjectReference:
    """
    Reference to an embedded object inside the document package.

    Attributes:
        identifier: Relationship id (e.g. "rId7"), unique per relationship
        source: Byte source. Either raw bytes, a zero-argument callable
                returning bytes, or an OPC part exposing ``blob``
        format: Lower-cased format extension (e.g. "png", "bin")
    """
    identifier: str
    source: Any = field(default=None, compare=False, repr=False)
    format: str = ""

    def read(self) -> bytes:
        """Return the raw bytes of the referenced object."""
        source = self.source
        if isinstance(source, (bytes, bytearray)):
            return bytes(source)
        if callable(source):
            return source()
        if hasattr(source, 'blob'):
            return source.blob
        raise ResolutionError(f"Reference {self.identifier} has no readable source")


class ResolutionMap:
    """
    Concurrent-safe identifier -> value store.

    get_or_resolve() is atomic per key: the resolver for a given key runs at
    most once, even when several workers ask for it at the same time. A coarse
    lock guards the map itself; a per-key lock serializes resolvers of the
    same key without blocking resolvers of other keys.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._values: Dict[str, str] = {}
        self._key_locks: Dict[str, threading.Lock] = {}
        self._frozen = False

    def get_or_resolve(self, key: str, resolver: Callable[[], str]) -> str:
        """
        Return the value for key, calling resolver only if it is missing.

        Exceptions raised by resolver propagate and leave the key unset.
        """
        with self._lock:
            if key in self._values:
                return self._values[key]
            if self._frozen:
                raise RuntimeError("ResolutionMap is frozen")
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                if key in self._values:
                    return self._values[key]

            value = resolver()

            with self._lock:
                self._values[key] = value
            return value

    def freeze(self) -> Mapping[str, str]:
        """Stop accepting writes and return a read-only view."""
        with self._lock:
            self._frozen = True
            return MappingProxyType(dict(self._values))

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


@dataclass
class ResolutionOutcome:
    """
    Result of one resolution phase.

    Attributes:
        values: Read-only identifier -> resolved value mapping
        failures: identifier -> error message for degraded identifiers
        calls: Number of external resolver invocations
    """
    values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    failures: Dict[str, str] = field(default_factory=dict)
    calls: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures


class ResolverPool:
    """
    Resolves every distinct identifier of a reference list concurrently.

    One task per reference is submitted to a ThreadPoolExecutor; the call
    blocks until every task has finished. Duplicate identifiers share one
    external resolution through ResolutionMap.get_or_resolve().

    Args:
        max_workers: Thread count upper bound (default: 8)
        placeholder: Value stored for identifiers whose resolution failed
        strict: Raise ResolutionError after the barrier if anything failed
        name: Label used in log messages
    """

    def __init__(
        self,
        max_workers: int = 8,
        placeholder: str = "",
        strict: bool = False,
        name: str = "objects",
    ):
        self.max_workers = max(1, int(max_workers))
        self.placeholder = placeholder
        self.strict = strict
        self.name = name
        self._logger = logging.getLogger(f"xgen_docx2table.resolution.{name}")

    def resolve_all(
        self,
        references: Sequence[ObjectReference],
        resolve: Callable[[ObjectReference], str],
    ) -> ResolutionOutcome:
        """
        Resolve all references and return the frozen lookup.

        Args:
            references: Collected references (duplicates allowed)
            resolve: External resolution for a single reference

        Returns:
            ResolutionOutcome

        Raises:
            ResolutionError: strict mode only, once every task has finished
        """
        resolution_map = ResolutionMap()
        failures: Dict[str, str] = {}
        stats_lock = threading.Lock()
        calls = [0]

        if not references:
            return ResolutionOutcome(values=resolution_map.freeze())

        # Failures are stored as the placeholder inside get_or_resolve so a
        # failed identifier is not retried by workers holding a duplicate.
        def resolve_one(ref: ObjectReference) -> str:
            with stats_lock:
                calls[0] += 1
            self._logger.debug(f"Resolving {self.name} {ref.identifier}")
            try:
                return resolve(ref)
            except Exception as e:
                self._logger.warning(f"Failed to resolve {self.name} {ref.identifier}: {e}")
                with stats_lock:
                    failures[ref.identifier] = str(e) or e.__class__.__name__
                return self.placeholder

        def work(ref: ObjectReference) -> None:
            resolution_map.get_or_resolve(ref.identifier, lambda: resolve_one(ref))

        max_workers = min(self.max_workers, len(references))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(work, ref) for ref in references]
            for future in as_completed(futures):
                future.result()

        values = resolution_map.freeze()
        self._logger.info(
            f"Resolved {len(values)} {self.name} "
            f"({calls[0]} calls, {len(failures)} failed)"
        )

        if failures and self.strict:
            raise ResolutionError(
                f"{len(failures)} {self.name} could not be resolved", failures
            )

        return ResolutionOutcome(values=values, failures=failures, calls=calls[0])


def resolve_concurrently(
    jobs: Dict[str, Callable[[], ResolutionOutcome]],
) -> Dict[str, ResolutionOutcome]:
    """
    Run independent resolution phases side by side and wait for all of them.

    Args:
        jobs: name -> zero-argument callable returning a ResolutionOutcome

    Returns:
        name -> ResolutionOutcome. The first exception raised by a job is
        re-raised after every job has finished.
    """
    if not jobs:
        return {}

    results: Dict[str, ResolutionOutcome] = {}
    first_error: Optional[BaseException] = None
    with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
        fut_to_name = {executor.submit(fn): name for name, fn in jobs.items()}
        for fut in as_completed(fut_to_name):
            try:
                results[fut_to_name[fut]] = fut.result()
            except Exception as e:
                logger.error(f"Resolution phase '{fut_to_name[fut]}' failed: {e}")
                if first_error is None:
                    first_error = e

    if first_error is not None:
        raise first_error
    return results


__all__ = [
    "ObjectReference",
    "ResolutionMap",
    "ResolutionOutcome",
    "ResolverPool",
    "resolve_concurrently",
]
