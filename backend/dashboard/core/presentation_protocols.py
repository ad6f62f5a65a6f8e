"""Boundary Protocols — contracts between invoice actions and the presentation layer.

Invariants:
    - Actions NEVER import a web framework — they only see these Protocols
    - redirect() does not return: implementations raise or otherwise unwind
    - revalidate_path() only signals staleness; it never fetches

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Injected per call (not a module singleton): tests pass a recording fake
"""

from typing import NoReturn, Protocol


class Presenter(Protocol):
    """Cache invalidation and navigation primitives owned by the presentation layer."""
    def revalidate_path(self, path: str) -> None: ...
    def redirect(self, path: str) -> NoReturn: ...
