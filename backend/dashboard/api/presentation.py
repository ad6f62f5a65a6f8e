"""HTTP Presenter — Presenter protocol implemented for JSON/form HTTP clients.

Invariants:
    - revalidate_path() records stale views; they are echoed in X-Revalidated-Paths
    - redirect() raises RedirectSignal; the global handler turns it into a 303

Design Decisions:
    - Exception-based redirect: actions stay framework-free and the call unwinds
      exactly where a page framework would navigate away
    - One presenter per request: no shared mutable state between requests
"""

import logging
from typing import NoReturn

logger = logging.getLogger(__name__)

REVALIDATED_HEADER = "X-Revalidated-Paths"


class RedirectSignal(Exception):
    """Navigation requested by an action; not an error."""

    def __init__(self, path: str, revalidated_paths: list[str]):
        super().__init__(path)
        self.path = path
        self.revalidated_paths = revalidated_paths


class HttpPresenter:
    """Per-request cache invalidation log and redirect trigger."""

    def __init__(self):
        self.revalidated_paths: list[str] = []

    def revalidate_path(self, path: str) -> None:
        logger.info(f"View marked stale: {path}", extra={"path": path})
        if path not in self.revalidated_paths:
            self.revalidated_paths.append(path)

    def redirect(self, path: str) -> NoReturn:
        raise RedirectSignal(path, list(self.revalidated_paths))

    def headers(self) -> dict[str, str]:
        if not self.revalidated_paths:
            return {}
        return {REVALIDATED_HEADER: ",".join(self.revalidated_paths)}
