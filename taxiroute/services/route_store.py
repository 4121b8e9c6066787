# path: taxi-route-api/taxiroute/services/route_store.py

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path as FilePath
from typing import Dict, List, Optional, Union
import json
import logging
import threading

from pydantic import ValidationError

from taxiroute.errors import RouteNotFoundError
from taxiroute.models.route_models import RouteIn, StoredRoute

logger = logging.getLogger(__name__)


class RouteStore:
    """
    Route records kept in memory and mirrored to a JSON file.

    Ids are positive integers assigned as max(existing ids) + 1. A missing
    or unreadable file starts an empty store. Pass path=None for a purely
    in-memory store.
    """

    def __init__(self, path: Optional[Union[str, FilePath]] = None):
        self.path = FilePath(path) if path is not None else None
        self._lock = threading.Lock()
        self._routes: Dict[int, StoredRoute] = {}
        self._load()

    def _load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("could not read routes from %s, starting empty: %s", self.path, exc)
            return
        if not isinstance(data, list):
            logger.warning("routes file %s does not hold a list, starting empty", self.path)
            return
        for n, item in enumerate(data):
            try:
                route = StoredRoute.model_validate(item)
            except ValidationError as exc:
                logger.warning("skipping invalid route record #%d in %s: %s", n, self.path, exc)
                continue
            self._routes[route.route_id] = route
        logger.info("loaded %d routes from %s", len(self._routes), self.path)

    def _commit(self, routes: Dict[int, StoredRoute]) -> None:
        # write first; memory only changes once the file is on disk
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = [routes[k].model_dump(mode="json", by_alias=True) for k in sorted(routes)]
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        self._routes = routes

    def _ordered(self) -> List[StoredRoute]:
        return [self._routes[k] for k in sorted(self._routes)]

    def _next_id(self) -> int:
        return max(self._routes, default=0) + 1

    def list(self) -> List[StoredRoute]:
        with self._lock:
            return self._ordered()

    def get(self, route_id: int) -> StoredRoute:
        with self._lock:
            try:
                return self._routes[route_id]
            except KeyError:
                raise RouteNotFoundError(route_id) from None

    def create(self, route: RouteIn) -> StoredRoute:
        with self._lock:
            stored = StoredRoute(**route.model_dump(), route_id=self._next_id())
            self._commit({**self._routes, stored.route_id: stored})
        logger.info("created route %d (%d path points)", stored.route_id, len(stored.path))
        return stored

    def update(self, route_id: int, route: RouteIn) -> StoredRoute:
        with self._lock:
            existing = self._routes.get(route_id)
            if existing is None:
                raise RouteNotFoundError(route_id)
            stored = StoredRoute(
                **route.model_dump(),
                route_id=route_id,
                created_at=existing.created_at,
                updated_at=datetime.now(timezone.utc),
            )
            self._commit({**self._routes, route_id: stored})
        logger.info("updated route %d", route_id)
        return stored

    def delete(self, route_id: int) -> None:
        with self._lock:
            if route_id not in self._routes:
                raise RouteNotFoundError(route_id)
            self._commit({k: v for k, v in self._routes.items() if k != route_id})
        logger.info("deleted route %d", route_id)
