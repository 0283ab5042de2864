# fsmtransit/core/handlers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from fsmtransit.core.events import DispatchPath

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]
PathLike = Union[DispatchPath, str]


class HandlerRegistry:
    """
    Maps dispatch paths to the handlers registered against them. Handlers for
    one path are kept in registration order.
    """

    def __init__(self) -> None:
        self._handlers: Dict[DispatchPath, List[Handler]] = {}

    def add(self, path: PathLike, handler: Handler) -> None:
        """
        Register a handler for a dispatch path.

        :param path: A DispatchPath or its canonical string form.
        :param handler: Callable invoked as ``handler(event, *params)``.
        """
        key = DispatchPath.coerce(path)
        self._handlers.setdefault(key, []).append(handler)
        logger.debug("Registered handler %r for %s", handler, key)

    def remove(self, path: PathLike, handler: Optional[Handler] = None) -> None:
        """
        Remove one handler from a path, or every handler for the path when no
        handler is given. Unknown paths and handlers are ignored.
        """
        key = DispatchPath.coerce(path)
        if key not in self._handlers:
            return
        if handler is None:
            del self._handlers[key]
            return
        handlers = [h for h in self._handlers[key] if h != handler]
        if handlers:
            self._handlers[key] = handlers
        else:
            del self._handlers[key]

    def lookup(self, path: PathLike) -> Optional[List[Handler]]:
        """
        Return a copy of the handlers registered for a path, or None.
        """
        handlers = self._handlers.get(DispatchPath.coerce(path))
        return list(handlers) if handlers else None

    def clear(self) -> None:
        self._handlers.clear()

    def paths(self) -> List[DispatchPath]:
        return list(self._handlers)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (DispatchPath, str)):
            return False
        return DispatchPath.coerce(path) in self._handlers

    def __len__(self) -> int:
        return sum(len(handlers) for handlers in self._handlers.values())
