"""Namespaced, storage-backed session state shared by both auth domains."""

import logging
from collections.abc import MutableMapping
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


def as_bool(value: Any) -> bool:
    """Read a flag that may have been persisted as a bool or as text."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


class SessionStore:
    """Session state for one auth domain.

    Keys are written as ``<namespace>:<key>`` so the admin and member domains
    can share one storage mapping without touching each other's values.
    Subclasses set ``namespace``, ``keys`` and ``token_key`` and build their
    session model in ``_build``.
    """

    namespace: str = ""
    keys: tuple = ()
    token_key: str = ""

    def __init__(self, storage: MutableMapping):
        self.storage = storage
        self.loading = True
        self.session = None
        self._listeners: List[Callable[[], None]] = []

    def _key(self, name: str) -> str:
        return f"{self.namespace}:{name}"

    def _read(self) -> Dict[str, Any]:
        return {name: self.storage.get(self._key(name)) for name in self.keys}

    def _build(self, values: Dict[str, Any]):
        raise NotImplementedError

    def _refresh(self) -> None:
        values = self._read()
        token = values.get(self.token_key)
        if isinstance(token, str) and token.strip():
            self.session = self._build(values)
        else:
            self.session = None

    def hydrate(self) -> None:
        """Load the persisted session and finish the loading phase."""
        self._refresh()
        self.loading = False
        logger.debug(f"{self.namespace} session hydrated, authenticated={self.is_authenticated}")
        self._notify()

    def save(self, values: Dict[str, Any]) -> None:
        """Persist the given keys of this namespace; None values are skipped."""
        for name, value in values.items():
            if name not in self.keys:
                raise KeyError(f"{name!r} is not a {self.namespace} session key")
            if value is not None:
                self.storage[self._key(name)] = value
        self._refresh()
        self.loading = False
        self._notify()

    def clear(self) -> None:
        """Remove every persisted key of this namespace."""
        for name in self.keys:
            self.storage.pop(self._key(name), None)
        self.session = None
        self.loading = False
        logger.info(f"{self.namespace} session cleared")
        self._notify()

    @property
    def token(self) -> Optional[str]:
        return self.session.token if self.session else None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call ``callback`` after every change; returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception(f"{self.namespace} session listener failed")
