"""Service identifier assignment.

On a real machine the SystemConfiguration store hands out the identifier
when a service is created. :class:`ServiceRegistry` is the seam for that
collaborator; :class:`DeterministicServiceRegistry` stands in for it when
we only need stable identifiers, e.g. to render profiles ahead of time.
"""

from __future__ import annotations

import hashlib
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Optional

from .config import ServiceConfig, ServiceKind

LOG = logging.getLogger(__name__)


class ServiceRegistry(ABC):
    """Assigns ``service_id`` to profiles."""

    @abstractmethod
    def register(self, config: ServiceConfig) -> str:
        """Register ``config``, store its identifier on it and return it."""


class DeterministicServiceRegistry(ServiceRegistry):
    """Derive service identifiers from the service name and kind.

    Identifiers are formatted like the UUIDs the store generates. The same
    profile always maps to the same identifier, and two different services
    never share one: a collision moves on to the next candidate digest.
    """

    def __init__(self, namespace: str = "scvpn") -> None:
        self._namespace = namespace
        self._registry: Dict[str, str] = {}
        self._reverse: Dict[str, str] = {}

    def _candidate(self, key: str, attempt: int) -> str:
        seed = f"{self._namespace}:{key}:{attempt}".encode("utf-8")
        digest = hashlib.sha256(seed).digest()
        return str(uuid.UUID(bytes=digest[:16])).upper()

    def register(self, config: ServiceConfig) -> str:
        key = f"{config.kind.value}/{config.name}"
        service_id = self._registry.get(key)
        if service_id is None and config.service_id is not None:
            # Already created in the store; keep the identifier it was given.
            service_id = config.service_id
            owner = self._reverse.get(service_id)
            if owner is not None and owner != key:
                raise ValueError(
                    f"service id {service_id} already belongs to {owner}"
                )
            self._registry[key] = service_id
            self._reverse[service_id] = key
        elif service_id is None:
            attempt = 0
            service_id = self._candidate(key, attempt)
            while service_id in self._reverse:
                attempt += 1
                service_id = self._candidate(key, attempt)
            self._registry[key] = service_id
            self._reverse[service_id] = key
            LOG.info("Registered service '%s' as %s", config.name, service_id)

        config.service_id = service_id
        return service_id

    def lookup(self, name: str) -> Optional[str]:
        """Return the identifier registered for the service called ``name``."""

        for kind in ServiceKind:
            service_id = self._registry.get(f"{kind.value}/{name}")
            if service_id is not None:
                return service_id
        return None
