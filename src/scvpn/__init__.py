"""VPN service profiles for the macOS SystemConfiguration store.

The package turns a :class:`scvpn.config.ServiceConfig` describing an L2TP
over IPSec or Cisco IPSec connection into the flat attribute dictionaries the
store expects for each entity of a network service (PPP, IPSec and IPv4).

It does not talk to the store or to the keychain. Secrets are referenced by
keychain item names derived from the service identifier, and the identifier
itself comes from a :class:`scvpn.registry.ServiceRegistry`.
"""

from .config import L2TPOptions, ServiceConfig, ServiceKind  # noqa: F401
from .errors import (  # noqa: F401
    ExitCode,
    MissingServiceIdentifier,
    ServiceConfigError,
    WrongKindForOperation,
)
from .registry import DeterministicServiceRegistry, ServiceRegistry  # noqa: F401
from .translator import RenderResult, ServiceConfigTranslator  # noqa: F401

__all__ = [
    "DeterministicServiceRegistry",
    "ExitCode",
    "L2TPOptions",
    "MissingServiceIdentifier",
    "RenderResult",
    "ServiceConfig",
    "ServiceConfigError",
    "ServiceConfigTranslator",
    "ServiceKind",
    "ServiceRegistry",
    "WrongKindForOperation",
]
