"""Data structures describing a VPN service profile.

A :class:`ServiceConfig` is the in-memory description of one VPN connection
that should end up as a network service in the SystemConfiguration store.
Fields that only make sense for L2TP live in a separate
:class:`L2TPOptions` payload so a Cisco profile cannot carry them at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ServiceKind(Enum):
    """The VPN flavours we know how to describe."""

    L2TP_OVER_IPSEC = "L2TPOverIPSec"
    CISCO_IPSEC = "CiscoIPSec"

    @property
    def human_name(self) -> str:
        if self is ServiceKind.L2TP_OVER_IPSEC:
            return "L2TP over IPSec"
        return "Cisco IPSec"

    @classmethod
    def parse(cls, value: Any) -> "ServiceKind":
        """Resolve ``value`` from an enum value, member name or short alias."""

        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for kind in cls:
            if text == kind.value or text.upper() == kind.name:
                return kind
        alias = _KIND_ALIASES.get(text.lower())
        if alias is None:
            raise ValueError(f"Unsupported service kind '{value}'")
        return alias


_KIND_ALIASES = {
    "l2tp": ServiceKind.L2TP_OVER_IPSEC,
    "l2tpoveripsec": ServiceKind.L2TP_OVER_IPSEC,
    "cisco": ServiceKind.CISCO_IPSEC,
    "ciscoipsec": ServiceKind.CISCO_IPSEC,
}


@dataclass(frozen=True)
class L2TPOptions:
    """L2TP-only behaviour switches.

    Attributes
    ----------
    enable_split_tunnel:
        Only route the remote network through the tunnel. When disabled the
        service overrides the primary (default) route.
    disconnect_on_switch:
        Tear the connection down on fast user switching.
    disconnect_on_logout:
        Tear the connection down when the user logs out.
    """

    enable_split_tunnel: bool = False
    disconnect_on_switch: bool = False
    disconnect_on_logout: bool = False


_L2TP_OPTION_KEYS = (
    "enable_split_tunnel",
    "disconnect_on_switch",
    "disconnect_on_logout",
)


@dataclass
class ServiceConfig:
    """One VPN connection to be installed as a network service.

    ``kind`` cannot be changed once the profile exists and ``service_id`` can
    only be assigned once, by whoever registers the service with the store.
    """

    kind: ServiceKind
    name: str
    endpoint: str
    username: Optional[str] = None
    password: Optional[str] = None
    shared_secret: Optional[str] = None
    local_identifier: Optional[str] = None
    l2tp: Optional[L2TPOptions] = None
    service_id: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.kind is ServiceKind.L2TP_OVER_IPSEC:
            if self.l2tp is None:
                object.__setattr__(self, "l2tp", L2TPOptions())
        elif self.l2tp is not None:
            raise ValueError(
                f"L2TP options are not applicable to {self.kind.human_name} services"
            )

    def __setattr__(self, name: str, value: Any) -> None:
        current = self.__dict__.get(name)
        if name == "kind" and "kind" in self.__dict__:
            raise AttributeError("ServiceConfig.kind cannot be changed")
        if name == "service_id" and current is not None and value != current:
            raise ValueError(
                f"service '{self.name}' already registered as {current}"
            )
        if name == "l2tp" and "kind" in self.__dict__:
            if self.kind is ServiceKind.CISCO_IPSEC and value is not None:
                raise ValueError(
                    "L2TP options are not applicable to Cisco IPSec services"
                )
            if (
                self.kind is ServiceKind.L2TP_OVER_IPSEC
                and value is None
                and "l2tp" in self.__dict__
            ):
                raise ValueError("L2TP over IPSec services require L2TP options")
        super().__setattr__(name, value)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def l2tp_over_ipsec(
        cls,
        name: str,
        endpoint: str,
        *,
        enable_split_tunnel: bool = False,
        disconnect_on_switch: bool = False,
        disconnect_on_logout: bool = False,
        **credentials: Optional[str],
    ) -> "ServiceConfig":
        return cls(
            kind=ServiceKind.L2TP_OVER_IPSEC,
            name=name,
            endpoint=endpoint,
            l2tp=L2TPOptions(
                enable_split_tunnel=enable_split_tunnel,
                disconnect_on_switch=disconnect_on_switch,
                disconnect_on_logout=disconnect_on_logout,
            ),
            **credentials,
        )

    @classmethod
    def cisco_ipsec(
        cls, name: str, endpoint: str, **credentials: Optional[str]
    ) -> "ServiceConfig":
        return cls(
            kind=ServiceKind.CISCO_IPSEC,
            name=name,
            endpoint=endpoint,
            **credentials,
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def is_registered(self) -> bool:
        return self.service_id is not None

    @property
    def description(self) -> str:
        """Single line summary listing only the fields that are set."""

        parts: List[str] = [f"<[ServiceConfig {self.kind.value}]"]
        parts.append(f"name={self.name}")
        parts.append(f"endpoint={self.endpoint}")
        optional = (
            ("username", self.username),
            ("password", self.password),
            ("sharedSecret", self.shared_secret),
            ("localIdentifier", self.local_identifier),
        )
        for label, value in optional:
            if value is not None:
                parts.append(f"{label}={value}")

        if self.kind is ServiceKind.L2TP_OVER_IPSEC and self.l2tp is not None:
            parts.append(f"enableSplitTunnel={_flag(self.l2tp.enable_split_tunnel)}")
            parts.append(f"disconnectOnSwitch={_flag(self.l2tp.disconnect_on_switch)}")
            parts.append(f"disconnectOnLogout={_flag(self.l2tp.disconnect_on_logout)}")

        return " ".join(parts) + ">"

    def __str__(self) -> str:
        return self.description

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "name": self.name,
            "endpoint": self.endpoint,
        }
        for key in ("username", "password", "shared_secret", "local_identifier"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.l2tp is not None:
            for key in _L2TP_OPTION_KEYS:
                data[key] = getattr(self.l2tp, key)
        if self.service_id is not None:
            data["service_id"] = self.service_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceConfig":
        for required in ("kind", "name", "endpoint"):
            if data.get(required) in (None, ""):
                raise ValueError(f"service entry missing '{required}'")

        kind = ServiceKind.parse(data["kind"])
        l2tp_keys = [key for key in _L2TP_OPTION_KEYS if key in data]
        l2tp: Optional[L2TPOptions] = None
        if kind is ServiceKind.L2TP_OVER_IPSEC:
            l2tp = L2TPOptions(**{key: _bool(key, data[key]) for key in l2tp_keys})
        elif l2tp_keys:
            raise ValueError(
                f"options {', '.join(l2tp_keys)} only apply to "
                f"{ServiceKind.L2TP_OVER_IPSEC.human_name} services"
            )

        return cls(
            kind=kind,
            name=str(data["name"]),
            endpoint=str(data["endpoint"]),
            username=_optional_str(data.get("username")),
            password=_optional_str(data.get("password")),
            shared_secret=_optional_str(data.get("shared_secret")),
            local_identifier=_optional_str(data.get("local_identifier")),
            l2tp=l2tp,
            service_id=_optional_str(data.get("service_id")),
        )


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false, got {value!r}")
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
