"""Render a :class:`ServiceConfig` into SystemConfiguration attribute maps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from . import keys
from .config import L2TPOptions, ServiceConfig, ServiceKind
from .errors import MissingServiceIdentifier, WrongKindForOperation

LOG = logging.getLogger(__name__)

AttributeMap = Dict[str, str]


@dataclass
class RenderResult:
    """Every attribute map a service of one kind needs, keyed by entity."""

    kind: ServiceKind
    service_id: str
    entities: Dict[str, AttributeMap]


class ServiceConfigTranslator:
    """Project one service profile into per-entity attribute maps.

    Each ``render_*`` method is independent of the others and returns a fresh
    dictionary. Values that would point at secrets are emitted as keychain
    references derived from the service identifier, never as the secret
    itself.
    """

    def __init__(self, config: ServiceConfig) -> None:
        self._config = config

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @property
    def interface_type(self) -> Tuple[str, Optional[str]]:
        """Interface type and subtype the service must be created with."""

        if self._config.kind is ServiceKind.L2TP_OVER_IPSEC:
            return keys.INTERFACE_TYPE_PPP, keys.INTERFACE_TYPE_L2TP
        return keys.INTERFACE_TYPE_IPSEC, None

    def describe(self) -> str:
        return self._config.description

    # ------------------------------------------------------------------
    # L2TP over IPSec
    # ------------------------------------------------------------------
    def render_ppp_config(self) -> AttributeMap:
        operation = "l2tp_ppp_config"
        self._require_kind(operation, ServiceKind.L2TP_OVER_IPSEC)
        service_id = self._require_service_id(operation)
        options = self._l2tp_options()

        LOG.debug("Assembling %s configuration dictionary", operation)
        result: AttributeMap = {}
        result[keys.PPP_COMM_REMOTE_ADDRESS] = self._config.endpoint
        _put(result, keys.PPP_AUTH_NAME, self._config.username)
        result[keys.PPP_AUTH_PASSWORD] = service_id
        result[keys.PPP_AUTH_PASSWORD_ENCRYPTION] = (
            keys.PPP_AUTH_PASSWORD_ENCRYPTION_KEYCHAIN
        )
        result[keys.PPP_DISCONNECT_ON_FAST_USER_SWITCH] = keys.flag(
            options.disconnect_on_switch
        )
        result[keys.PPP_DISCONNECT_ON_LOGOUT] = keys.flag(options.disconnect_on_logout)

        LOG.debug("%s ready: %s", operation, result)
        return result

    def render_ipsec_config(self) -> AttributeMap:
        operation = "l2tp_ipsec_config"
        self._require_kind(operation, ServiceKind.L2TP_OVER_IPSEC)
        service_id = self._require_service_id(operation)

        LOG.debug("Assembling %s configuration dictionary", operation)
        result: AttributeMap = {}
        result[keys.IPSEC_AUTHENTICATION_METHOD] = (
            keys.IPSEC_AUTHENTICATION_METHOD_SHARED_SECRET
        )
        result[keys.IPSEC_SHARED_SECRET_ENCRYPTION] = (
            keys.IPSEC_SHARED_SECRET_ENCRYPTION_KEYCHAIN
        )
        result[keys.IPSEC_SHARED_SECRET] = keys.shared_secret_ref(service_id)
        self._put_local_identifier(result, operation)

        LOG.debug("%s ready: %s", operation, result)
        return result

    def render_ipv4_config(self) -> AttributeMap:
        operation = "l2tp_ipv4_config"
        self._require_kind(operation, ServiceKind.L2TP_OVER_IPSEC)
        options = self._l2tp_options()

        LOG.debug("Assembling %s configuration dictionary", operation)
        result: AttributeMap = {keys.IPV4_CONFIG_METHOD: keys.IPV4_CONFIG_METHOD_PPP}
        if not options.enable_split_tunnel:
            result[keys.OVERRIDE_PRIMARY] = keys.FLAG_ON

        LOG.debug("%s ready: %s", operation, result)
        return result

    # ------------------------------------------------------------------
    # Cisco IPSec
    # ------------------------------------------------------------------
    def render_cisco_ipv4_config(self) -> AttributeMap:
        operation = "cisco_ipv4_config"
        self._require_kind(operation, ServiceKind.CISCO_IPSEC)

        LOG.debug("Assembling %s configuration dictionary", operation)
        result: AttributeMap = {
            keys.IPV4_CONFIG_METHOD: keys.IPV4_CONFIG_METHOD_AUTOMATIC
        }

        LOG.debug("%s ready: %s", operation, result)
        return result

    def render_cisco_ipsec_config(self) -> AttributeMap:
        operation = "cisco_ipsec_config"
        self._require_kind(operation, ServiceKind.CISCO_IPSEC)
        service_id = self._require_service_id(operation)

        LOG.debug("Assembling %s configuration dictionary", operation)
        result: AttributeMap = {}
        result[keys.IPSEC_AUTHENTICATION_METHOD] = (
            keys.IPSEC_AUTHENTICATION_METHOD_SHARED_SECRET
        )
        result[keys.IPSEC_SHARED_SECRET] = keys.shared_secret_ref(service_id)
        result[keys.IPSEC_SHARED_SECRET_ENCRYPTION] = (
            keys.IPSEC_SHARED_SECRET_ENCRYPTION_KEYCHAIN
        )
        result[keys.IPSEC_REMOTE_ADDRESS] = self._config.endpoint
        _put(result, keys.IPSEC_XAUTH_NAME, self._config.username)
        result[keys.IPSEC_XAUTH_PASSWORD] = keys.xauth_password_ref(service_id)
        result[keys.IPSEC_XAUTH_PASSWORD_ENCRYPTION] = (
            keys.IPSEC_XAUTH_PASSWORD_ENCRYPTION_KEYCHAIN
        )
        self._put_local_identifier(result, operation)

        LOG.debug("%s ready: %s", operation, result)
        return result

    # ------------------------------------------------------------------
    # Whole service
    # ------------------------------------------------------------------
    def render(self) -> RenderResult:
        """Render every entity the service kind requires."""

        service_id = self._require_service_id("service")
        if self._config.kind is ServiceKind.L2TP_OVER_IPSEC:
            entities = {
                keys.ENTITY_PPP: self.render_ppp_config(),
                keys.ENTITY_IPSEC: self.render_ipsec_config(),
                keys.ENTITY_IPV4: self.render_ipv4_config(),
            }
        else:
            entities = {
                keys.ENTITY_IPSEC: self.render_cisco_ipsec_config(),
                keys.ENTITY_IPV4: self.render_cisco_ipv4_config(),
            }

        LOG.info(
            "Rendered %s service '%s' (%s)",
            self._config.kind.human_name,
            self._config.name,
            service_id,
        )
        return RenderResult(
            kind=self._config.kind, service_id=service_id, entities=entities
        )

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------
    def _require_kind(self, operation: str, expected: ServiceKind) -> None:
        if self._config.kind is not expected:
            LOG.error(
                "%s is only available for %s", operation, expected.human_name
            )
            raise WrongKindForOperation(operation, expected, self._config.kind)

    def _require_service_id(self, operation: str) -> str:
        service_id = self._config.service_id
        if service_id is None:
            LOG.error("%s called before service '%s' was registered", operation, self._config.name)
            raise MissingServiceIdentifier(operation, self._config.name)
        return service_id

    def _l2tp_options(self) -> L2TPOptions:
        options = self._config.l2tp
        if options is None:
            raise ValueError(f"service '{self._config.name}' has no L2TP options")
        return options

    def _put_local_identifier(self, result: AttributeMap, operation: str) -> None:
        local_identifier = self._config.local_identifier
        if local_identifier is None:
            return
        LOG.debug("Assigning group name %s to %s", local_identifier, operation)
        result[keys.IPSEC_LOCAL_IDENTIFIER] = local_identifier
        result[keys.IPSEC_LOCAL_IDENTIFIER_TYPE] = keys.IPSEC_LOCAL_IDENTIFIER_TYPE_KEY_ID


def _put(result: AttributeMap, key: str, value: Optional[str]) -> None:
    if value is not None:
        result[key] = value
