"""SystemConfiguration attribute names and values used by VPN services.

The strings mirror the ``kSCEntNet*``, ``kSCPropNet*`` and ``kSCValNet*``
constants exported by the macOS SystemConfiguration framework, so the maps we
produce can be handed to the store as-is.
"""

from __future__ import annotations

# Entities (sub-schemas of a network service)
ENTITY_PPP = "PPP"
ENTITY_IPSEC = "IPSec"
ENTITY_IPV4 = "IPv4"

# Interface types
INTERFACE_TYPE_PPP = "PPP"
INTERFACE_TYPE_L2TP = "L2TP"
INTERFACE_TYPE_IPSEC = "IPSec"

# PPP
PPP_COMM_REMOTE_ADDRESS = "CommRemoteAddress"
PPP_AUTH_NAME = "AuthName"
PPP_AUTH_PASSWORD = "AuthPassword"
PPP_AUTH_PASSWORD_ENCRYPTION = "AuthPasswordEncryption"
PPP_AUTH_PASSWORD_ENCRYPTION_KEYCHAIN = "Keychain"
PPP_DISCONNECT_ON_FAST_USER_SWITCH = "DisconnectOnFastUserSwitch"
PPP_DISCONNECT_ON_LOGOUT = "DisconnectOnLogout"

# IPSec
IPSEC_AUTHENTICATION_METHOD = "AuthenticationMethod"
IPSEC_AUTHENTICATION_METHOD_SHARED_SECRET = "SharedSecret"
IPSEC_SHARED_SECRET = "SharedSecret"
IPSEC_SHARED_SECRET_ENCRYPTION = "SharedSecretEncryption"
IPSEC_SHARED_SECRET_ENCRYPTION_KEYCHAIN = "Keychain"
IPSEC_LOCAL_IDENTIFIER = "LocalIdentifier"
IPSEC_LOCAL_IDENTIFIER_TYPE = "LocalIdentifierType"
IPSEC_LOCAL_IDENTIFIER_TYPE_KEY_ID = "KeyID"
IPSEC_REMOTE_ADDRESS = "RemoteAddress"
IPSEC_XAUTH_NAME = "XAuthName"
IPSEC_XAUTH_PASSWORD = "XAuthPassword"
IPSEC_XAUTH_PASSWORD_ENCRYPTION = "XAuthPasswordEncryption"
IPSEC_XAUTH_PASSWORD_ENCRYPTION_KEYCHAIN = "Keychain"

# IPv4
IPV4_CONFIG_METHOD = "ConfigMethod"
IPV4_CONFIG_METHOD_PPP = "PPP"
IPV4_CONFIG_METHOD_AUTOMATIC = "Automatic"
OVERRIDE_PRIMARY = "OverridePrimary"

# Booleans travel as strings, matching what the store documents.
FLAG_ON = "1"
FLAG_OFF = "0"

# Keychain item suffixes appended to the service identifier
SHARED_SECRET_SUFFIX = ".SS"
XAUTH_PASSWORD_SUFFIX = ".XAUTH"


def flag(value: bool) -> str:
    return FLAG_ON if value else FLAG_OFF


def shared_secret_ref(service_id: str) -> str:
    """Keychain account name holding the IPSec shared secret."""

    return f"{service_id}{SHARED_SECRET_SUFFIX}"


def xauth_password_ref(service_id: str) -> str:
    """Keychain account name holding the Cisco XAuth password."""

    return f"{service_id}{XAUTH_PASSWORD_SUFFIX}"
