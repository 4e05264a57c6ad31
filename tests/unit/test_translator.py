import logging

import pytest

from scvpn import keys
from scvpn.config import ServiceConfig, ServiceKind
from scvpn.errors import ExitCode, MissingServiceIdentifier, WrongKindForOperation
from scvpn.translator import ServiceConfigTranslator


def build_l2tp(**overrides) -> ServiceConfig:
    params = dict(
        name="Office",
        endpoint="vpn.example.com",
        username="alice",
        local_identifier="group1",
        service_id="svc-42",
    )
    params.update(overrides)
    return ServiceConfig.l2tp_over_ipsec(**params)


def build_cisco(**overrides) -> ServiceConfig:
    params = dict(
        name="Branch",
        endpoint="cisco.example.com",
        username="bob",
        service_id="svc-7",
    )
    params.update(overrides)
    return ServiceConfig.cisco_ipsec(**params)


def test_ppp_config():
    translator = ServiceConfigTranslator(
        build_l2tp(disconnect_on_switch=True, disconnect_on_logout=False)
    )

    result = translator.render_ppp_config()

    assert result == {
        "CommRemoteAddress": "vpn.example.com",
        "AuthName": "alice",
        "AuthPassword": "svc-42",
        "AuthPasswordEncryption": "Keychain",
        "DisconnectOnFastUserSwitch": "1",
        "DisconnectOnLogout": "0",
    }


def test_ppp_config_never_contains_password():
    translator = ServiceConfigTranslator(build_l2tp(password="hunter2"))

    result = translator.render_ppp_config()

    assert "hunter2" not in result.values()
    assert result[keys.PPP_AUTH_PASSWORD_ENCRYPTION] == "Keychain"


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"username": None, "local_identifier": None},
        {"enable_split_tunnel": True, "disconnect_on_logout": True},
    ],
)
def test_ppp_config_always_uses_keychain(overrides):
    result = ServiceConfigTranslator(build_l2tp(**overrides)).render_ppp_config()

    assert result[keys.PPP_AUTH_PASSWORD_ENCRYPTION] == "Keychain"


def test_ppp_config_omits_missing_username():
    result = ServiceConfigTranslator(build_l2tp(username=None)).render_ppp_config()

    assert keys.PPP_AUTH_NAME not in result


def test_l2tp_ipsec_config_with_local_identifier():
    result = ServiceConfigTranslator(build_l2tp()).render_ipsec_config()

    assert result == {
        "AuthenticationMethod": "SharedSecret",
        "SharedSecretEncryption": "Keychain",
        "SharedSecret": "svc-42.SS",
        "LocalIdentifier": "group1",
        "LocalIdentifierType": "KeyID",
    }


def test_l2tp_ipsec_config_without_local_identifier():
    result = ServiceConfigTranslator(
        build_l2tp(local_identifier=None)
    ).render_ipsec_config()

    assert keys.IPSEC_LOCAL_IDENTIFIER not in result
    assert keys.IPSEC_LOCAL_IDENTIFIER_TYPE not in result
    assert result[keys.IPSEC_SHARED_SECRET] == "svc-42.SS"


def test_l2tp_ipv4_config_overrides_primary_without_split_tunnel():
    result = ServiceConfigTranslator(
        build_l2tp(enable_split_tunnel=False)
    ).render_ipv4_config()

    assert result == {"ConfigMethod": "PPP", "OverridePrimary": "1"}


def test_l2tp_ipv4_config_with_split_tunnel():
    result = ServiceConfigTranslator(
        build_l2tp(enable_split_tunnel=True)
    ).render_ipv4_config()

    assert result == {"ConfigMethod": "PPP"}


def test_ipv4_configs_do_not_need_service_id():
    l2tp = ServiceConfigTranslator(build_l2tp(service_id=None)).render_ipv4_config()
    cisco = ServiceConfigTranslator(
        build_cisco(service_id=None)
    ).render_cisco_ipv4_config()

    assert "svc-42" not in l2tp.values()
    assert cisco == {"ConfigMethod": "Automatic"}


def test_cisco_ipsec_config():
    result = ServiceConfigTranslator(build_cisco()).render_cisco_ipsec_config()

    assert result == {
        "AuthenticationMethod": "SharedSecret",
        "SharedSecret": "svc-7.SS",
        "SharedSecretEncryption": "Keychain",
        "RemoteAddress": "cisco.example.com",
        "XAuthName": "bob",
        "XAuthPassword": "svc-7.XAUTH",
        "XAuthPasswordEncryption": "Keychain",
    }


def test_cisco_ipsec_config_with_local_identifier():
    result = ServiceConfigTranslator(
        build_cisco(local_identifier="branch-group")
    ).render_cisco_ipsec_config()

    assert result[keys.IPSEC_LOCAL_IDENTIFIER] == "branch-group"
    assert result[keys.IPSEC_LOCAL_IDENTIFIER_TYPE] == "KeyID"


@pytest.mark.parametrize(
    "method",
    ["render_ppp_config", "render_ipsec_config", "render_ipv4_config"],
)
def test_l2tp_operations_reject_cisco_profiles(method):
    translator = ServiceConfigTranslator(build_cisco())

    with pytest.raises(WrongKindForOperation) as excinfo:
        getattr(translator, method)()

    assert excinfo.value.expected is ServiceKind.L2TP_OVER_IPSEC
    assert excinfo.value.actual is ServiceKind.CISCO_IPSEC
    assert excinfo.value.exit_code == ExitCode.INVALID_SERVICE_KIND_CALLED


@pytest.mark.parametrize(
    "method", ["render_cisco_ipv4_config", "render_cisco_ipsec_config"]
)
def test_cisco_operations_reject_l2tp_profiles(method):
    translator = ServiceConfigTranslator(build_l2tp())

    with pytest.raises(WrongKindForOperation):
        getattr(translator, method)()


def test_wrong_kind_is_reported_before_missing_service_id():
    translator = ServiceConfigTranslator(build_cisco(service_id=None))

    with pytest.raises(WrongKindForOperation):
        translator.render_ppp_config()


@pytest.mark.parametrize(
    "config, method",
    [
        (build_l2tp(service_id=None), "render_ppp_config"),
        (build_l2tp(service_id=None), "render_ipsec_config"),
        (build_cisco(service_id=None), "render_cisco_ipsec_config"),
    ],
)
def test_missing_service_id(config, method):
    translator = ServiceConfigTranslator(config)

    with pytest.raises(MissingServiceIdentifier) as excinfo:
        getattr(translator, method)()

    assert excinfo.value.exit_code == ExitCode.MISSING_SERVICE_ID
    assert excinfo.value.exit_code != WrongKindForOperation.exit_code


def test_rendering_is_idempotent():
    translator = ServiceConfigTranslator(build_l2tp())

    assert translator.render_ppp_config() == translator.render_ppp_config()
    assert translator.render_ipsec_config() == translator.render_ipsec_config()
    assert translator.render_ipv4_config() == translator.render_ipv4_config()

    cisco = ServiceConfigTranslator(build_cisco())
    assert cisco.render_cisco_ipsec_config() == cisco.render_cisco_ipsec_config()


def test_render_l2tp_service():
    translator = ServiceConfigTranslator(build_l2tp())

    result = translator.render()

    assert result.kind is ServiceKind.L2TP_OVER_IPSEC
    assert result.service_id == "svc-42"
    assert list(result.entities) == ["PPP", "IPSec", "IPv4"]
    assert translator.interface_type == ("PPP", "L2TP")


def test_render_cisco_service():
    translator = ServiceConfigTranslator(build_cisco())

    result = translator.render()

    assert list(result.entities) == ["IPSec", "IPv4"]
    assert result.entities["IPSec"]["XAuthPassword"] == "svc-7.XAUTH"
    assert translator.interface_type == ("IPSec", None)


def test_render_logs_assembly(caplog):
    translator = ServiceConfigTranslator(build_cisco())

    with caplog.at_level(logging.DEBUG, logger="scvpn.translator"):
        translator.render_cisco_ipv4_config()

    messages = [record.getMessage() for record in caplog.records]
    assert "Assembling cisco_ipv4_config configuration dictionary" in messages


def test_describe_matches_profile_summary():
    config = build_cisco()

    assert ServiceConfigTranslator(config).describe() == config.description


def test_l2tp_rendering_keeps_options_after_failed_removal():
    config = build_l2tp(enable_split_tunnel=True)

    with pytest.raises(ValueError):
        config.l2tp = None

    translator = ServiceConfigTranslator(config)
    assert translator.render_ipv4_config() == {"ConfigMethod": "PPP"}
    assert translator.render_ppp_config()["DisconnectOnLogout"] == "0"


def test_render_requires_service_id():
    with pytest.raises(MissingServiceIdentifier):
        ServiceConfigTranslator(build_cisco(service_id=None)).render()
