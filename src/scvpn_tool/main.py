"""Entry point for rendering VPN service profiles."""

from __future__ import annotations

import argparse
import json
import logging
import plistlib
import sys
from pathlib import Path
from typing import Any, Dict, List

from scvpn.errors import ExitCode, ServiceConfigError
from scvpn.registry import DeterministicServiceRegistry
from scvpn.translator import ServiceConfigTranslator

from .config import OUTPUT_FORMATS, load_config

LOG = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def _parse_args(argv: List[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render VPN service profiles into SystemConfiguration attribute maps"
    )
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to the YAML file describing the services",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory where rendered services are written (overrides config)",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output file format (overrides config)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print all rendered services as JSON instead of writing files",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def build_payload(translator: ServiceConfigTranslator) -> Dict[str, Any]:
    """Everything an installer needs to create one service."""

    result = translator.render()
    interface_type, interface_subtype = translator.interface_type
    interface = {"type": interface_type}
    if interface_subtype is not None:
        interface["subtype"] = interface_subtype

    return {
        "name": translator.config.name,
        "kind": result.kind.value,
        "service_id": result.service_id,
        "interface": interface,
        "entities": result.entities,
    }


def _output_path(directory: Path, name: str, fmt: str) -> Path:
    safe_name = name.replace("/", "_").replace("\\", "_")
    return directory / f"{safe_name}.{fmt}"


def write_payload(payload: Dict[str, Any], directory: Path, fmt: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    output_path = _output_path(directory, payload["name"], fmt)
    if fmt == "plist":
        output_path.write_bytes(plistlib.dumps(payload))
    else:
        output_path.write_text(json.dumps(payload, indent=2) + "\n")
    LOG.info("Wrote service '%s' to %s", payload["name"], output_path)
    return output_path


def main(argv: List[str] | None = None) -> int:
    args = _parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        LOG.error("invalid configuration %s: %s", args.config, exc)
        return int(ExitCode.INVALID_CONFIG)

    output_dir = args.output_dir or config.output.directory
    fmt = args.format or config.output.format

    if not config.services:
        LOG.warning("no services configured; nothing to render")

    registry = DeterministicServiceRegistry()
    payloads = []
    try:
        for service in config.services:
            LOG.debug(
                "Rendering %s service '%s'", service.kind.human_name, service.name
            )
            registry.register(service)
            payloads.append(build_payload(ServiceConfigTranslator(service)))
    except ServiceConfigError as exc:
        LOG.error("%s", exc)
        return int(exc.exit_code)
    except ValueError as exc:
        LOG.error("cannot register services: %s", exc)
        return int(ExitCode.INVALID_CONFIG)

    if args.stdout:
        sys.stdout.write(json.dumps(payloads, indent=2) + "\n")
    else:
        for payload in payloads:
            write_payload(payload, output_dir, fmt)

    return int(ExitCode.SUCCESS)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
