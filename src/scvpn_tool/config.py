"""YAML configuration loader for the render tool."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence

import yaml

from scvpn.config import ServiceConfig

OUTPUT_FORMATS = ("json", "plist")


@dataclass
class OutputConfig:
    directory: Path = Path(".")
    format: str = "json"


@dataclass
class ToolConfig:
    services: Sequence[ServiceConfig]
    output: OutputConfig = field(default_factory=OutputConfig)


def _parse_output(section: dict) -> OutputConfig:
    if not isinstance(section, dict):
        raise ValueError("'output' section must be a mapping if provided")
    fmt = str(section.get("format", "json")).lower()
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format '{fmt}'")
    return OutputConfig(
        directory=Path(section.get("directory", ".")),
        format=fmt,
    )


def _parse_services(entries: Iterable[dict]) -> List[ServiceConfig]:
    services: List[ServiceConfig] = []
    seen = set()
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"service #{index} must be a mapping")
        try:
            service = ServiceConfig.from_dict(entry)
        except ValueError as exc:
            raise ValueError(f"service #{index}: {exc}") from exc
        if service.name in seen:
            raise ValueError(f"duplicate service name '{service.name}'")
        seen.add(service.name)
        services.append(service)
    return services


def load_config(path: Path) -> ToolConfig:
    data = yaml.safe_load(path.read_text())
    if not isinstance(data, dict):
        raise ValueError("Tool configuration must be a mapping")

    services_section = data.get("services")
    if services_section is None:
        raise ValueError("Configuration missing 'services' section")
    if not isinstance(services_section, list):
        raise ValueError("'services' section must be a list")
    services = _parse_services(services_section)

    output = _parse_output(data.get("output", {}))

    return ToolConfig(services=services, output=output)
