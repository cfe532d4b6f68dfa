"""Models for the compose manifest."""

from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field
from yaml.representer import SafeRepresenter

from ..core.constants import MANAGED_BY


class _IndentedDumper(yaml.SafeDumper):
    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:  # type: ignore[override]
        # Indent sequences under mappings:
        #   ports:
        #     - "8080:80"
        return super().increase_indent(flow, False)


def _represent_multiline_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    """Prefer literal block scalars for multi-line strings such as PEM keys."""
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return SafeRepresenter.represent_str(dumper, data)


_IndentedDumper.add_representer(str, _represent_multiline_str)


def dump_yaml(data: Any, header: Optional[str] = None) -> str:
    """Serialise data as block-style YAML, optionally behind a comment header."""
    body = yaml.dump(
        data,
        Dumper=_IndentedDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    if header:
        return f"# {header}\n\n{body}"
    return body


class ComposeService(BaseModel):
    """A single service block in the compose manifest."""

    container_name: str
    image: str
    restart: str = "unless-stopped"
    command: Optional[str] = None
    depends_on: Optional[List[str]] = None
    environment: Optional[List[str]] = None
    ports: List[str] = Field(default_factory=list)
    volumes: Optional[List[str]] = None


class ComposeManifest(BaseModel):
    """Multi-service container topology."""

    volumes: Dict[str, None] = Field(default_factory=dict)
    services: Dict[str, ComposeService] = Field(default_factory=dict)

    def add_service(self, name: str, service: ComposeService) -> None:
        self.services[name] = service

    def to_compose_dict(self) -> Dict[str, Any]:
        """Convert to the structure expected by compose CLIs."""
        return {
            "volumes": dict(self.volumes),
            "services": {
                name: service.model_dump(exclude_none=True)
                for name, service in self.services.items()
            },
        }

    def to_yaml(self) -> str:
        return dump_yaml(self.to_compose_dict(), header=MANAGED_BY)
