"""Environment configuration models."""

import re
import shlex
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..services.exceptions import IncompatibleFeaturesError


class ServiceDescriptor(BaseModel):
    """An optional service that can be switched on or off."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    enabled: bool
    image: str
    host: str
    upstream: str = Field(..., description="Container host:port the proxy forwards to")


def _unset(data: dict, alias: str, name: str) -> bool:
    return data.get(alias) in (None, "") and data.get(name) in (None, "")


def _value(data: dict, alias: str, name: str, default: Any) -> Any:
    for key in (alias, name):
        if data.get(key) not in (None, ""):
            return data[key]
    return default


class EnvironmentConfig(BaseModel):
    """Settings for one local deployment, loaded once per invocation.

    Field aliases are the camelCase keys used in ``config.env``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    container_runtime: Literal["podman", "docker"] = Field("podman", alias="containerRuntime")

    nginx_image: str = Field("docker.io/nginx:latest", alias="nginxImage")
    ingress_port: int = Field(8080, alias="ingressPort")
    listen_port: int = Field(8080, alias="listenPort")

    server_name: str = Field("127.0.0.1", alias="serverName")
    synapse_host: str = Field("127.0.0.10", alias="synapseHost")
    mas_host: str = Field("127.0.0.15", alias="masHost")
    element_host: str = Field("127.0.0.20", alias="elementHost")
    hookshot_host: str = Field("127.0.0.25", alias="hookshotHost")
    synapse_admin_host: str = Field("127.0.0.30", alias="synapseAdminHost")
    adminer_host: str = Field("127.0.0.35", alias="adminerHost")
    mailhog_host: str = Field("127.0.0.40", alias="mailhogHost")

    synapse_image: str = Field("ghcr.io/element-hq/synapse:latest", alias="synapseImage")
    synapse_enable_presence: bool = Field(True, alias="synapseEnablePresence")
    synapse_additional_volumes: List[str] = Field(
        default_factory=list, alias="synapseAdditionalVolumes"
    )

    enable_mas: bool = Field(True, alias="enableMas")
    mas_image: str = Field(
        "ghcr.io/element-hq/matrix-authentication-service:latest", alias="masImage"
    )

    enable_mailhog: bool = Field(True, alias="enableMailhog")
    mailhog_image: str = Field("docker.io/mailhog/mailhog:latest", alias="mailhogImage")

    postgres_image: str = Field("docker.io/postgres:latest", alias="postgresImage")

    enable_adminer: bool = Field(False, alias="enableAdminer")
    adminer_image: str = Field("docker.io/adminer:latest", alias="adminerImage")

    enable_element_web: bool = Field(True, alias="enableElementWeb")
    element_image: str = Field("ghcr.io/element-hq/element-web:latest", alias="elementImage")

    enable_hookshot: bool = Field(False, alias="enableHookshot")
    hookshot_encryption: bool = Field(False, alias="hookshotEncryption")
    hookshot_image: str = Field(
        "ghcr.io/matrix-org/matrix-hookshot:latest", alias="hookshotImage"
    )
    redis_image: str = Field("docker.io/redis:latest", alias="redisImage")

    enable_synapse_admin: bool = Field(True, alias="enableSynapseAdmin")
    synapse_admin_image: str = Field(
        "ghcr.io/etkecc/synapse-admin:latest", alias="synapseAdminImage"
    )

    @model_validator(mode="before")
    @classmethod
    def _derive_defaults(cls, data: Any) -> Any:
        """Fill settings whose default is another setting."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if _unset(data, "listenPort", "listen_port"):
            data["listenPort"] = _value(data, "ingressPort", "ingress_port", 8080)
        if _unset(data, "enableMailhog", "enable_mailhog"):
            data["enableMailhog"] = _value(data, "enableMas", "enable_mas", True)
        return data

    @field_validator("synapse_additional_volumes", mode="before")
    @classmethod
    def _split_volumes(cls, value: Any) -> Any:
        # Accepts bash array syntax: ("/a:/b" "/c:/d")
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("(") and value.endswith(")"):
                value = value[1:-1]
            return shlex.split(value)
        return value

    def validate_features(self) -> None:
        """Raise if mutually exclusive features are enabled together."""
        if self.hookshot_encryption and self.enable_mas:
            raise IncompatibleFeaturesError(
                "Hookshot encryption is not compatible with MAS. "
                "https://github.com/matrix-org/matrix-hookshot/issues/980"
            )

    def url(self, host: str) -> str:
        """External URL of a virtual host behind the ingress proxy."""
        return f"http://{host}:{self.listen_port}"

    @property
    def synapse_url(self) -> str:
        return self.url(self.synapse_host)

    @property
    def optional_services(self) -> List[ServiceDescriptor]:
        """Optional services in manifest order."""
        return [
            ServiceDescriptor(
                name="adminer", label="Adminer", enabled=self.enable_adminer,
                image=self.adminer_image, host=self.adminer_host, upstream="adminer:8080",
            ),
            ServiceDescriptor(
                name="elementweb", label="Element Web", enabled=self.enable_element_web,
                image=self.element_image, host=self.element_host, upstream="elementweb:8080",
            ),
            ServiceDescriptor(
                name="mas", label="MAS", enabled=self.enable_mas,
                image=self.mas_image, host=self.mas_host, upstream="mas:8080",
            ),
            ServiceDescriptor(
                name="mailhog", label="Mailhog", enabled=self.enable_mailhog,
                image=self.mailhog_image, host=self.mailhog_host, upstream="mailhog:8025",
            ),
            ServiceDescriptor(
                name="synapseadmin", label="Synapse Admin", enabled=self.enable_synapse_admin,
                image=self.synapse_admin_image, host=self.synapse_admin_host,
                upstream="synapseadmin:8080",
            ),
            ServiceDescriptor(
                name="hookshot", label="Hookshot", enabled=self.enable_hookshot,
                image=self.hookshot_image, host=self.hookshot_host, upstream="hookshot:9993",
            ),
        ]

    def service(self, name: str) -> ServiceDescriptor:
        """Look up an optional service descriptor by name."""
        for descriptor in self.optional_services:
            if descriptor.name == name:
                return descriptor
        raise KeyError(name)


def project_name_for(path) -> str:
    """Compose project name derived from a directory name."""
    name = re.sub(r"[^a-z0-9_-]", "", str(path.name).lower())
    return name or "synapse-env"
