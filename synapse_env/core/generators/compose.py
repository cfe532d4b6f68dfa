"""Compose manifest generation."""

from pathlib import Path
from typing import List

from ...models.compose import ComposeManifest, ComposeService
from ...models.environment import EnvironmentConfig
from ...models.paths import ProjectPaths
from ..constants import NAMED_VOLUMES, POSTGRES_PASSWORD
from .base import ConfigGenerator


def synapse_volumes(env: EnvironmentConfig, paths: ProjectPaths) -> List[str]:
    """Bind mounts for the Synapse container, SELinux-relabelled."""
    volumes = [f"{paths.synapse_data}:/data"]
    volumes.extend(env.synapse_additional_volumes)
    if env.enable_hookshot:
        volumes.append(f"{paths.hookshot_registration_file}:/appservices/hookshot.yaml")
    return [f"{volume}:Z" for volume in volumes]


def build_manifest(env: EnvironmentConfig, paths: ProjectPaths) -> ComposeManifest:
    """Build the compose manifest for an environment.

    Core services are unconditional; optional services follow their flag.
    Named volumes are always declared.
    """
    env.validate_features()
    name = paths.container_name
    manifest = ComposeManifest(volumes={volume: None for volume in NAMED_VOLUMES})

    manifest.add_service("nginx", ComposeService(
        container_name=name("nginx"),
        image=env.nginx_image,
        volumes=[f"{paths.nginx_config_file}:/etc/nginx/conf.d/custom.conf"],
        ports=[f"{env.ingress_port}:80"],
        environment=["NGINX_PORT=80"],
    ))
    manifest.add_service("synapse", ComposeService(
        container_name=name("synapse"),
        image=env.synapse_image,
        depends_on=["postgres"],
        environment=["SYNAPSE_CONFIG_PATH=/data/homeserver.yaml"],
        ports=[
            "127.0.0.1:47601-47602:8008-8009/tcp",
            "127.0.0.1:47600:8448/tcp",
        ],
        volumes=synapse_volumes(env, paths),
    ))
    manifest.add_service("postgres", ComposeService(
        container_name=name("postgres"),
        image=env.postgres_image,
        environment=[
            "POSTGRES_INITDB_ARGS=--encoding=UTF-8 --lc-collate=C --lc-ctype=C",
            f"POSTGRES_PASSWORD={POSTGRES_PASSWORD}",
            "POSTGRES_USER=synapse",
        ],
        ports=["127.0.0.1:47610:5432/tcp"],
        volumes=["postgresData:/var/lib/postgresql/data"],
    ))

    if env.enable_adminer:
        manifest.add_service("adminer", ComposeService(
            container_name=name("adminer"),
            image=env.adminer_image,
            environment=["ADMINER_DEFAULT_SERVER=postgres"],
            ports=["127.0.0.1:47603:8080/tcp"],
        ))

    if env.enable_element_web:
        manifest.add_service("elementweb", ComposeService(
            container_name=name("elementweb"),
            image=env.element_image,
            environment=["ELEMENT_WEB_PORT=8080"],
            ports=["127.0.0.1:47604:8080/tcp"],
            volumes=[f"{paths.element_config_file}:/app/config.json:Z"],
        ))

    if env.enable_mas:
        manifest.add_service("mas", ComposeService(
            container_name=name("mas"),
            image=env.mas_image,
            environment=["MAS_CONFIG=/config.yaml"],
            ports=["127.0.0.1:47605:8080/tcp"],
            volumes=[f"{paths.mas_config_file}:/config.yaml:Z"],
        ))
        manifest.add_service("mas-postgres", ComposeService(
            container_name=name("mas-postgres"),
            image=env.postgres_image,
            environment=[f"POSTGRES_PASSWORD={POSTGRES_PASSWORD}", "POSTGRES_USER=mas"],
            ports=["127.0.0.1:47609:5432/tcp"],
            volumes=["masPostgresData:/var/lib/postgresql/data"],
        ))

    if env.enable_mailhog:
        manifest.add_service("mailhog", ComposeService(
            container_name=name("mailhog"),
            image=env.mailhog_image,
            ports=["127.0.0.1:47612:8025"],
        ))

    if env.enable_synapse_admin:
        manifest.add_service("synapseadmin", ComposeService(
            container_name=name("synapseadmin"),
            image=env.synapse_admin_image,
            environment=["SERVER_PORT=8080"],
            ports=["127.0.0.1:47611:8080/tcp"],
        ))

    if env.enable_hookshot:
        manifest.add_service("hookshot", ComposeService(
            container_name=name("hookshot"),
            image=env.hookshot_image,
            ports=["127.0.0.1:47607:9993", "127.0.0.1:47606:9101"],
            volumes=[f"{paths.hookshot_data}:/data:Z", "hookshotEncryptionData:/encryption"],
        ))
        manifest.add_service("redis", ComposeService(
            container_name=name("redis"),
            image=env.redis_image,
            command="redis-server --save 20 1 --loglevel warning",
            ports=["127.0.0.1:47608:6379"],
            volumes=["redisData:/data"],
        ))

    return manifest


class ComposeGenerator(ConfigGenerator):
    """Writes the compose manifest."""

    name = "compose"

    def targets(self) -> List[Path]:
        return [self.paths.compose_file]

    def render(self) -> None:
        manifest = build_manifest(self.env, self.paths)
        self.paths.compose_file.write_text(manifest.to_yaml())
