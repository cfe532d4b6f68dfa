"""Nginx reverse-proxy config generation."""

from pathlib import Path
from typing import List

from ..constants import MANAGED_BY
from ..nginx_template import generate_nginx_config
from .base import ConfigGenerator


class NginxGenerator(ConfigGenerator):
    """Writes nginx.conf with one virtual host per enabled service."""

    name = "nginx"

    def targets(self) -> List[Path]:
        return [self.paths.nginx_config_file]

    def render(self) -> None:
        self.paths.nginx_config_file.write_text(generate_nginx_config(self.env, MANAGED_BY))
