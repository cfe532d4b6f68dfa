"""Lifecycle command model."""

from enum import Enum
from typing import Dict, Optional, Tuple


class LifecycleCommand(str, Enum):
    """Terminal actions the lifecycle controller can run."""

    SETUP = "setup"
    RESTART_ALL = "restart-all"
    RESTART = "restart"
    STOP = "stop"
    DELETE = "delete"
    PULL = "pull"
    LINKS = "links"
    ADMIN = "admin"
    COMPAT_TOKEN = "comp"
    GENERATE = "gen"
    HELP = "help"


class GenerateTarget(str, Enum):
    """Config files that can be regenerated on their own."""

    COMPOSE = "compose"
    ELEMENT = "element"
    HOOKSHOT = "hookshot"
    MAS = "mas"
    NGINX = "nginx"
    SYNAPSE = "synapse"


# Short command names kept for muscle memory: alias -> (command, argument)
COMMAND_ALIASES: Dict[str, Tuple[LifecycleCommand, Optional[str]]] = {
    "gencom": (LifecycleCommand.GENERATE, GenerateTarget.COMPOSE.value),
    "genele": (LifecycleCommand.GENERATE, GenerateTarget.ELEMENT.value),
    "genhook": (LifecycleCommand.GENERATE, GenerateTarget.HOOKSHOT.value),
    "genmas": (LifecycleCommand.GENERATE, GenerateTarget.MAS.value),
    "genng": (LifecycleCommand.GENERATE, GenerateTarget.NGINX.value),
    "gensyn": (LifecycleCommand.GENERATE, GenerateTarget.SYNAPSE.value),
    "rsa": (LifecycleCommand.RESTART_ALL, None),
    "rse": (LifecycleCommand.RESTART, "elementweb"),
    "rsh": (LifecycleCommand.RESTART, "hookshot"),
    "rsm": (LifecycleCommand.RESTART, "mas"),
    "rsn": (LifecycleCommand.RESTART, "nginx"),
    "rss": (LifecycleCommand.RESTART, "synapse"),
    "rssa": (LifecycleCommand.RESTART, "synapseadmin"),
}

# Services that can be restarted individually
RESTARTABLE_SERVICES = [
    "adminer",
    "elementweb",
    "hookshot",
    "mailhog",
    "mas",
    "mas-postgres",
    "nginx",
    "postgres",
    "redis",
    "synapse",
    "synapseadmin",
]

# Services not fronted by the reverse proxy
UNPROXIED_SERVICES = {"nginx", "postgres", "mas-postgres", "redis"}
