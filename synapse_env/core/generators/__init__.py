"""Config file generators, one per managed file set."""

from .base import ConfigGenerator, never_confirm, prompt_confirm
from .compose import ComposeGenerator, build_manifest
from .element import ElementGenerator
from .hookshot import HookshotGenerator
from .mas import MasGenerator
from .nginx import NginxGenerator
from .synapse import SynapseGenerator

# Setup order; later generators read files written by earlier ones.
GENERATORS = {
    "compose": ComposeGenerator,
    "nginx": NginxGenerator,
    "element": ElementGenerator,
    "hookshot": HookshotGenerator,
    "synapse": SynapseGenerator,
    "mas": MasGenerator,
}

__all__ = [
    'ConfigGenerator',
    'ComposeGenerator',
    'ElementGenerator',
    'GENERATORS',
    'HookshotGenerator',
    'MasGenerator',
    'NginxGenerator',
    'SynapseGenerator',
    'build_manifest',
    'never_confirm',
    'prompt_confirm'
]
