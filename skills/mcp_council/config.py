"""
Server configuration.

Defaults live in code; ``council.config.yaml`` (shipped beside this module,
or passed with ``--config``) overrides them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from .core.models import CLIConfig, DEFAULT_ENGINE

DEFAULT_TIMEOUT = 420  # 7 minutes - review and synthesis prompts carry every answer
DEFAULT_COUNCIL_DIR = '.council'
DEFAULT_MAX_PARENT_LEVELS = 5


@dataclass
class CouncilConfig:
    """Configuration for the council MCP server."""
    default_engine: str = DEFAULT_ENGINE
    timeout: int = DEFAULT_TIMEOUT
    council_dir: str = DEFAULT_COUNCIL_DIR
    max_parent_levels: int = DEFAULT_MAX_PARENT_LEVELS
    human_output: bool = False
    engines: Dict[str, CLIConfig] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: Path) -> 'CouncilConfig':
        """Load configuration from YAML file."""
        if not path.exists():
            return cls()

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(
            default_engine=str(data.get('default_engine', DEFAULT_ENGINE)),
            timeout=int(data.get('timeout', DEFAULT_TIMEOUT)),
            council_dir=str(data.get('council_dir', DEFAULT_COUNCIL_DIR)),
            max_parent_levels=int(data.get('max_parent_levels', DEFAULT_MAX_PARENT_LEVELS)),
            human_output=bool(data.get('human_output', False)),
            engines=_parse_engines(data.get('engines') or {})
        )

    @classmethod
    def default_path(cls) -> Path:
        """Get default config file path."""
        return Path(__file__).parent / 'council.config.yaml'


def _parse_engines(raw: Dict[str, Any]) -> Dict[str, CLIConfig]:
    """Build CLIConfig entries from the ``engines`` mapping of the YAML file."""
    engines = {}
    for name, spec in raw.items():
        spec = spec or {}
        engines[str(name)] = CLIConfig(
            name=str(spec.get('command', name)),
            args=[str(a) for a in spec.get('args', [])],
            use_stdin=bool(spec.get('use_stdin', False)),
            prompt_flag=spec.get('prompt_flag', '-p')
        )
    return engines


def load_council_config_defaults(path: Path = None) -> CouncilConfig:
    """Load config from YAML if available, in-code defaults otherwise."""
    try:
        return CouncilConfig.from_file(path or CouncilConfig.default_path())
    except (OSError, ValueError, TypeError, AttributeError, yaml.YAMLError):
        # Fall back to in-code defaults if config is unreadable
        return CouncilConfig()
