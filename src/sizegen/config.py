"""
Configuration for named samplers.

Sampler definitions are loaded from config/samplers.yaml under the resource
root. When running from source, resource/ at project root is used. When the
package is installed, set SIZEGEN_ROOT to a directory containing config/, or
point SIZEGEN_CONFIG at a sampler file directly.

File shape:

    samplers:
      object_size:
        distribution: histogram
        csv: "512:70,4096:25,65536:5"
      events_per_tick:
        distribution: poisson
        lambda: 12
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .statistics.distributions import Distribution, SamplerFactory

logger = logging.getLogger(__name__)


def get_resources_root() -> Path:
    """Return the root directory for config resources.

    Resolution order:
    1. SIZEGEN_ROOT env var (must contain config/)
    2. resource/ under directory containing pyproject.toml (when running from source)
    3. sizegen/resources/ next to this package (when installed)
    """
    env_root = os.environ.get("SIZEGEN_ROOT")
    if env_root:
        p = Path(env_root).resolve()
        if p.is_dir():
            return p
    here = Path(__file__).resolve().parent
    for candidate in [here, *here.parents]:
        if (candidate / "pyproject.toml").is_file():
            return candidate / "resource"
    return Path(__file__).resolve().parent / "resources"


def default_config_path() -> Path:
    """SIZEGEN_CONFIG when set, else config/samplers.yaml under the resource root."""
    env_path = os.environ.get("SIZEGEN_CONFIG", "").strip()
    if env_path:
        return Path(env_path)
    return get_resources_root() / "config" / "samplers.yaml"


def load_yaml(path: Path, default: Any = None) -> Any:
    """Load YAML file; return default on missing file or parse error."""
    if default is None:
        default = {}
    if not path.exists():
        return default
    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return default
    return data if isinstance(data, dict) else default


def load_sampler_configs(path: Path | None = None) -> dict[str, dict[str, Any]]:
    """Return sampler name -> definition from the samplers file."""
    path = path or default_config_path()
    data = load_yaml(path)
    samplers = data.get("samplers") or {}
    if not isinstance(samplers, dict):
        logger.warning("%s: 'samplers' must be a mapping, ignoring it", path)
        return {}
    result: dict[str, dict[str, Any]] = {}
    for name, definition in samplers.items():
        if isinstance(definition, dict):
            result[str(name)] = definition
        else:
            logger.warning("%s: sampler %r is not a mapping, skipping it", path, name)
    return result


def load_samplers(path: Path | None = None) -> dict[str, Distribution]:
    """
    Build every sampler defined in the samplers file.

    Raises the sampler's own error type, with the sampler name prepended to the
    message, on the first invalid definition.
    """
    samplers: dict[str, Distribution] = {}
    for name, definition in load_sampler_configs(path).items():
        try:
            samplers[name] = SamplerFactory.create(definition)
        except ValueError as e:
            raise type(e)(f"sampler {name!r}: {e}") from e
    return samplers
