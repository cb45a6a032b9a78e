"""scm_observer configuration system.

Configuration is loaded from a YAML file and environment variables, then
validated with pydantic.

Example usage:
```python
from scm_observer.core.config import configure_logging, load_config

config = load_config("scm-observer.yaml")
configure_logging(config)

observer = config.create_observer(context="acme")
```
"""

from scm_observer._internal.exceptions import ConfigError

from .loader import load_config
from .logging_setup import configure_logging
from .schema import DiscoveryConfig, LoggingConfig, ObserverConfig

__all__ = [
    "ConfigError",
    "DiscoveryConfig",
    "LoggingConfig",
    "ObserverConfig",
    "configure_logging",
    "load_config",
]
