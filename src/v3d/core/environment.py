"""
The environment collaborator.

An ``Environment`` supplies the default precision context used when a query
is made without an explicit ``oom``/``rm``, and hands out monotonically
increasing identifiers to shapes that need a stable identity (areas and
volumes). The geometry code never generates identifiers itself.
"""

import itertools
import threading
from pathlib import Path

from v3d.core.config import ConfigManager, KernelConfig
from v3d.core.logging import get_logger
from v3d.core.precision import RoundingMode

logger = get_logger(__name__)


class Environment:
    """
    Default precision plus an identifier source.

    Example:
        >>> env = Environment(KernelConfig(oom=-6))
        >>> env.oom
        -6
        >>> env.next_id(), env.next_id()
        (0, 1)
    """

    def __init__(self, config: KernelConfig | None = None) -> None:
        self.config = config or KernelConfig()
        self._ids = itertools.count()
        self._id_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Environment(oom={self.oom}, rm={self.rm.name})"

    @classmethod
    def from_config_dir(cls, config_dir: str | Path, profile: str | None = None) -> "Environment":
        """
        Build an environment from a configuration directory.

        Args:
            config_dir: Directory holding ``kernel.yaml`` and ``profiles/``
            profile: Precision profile overriding the kernel defaults. The
                kernel's ``default_profile`` is used when this is omitted.

        Raises:
            ConfigurationError: If the directory or profile is missing or invalid
        """
        manager = ConfigManager(Path(config_dir))
        config = manager.get_kernel()
        name = profile or config.default_profile
        if name is not None:
            chosen = manager.get_profile(name)
            config = config.model_copy(update={"oom": chosen.oom, "rounding": chosen.rounding})
        logger.info("environment_created", oom=config.oom, rounding=config.rounding.name, profile=name)
        return cls(config)

    @property
    def oom(self) -> int:
        return self.config.oom

    @property
    def rm(self) -> RoundingMode:
        return self.config.rounding

    def next_id(self) -> int:
        """Return the next identifier. Safe to call from several threads."""
        with self._id_lock:
            return next(self._ids)

    def precision(self, oom: int | None = None, rm: RoundingMode | None = None) -> tuple[int, RoundingMode]:
        """Fill in whichever of ``oom``/``rm`` the caller left as ``None``."""
        return (self.oom if oom is None else oom, self.rm if rm is None else rm)


_default: Environment | None = None


def default_environment() -> Environment:
    """The process-wide environment used when none is supplied."""
    global _default
    if _default is None:
        _default = Environment()
    return _default


def set_default_environment(env: Environment) -> None:
    """Replace the process-wide environment."""
    global _default
    _default = env


def resolve_precision(oom: int | None = None, rm: RoundingMode | None = None) -> tuple[int, RoundingMode]:
    """Resolve an optional precision context against the default environment."""
    return default_environment().precision(oom, rm)
