"""
Tree configuration parameters for fixmerkle.

Defaults can be overridden through the environment (or a .env file):

    FIXMERKLE_HEIGHT=20
    FIXMERKLE_HASH=keccak256
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from fixmerkle.crypto import Hasher, get_hasher
from fixmerkle.utils.validation import require_height

ENV_HEIGHT = "FIXMERKLE_HEIGHT"
ENV_HASH = "FIXMERKLE_HASH"

DEFAULT_HEIGHT = 16
DEFAULT_HASH = "sha256"


@dataclass(frozen=True)
class TreeConfig:
    """Tree-wide configuration parameters"""

    height: int = DEFAULT_HEIGHT  # Capacity is 2**height leaves
    hash_name: str = DEFAULT_HASH  # Registry name, see fixmerkle.crypto

    def __post_init__(self):
        """Validate field constraints."""
        require_height(self.height)
        get_hasher(self.hash_name)

    @property
    def capacity(self) -> int:
        return 2 ** self.height

    def hasher(self) -> Hasher:
        """Resolve the configured hash strategy."""
        return get_hasher(self.hash_name)


def load_config(
    height: Optional[int] = None,
    hash_name: Optional[str] = None,
    env_file: Optional[str] = None,
) -> TreeConfig:
    """
    Load configuration from arguments, environment, then defaults.

    Args:
        height: Explicit height, wins over the environment
        hash_name: Explicit hash name, wins over the environment
        env_file: Optional path to a .env file (default: nearest .env from cwd)

    Returns:
        TreeConfig instance

    Raises:
        FileNotFoundError: If env_file is given but does not exist
        ValueError: If an environment value is not a valid height or hash name
    """
    if env_file is not None:
        if not os.path.isfile(env_file):
            raise FileNotFoundError(f"env file not found: {env_file}")
        load_dotenv(dotenv_path=env_file)
    else:
        load_dotenv(dotenv_path=find_dotenv(usecwd=True))

    if height is None:
        raw = os.getenv(ENV_HEIGHT)
        if raw is not None:
            try:
                height = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_HEIGHT} must be an integer, got {raw!r}") from None
        else:
            height = DEFAULT_HEIGHT

    if hash_name is None:
        hash_name = os.getenv(ENV_HASH, DEFAULT_HASH)

    return TreeConfig(height=height, hash_name=hash_name)
