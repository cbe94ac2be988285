"""
Unit tests for configuration, validation and logging setup.
"""

import logging
import os

import pytest

from fixmerkle.core.config import (
    DEFAULT_HASH,
    DEFAULT_HEIGHT,
    ENV_HASH,
    ENV_HEIGHT,
    TreeConfig,
    load_config,
)
from fixmerkle.crypto import KECCAK256, SHA256
from fixmerkle.utils.logger import FixMerkleLogger, get_logger, setup_logging
from fixmerkle.utils.validation import (
    MAX_HEIGHT,
    require_height,
    require_leaf,
    validate_bytes,
    validate_height,
    validate_integer,
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no fixmerkle variables set."""
    monkeypatch.delenv(ENV_HEIGHT, raising=False)
    monkeypatch.delenv(ENV_HASH, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# =============================================================================
# TreeConfig Tests
# =============================================================================


class TestTreeConfig:
    """Tests for the configuration dataclass."""

    def test_defaults(self):
        config = TreeConfig()

        assert config.height == DEFAULT_HEIGHT
        assert config.hash_name == DEFAULT_HASH
        assert config.hasher() is SHA256

    def test_capacity(self):
        assert TreeConfig(height=5).capacity == 32

    def test_invalid_height(self):
        with pytest.raises(ValueError):
            TreeConfig(height=-1)
        with pytest.raises(ValueError):
            TreeConfig(height=MAX_HEIGHT + 1)

    def test_invalid_hash(self):
        with pytest.raises(ValueError):
            TreeConfig(hash_name="nope")


class TestLoadConfig:
    """Tests for environment-driven configuration."""

    def test_defaults_without_env(self, clean_env):
        config = load_config()

        assert config == TreeConfig()

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv(ENV_HEIGHT, "8")
        monkeypatch.setenv(ENV_HASH, "keccak256")

        config = load_config()

        assert config.height == 8
        assert config.hasher() is KECCAK256

    def test_arguments_win(self, clean_env, monkeypatch):
        monkeypatch.setenv(ENV_HEIGHT, "8")

        assert load_config(height=3).height == 3

    def test_reads_env_file(self, clean_env):
        env_file = clean_env / "merkle.env"
        env_file.write_text(f"{ENV_HEIGHT}=6\n{ENV_HASH}=double_sha256\n")

        try:
            config = load_config(env_file=str(env_file))
        finally:
            # load_dotenv writes straight into os.environ
            os.environ.pop(ENV_HEIGHT, None)
            os.environ.pop(ENV_HASH, None)

        assert config.height == 6
        assert config.hash_name == "double_sha256"

    def test_bad_height_in_env(self, clean_env, monkeypatch):
        monkeypatch.setenv(ENV_HEIGHT, "tall")

        with pytest.raises(ValueError, match=ENV_HEIGHT):
            load_config()

    def test_missing_env_file(self, clean_env):
        with pytest.raises(FileNotFoundError):
            load_config(env_file=str(clean_env / "missing.env"))


# =============================================================================
# Validation Tests
# =============================================================================


class TestValidation:
    """Tests for input validators."""

    def test_validate_bytes(self):
        assert validate_bytes(b"ok", "x") == (True, "")
        assert validate_bytes(bytearray(b"ok"), "x")[0]

        valid, err = validate_bytes("no", "leaf")
        assert not valid
        assert "leaf must be bytes" in err

    def test_validate_bytes_lengths(self):
        assert not validate_bytes(b"abc", "h", expected_length=32)[0]
        assert not validate_bytes(b"abc", "h", max_length=2)[0]

    def test_validate_integer_rejects_bool(self):
        assert not validate_integer(True, "height")[0]

    def test_validate_height_bounds(self):
        assert validate_height(0)[0]
        assert validate_height(MAX_HEIGHT)[0]
        assert not validate_height(-1)[0]
        assert not validate_height(MAX_HEIGHT + 1)[0]

    def test_require_height(self):
        assert require_height(4) == 4
        with pytest.raises(TypeError):
            require_height(2.0)
        with pytest.raises(ValueError):
            require_height(-3)

    def test_require_leaf_copies(self):
        buf = bytearray(b"abc")

        leaf = require_leaf(buf)

        assert leaf == b"abc"
        assert isinstance(leaf, bytes)
        with pytest.raises(TypeError):
            require_leaf(123)


# =============================================================================
# Logger Tests
# =============================================================================


class TestLogger:
    """Tests for logging setup."""

    def test_logger_namespace(self):
        assert get_logger("tree").name == "fixmerkle.tree"

    def test_setup_after_import_applies(self, tmp_path):
        """setup_logging should replace the defaults installed at import time."""
        import fixmerkle

        try:
            setup_logging(level=logging.DEBUG, log_dir=str(tmp_path / "logs"), log_to_file=True)
            fixmerkle.MerkleTree.from_leaves([b"a", b"b"], 1)
            get_logger("test").debug("hello file")

            assert logging.getLogger("fixmerkle").level == logging.DEBUG

            for handler in logging.getLogger("fixmerkle").handlers:
                handler.flush()

            text = (tmp_path / "logs" / "fixmerkle.log").read_text()
            assert "hello file" in text
            assert "Built Merkle tree" in text
        finally:
            FixMerkleLogger.reset()

    def test_repeated_setup_keeps_one_handler(self):
        try:
            setup_logging()
            setup_logging()

            assert len(logging.getLogger("fixmerkle").handlers) == 1
        finally:
            FixMerkleLogger.reset()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
