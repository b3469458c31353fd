"""
설정과 로깅 설정 테스트
"""

import logging

import pytest

from plonkit import cli
from plonkit.config import DEFAULTS, SETUP_MAX_POW2, SETUP_MIN_POW2, load_settings
from plonkit.utils import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_bounds():
    assert (SETUP_MIN_POW2, SETUP_MAX_POW2) == (4, 26)


def test_default_file_names():
    assert DEFAULTS.proof_bin == "proof.bin"
    assert DEFAULTS.vk_bin == "vk.bin"
    with pytest.raises(AttributeError):
        DEFAULTS.proof_bin = "other.bin"


def test_settings_from_environment():
    settings = load_settings({"PLONKIT_LOG_LEVEL": "debug", "PLONKIT_LOG_FILE": "/tmp/p.log"})
    assert settings.log_level == "DEBUG"
    assert settings.log_file == "/tmp/p.log"


def test_settings_defaults():
    settings = load_settings({})
    assert settings.log_level == "INFO"
    assert settings.log_file is None


def test_unknown_log_level_rejected():
    with pytest.raises(ValueError, match="PLONKIT_LOG_LEVEL"):
        load_settings({"PLONKIT_LOG_LEVEL": "verbose"})


def test_setup_logging_with_file(tmp_path, root_logger):
    log_file = tmp_path / "logs" / "plonkit.log"
    setup_logging("debug", str(log_file))
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 2

    logging.getLogger("plonkit.test").info("hello")
    for handler in root_logger.handlers:
        handler.flush()
    assert "plonkit.test - INFO - hello" in log_file.read_text()


def test_bare_public_flag():
    args = cli.build_parser().parse_args(["verify", "-i"])
    assert args.public == DEFAULTS.public
    assert cli.build_parser().parse_args(["verify"]).public is None
