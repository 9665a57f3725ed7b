import shutil
import tempfile
from pathlib import Path

import pytest

from phpfix_core import logger
from phpfix_core.whitespaces_config import ConfigStore


@pytest.fixture
def temp_dir():
    path = Path(tempfile.mkdtemp(prefix='phpfix_test_'))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture(autouse=True, scope='session')
def session_log_dir(tmp_path_factory):
    """Send the debug log of the whole test run to a scratch directory."""
    mp = pytest.MonkeyPatch()
    mp.setenv(logger.LOG_DIR_ENV, str(tmp_path_factory.mktemp('logs')))
    logger.reset()
    yield
    logger.reset()
    mp.undo()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Keep a phpfix.json in the checkout from leaking into tests."""
    ConfigStore.reset(tmp_path / 'no-such-phpfix.json')
    yield
    ConfigStore.reset()
