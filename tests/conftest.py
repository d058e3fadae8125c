"""Test configuration and fixtures for repoconf tests.

Provides temporary directories, a helper that writes ``.repo`` files, and
pre-loaded stores. All test modules should use the fixtures defined here for
consistency.
"""

import pytest
import tempfile
import shutil
import logging
from pathlib import Path
from typing import Callable

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from repoconf.config import ConfigManager
from repoconf.core.repoconf import RepoConf, RepoConfs

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


SIMPLE_REPO = """\
[base]
name = Base OS
baseurl = http://mirror.example.com/base/
enabled = 1
gpgcheck = 1
"""


@pytest.fixture(scope="session")
def fixtures_dir():
    """Provides path to the static test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def repos_fixture_dir(fixtures_dir):
    """Provides path to the sample ``.repo`` files."""
    return fixtures_dir / "repos"


@pytest.fixture
def temp_dir():
    """Creates a temporary directory for test operations."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def write_repo(temp_dir) -> Callable[..., Path]:
    """Returns a helper writing ``content`` to ``temp_dir/name``."""
    def _write(name: str, content: str, directory: Path = None) -> Path:
        target_dir = directory or temp_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def store() -> RepoConfs:
    """Creates an empty store."""
    return RepoConfs()


@pytest.fixture
def make_repo(store, write_repo) -> Callable[[str], RepoConf]:
    """Returns a helper that parses ``content`` and returns its first section."""
    counter = {"n": 0}

    def _make(content: str) -> RepoConf:
        counter["n"] += 1
        path = write_repo(f"sample{counter['n']}.repo", content)
        return store.parse(path)[0]
    return _make


@pytest.fixture
def base_repo(make_repo) -> RepoConf:
    """A parsed ``[base]`` section with a handful of options set."""
    return make_repo(SIMPLE_REPO)


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    """Points ConfigManager at an empty user config dir and resets the singleton."""
    user_dir = temp_dir / "user-config"
    user_dir.mkdir()
    monkeypatch.setenv("REPOCONF_CONFIG_DIR", str(user_dir))
    ConfigManager.reset()
    yield user_dir
    ConfigManager.reset()
