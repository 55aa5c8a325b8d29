from pathlib import Path

import pytest

from assetpipe.manager import AssetManager

from tests.infrastructure.project_builders import create_project, make_manager


@pytest.fixture(autouse=True)
def _no_env_override(monkeypatch):
    # the environment must come from the tests, not from the shell
    monkeypatch.delenv("ASSETPIPE_ENV", raising=False)


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Project with assetpipe.yaml and empty search roots."""
    return create_project(tmp_path)


@pytest.fixture
def manager(tmpproj: Path) -> AssetManager:
    """Development-mode manager over tmpproj."""
    return make_manager(tmpproj)


@pytest.fixture
def prod_manager(tmpproj: Path) -> AssetManager:
    return make_manager(tmpproj, environment="production")
