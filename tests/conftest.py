# conftest.py - pytest configuration
import pytest


@pytest.fixture(autouse=True)
def central_repo(tmp_path_factory, monkeypatch):
    """Point the central repository at a temp dir so tests never touch ~/.script_kb."""
    repo = tmp_path_factory.mktemp("central_repo")
    monkeypatch.setenv("SCRIPT_KB_REPO", str(repo))
    return repo
