from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Empty repository under tmp_path; tests write the files they need."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def sample_repo(repo_builder: RepoBuilder) -> RepoBuilder:
    """Small mixed-language project with one secret and one test file."""
    repo_builder.write(
        {
            "README.md": """
            # Sample

            ## Installation
            pip install sample
            """,
            "requirements.txt": "requests\npyyaml\n",
            "sample/app.py": """
            # entry point
            API_TOKEN = "sk-proj-abcdefghijklmnopqrstuvwx"

            def main():
                return 1000
            """,
            "tests/test_app.py": "def test_main():\n    assert True\n",
            "web/index.js": "function render(el) {\n  el.textContent = 'hi';\n}\n",
        }
    )
    return repo_builder


@pytest.fixture(autouse=True)
def _reset_gitgrade_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("gitgrade")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
