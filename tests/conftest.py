"""
Shared pytest fixtures for hours-parser tests.
"""
import pytest
from loguru import logger


MARCH_LOG = """# Time Sheet - 200

2019/03/05|3h30|note
2019/03/12|45m|note2
2019/04/02|2|april
"""

PLAIN_LOG = """# Project notes

2019/03/01 | 2h 15 | planning
2019/03/20 | 1:45 | review
"""


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """
    Run every test from an empty directory with no settings in the environment.
    """
    for name in ("DEBUG", "HOURS_DEFAULT_RATE", "HOURS_LOG_FILE", "HOURS_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    yield

    logger.remove()


@pytest.fixture
def write_log(tmp_path):
    """
    Write a log.md for the given project under tmp_path/projects.
    """
    def _write_log(project, content, file_name="log.md"):
        project_dir = tmp_path / "projects" / project
        project_dir.mkdir(parents=True, exist_ok=True)
        log_path = project_dir / file_name
        log_path.write_text(content, encoding="utf-8")
        return log_path

    return _write_log


@pytest.fixture
def march_log(write_log):
    return write_log("acme", MARCH_LOG)


@pytest.fixture
def projects_dir(tmp_path, write_log):
    """
    Two billable projects, a folder without a log and a stray file.
    """
    write_log("acme", MARCH_LOG)
    write_log("globex", PLAIN_LOG)
    (tmp_path / "projects" / "archive").mkdir()
    (tmp_path / "projects" / "README.md").write_text("not a project")
    return tmp_path / "projects"


@pytest.fixture
def debug_messages():
    """
    Collect the messages logged at DEBUG level and above.
    """
    messages = []
    logger.remove()
    logger.add(messages.append, level="DEBUG", format="{message}")
    return messages
