import pytest
from pathlib import Path
from envseal.lib.environment import Environment

@pytest.fixture
def env(tmp_path: Path) -> Environment:
    project = tmp_path / 'myproject'
    project.mkdir()
    return Environment(home=tmp_path / 'home', project_dir=project)

@pytest.fixture
def dotenv(env: Environment) -> Path:
    target = env.project_dir / '.env'
    target.write_text('secret=1', encoding='utf-8')
    return target

@pytest.fixture
def operator():
    return lambda: 'Ada Lovelace <ada@example.com>'
