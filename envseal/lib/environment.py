"""Process environment capability: where the key for this project lives."""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from config.settings import KEY_ROOT_DIRNAME, KEY_FILENAME, HOME_ENV

@dataclass(frozen=True)
class Environment:
	home: Path
	project_dir: Path

	@classmethod
	def from_process(cls, project_dir: Path | None = None) -> 'Environment':
		# Resolve dynamically to honor environment overrides in tests
		env_home = os.environ.get(HOME_ENV)
		home = Path(env_home) if env_home else Path.home()
		return cls(home=home, project_dir=Path(project_dir or Path.cwd()).resolve())

	@property
	def project_id(self) -> str:
		return self.project_dir.name

	@property
	def key_dir(self) -> Path:
		return self.home / KEY_ROOT_DIRNAME / self.project_id

	@property
	def key_path(self) -> Path:
		return self.key_dir / KEY_FILENAME
