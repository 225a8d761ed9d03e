"""Operator identity (who performed an encryption), taken from git config."""
from __future__ import annotations
import os, subprocess
from pathlib import Path
from config.settings import OPERATOR_ENV
from .errors import IdentityUnavailable

def _git_config(name: str, cwd: Path | None) -> str:
	try:
		out = subprocess.run(['git', 'config', name], cwd=cwd, capture_output=True, text=True, check=True)
	except (OSError, subprocess.CalledProcessError):
		return ''
	return out.stdout.strip()

def resolve_operator(cwd: Path | None = None) -> str:
	override = os.environ.get(OPERATOR_ENV, '').strip()
	if override:
		return override
	name = _git_config('user.name', cwd); email = _git_config('user.email', cwd)
	if not name or not email:
		raise IdentityUnavailable('Git is not configured properly. Please set up git with your username and email.')
	return f'{name} <{email}>'
