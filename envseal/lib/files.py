"""Small file helpers shared by the key store, binding records and operations."""
from __future__ import annotations
import os, stat, tempfile
from pathlib import Path

def write_atomic(path: Path, data: bytes, mode: int | None = None) -> None:
	"""Write via a uniquely named sibling temp file and os.replace.

	With `mode` the temp file gets it before the rename, so the final file
	never exists with looser permissions. Without it an existing file keeps
	its current mode and a new one gets 0644.
	"""
	path = Path(path)
	if mode is None:
		mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644
	fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=path.name + '.', suffix='.tmp')
	tmp = Path(tmp_name)
	try:
		with os.fdopen(fd, 'wb') as fh:
			fh.write(data)
		os.chmod(tmp, mode)
		os.replace(tmp, path)
	except OSError:
		tmp.unlink(missing_ok=True)
		raise
