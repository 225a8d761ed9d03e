"""CLI for envseal, implemented with click.

One action per invocation. Running two invocations against the same project
at once is unsupported: the key file and the protected file are
last-writer-wins.
"""
from __future__ import annotations
import logging, click
from pathlib import Path
from config.settings import DEFAULT_TARGET, LOG_LEVEL, LOG_FORMAT
from envseal.lib.environment import Environment
from envseal.lib.operations import ACTIONS, run_action

USAGE = 'Usage: envseal [' + '|'.join(ACTIONS) + '] [--file PATH] [--project-dir DIR] [--verbose]'

def _configure_logging(verbose: bool) -> None:
	level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL, logging.WARNING)
	logging.basicConfig(level=level, format=LOG_FORMAT)
	logging.getLogger('envseal').setLevel(level)

@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('action', required=False)
@click.option('--file', 'target', type=click.Path(dir_okay=False, path_type=Path), default=Path(DEFAULT_TARGET), show_default=True, help='Protected file, relative to the project directory.')
@click.option('--project-dir', type=click.Path(file_okay=False, path_type=Path), default=None, help='Project directory; its name namespaces the key. Defaults to the current directory.')
@click.option('-v', '--verbose', is_flag=True, help='Debug logging on stderr.')
def cli(action, target, project_dir, verbose):
	"""Encrypt, decrypt or rotate the key of a project's secrets file.

	ACTION is one of encrypt, decrypt, rotate or status.
	"""
	_configure_logging(verbose)
	if action not in ACTIONS:
		click.echo(USAGE)
		return
	env = Environment.from_process(project_dir)
	try:
		outcome = run_action(action, env, target)
	except OSError as e:
		click.echo(f'Error: {e}', err=True)
		raise SystemExit(1)
	if not outcome.ok:
		click.echo(f'Error: {outcome.message}', err=True)
		raise SystemExit(1)
	click.echo(outcome.message)
