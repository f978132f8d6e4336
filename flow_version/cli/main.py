"""
Main CLI module - the flow-version command

Thin CLI layer: loads the repository with HGit, reads the configuration and
delegates to VersionDerivationEngine and VersionCalculator.
"""

import json
from typing import Optional

import click

from flow_version import __version__, utils
from flow_version.calculator import VersionCalculator
from flow_version.engine import VersionDerivationEngine
from flow_version.exceptions import FlowVersionError
from flow_version.hgit import HGit
from flow_version.settings import Config


@click.command('flow-version')
@click.argument('path', type=str, default='.')
@click.option(
    '--branch', '-b',
    type=str,
    default='',
    help='Branch to compute the version for (a unique end of its name is enough). '
         'Required on a detached HEAD shared by several branches.'
)
@click.option(
    '--develop-branch',
    type=str,
    default=None,
    help='Name of the mainline development branch (default: develop)'
)
@click.option(
    '--remote',
    type=str,
    default=None,
    help='Remote whose develop branch is preferred (default: origin)'
)
@click.option(
    '--json', 'as_json',
    is_flag=True,
    help='Output all version variables as JSON'
)
@click.option(
    '--full/--short',
    default=True,
    help='Include the commit sha as build metadata (default: --full)'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Show how the version was derived'
)
@click.version_option(__version__, prog_name='flow-version')
def main(path: str, branch: str, develop_branch: Optional[str], remote: Optional[str],
         as_json: bool, full: bool, verbose: bool) -> None:
    """
    Compute the version number of a GitFlow repository.

    The version is derived from the current branch, the highest release tag
    (<major>.<minor>.<patch>) visible from it and the number of commits since
    that tag and since the branch-off from develop.

    Examples:
        $ flow-version
        1.5.0-dev.12+3f2a9c1

        $ flow-version path/to/repo --branch release/1.5 --short
        1.5.0-rc.2.4

        $ flow-version --json
    """
    try:
        repository = HGit.load(path)
        settings = Config(
            repository.base_dir, develop_branch=develop_branch, remote=remote).settings
        if repository.remote_names and settings.remote not in repository.remote_names:
            utils.warning(
                f"No remote '{settings.remote}', only the local "
                f"'{settings.develop_branch}' branch can be used.\n")

        engine = VersionDerivationEngine(repository, branch, settings)
        calculator = VersionCalculator(engine)

        if verbose:
            _display_derivation(engine)

        if as_json:
            click.echo(json.dumps(calculator.as_dict(), indent=2))
        else:
            click.echo(calculator.full_semver if full else calculator.semver)

    except FlowVersionError as e:
        raise click.ClickException(str(e))


def _display_derivation(engine: VersionDerivationEngine):
    """Display the facts the version is built from."""
    branch = engine.current_branch
    click.echo(f"📍 {utils.Color.bold('Branch:')} {branch.short_name} ({branch.branch_type.value})", err=True)
    click.echo(f"🏷  {utils.Color.bold('Release:')} {engine.current_release_version}", err=True)
    click.echo(
        f"   {utils.Color.bold('Commits since release:')} "
        f"{engine.commit_count_since_last_release_version}", err=True)
    click.echo(f"   {utils.Color.bold('Head:')} {engine.head_commit_hash[0:8]}", err=True)
