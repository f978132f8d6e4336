"""The settings module provides the Settings and Config classes.

Settings holds the branch and tag naming conventions. Config reads them from
the optional ``.flow-version/config`` file of a repository.
"""

import os
from configparser import ConfigParser
from dataclasses import dataclass, replace

from flow_version.exceptions import ConfigurationError

CONFIG_DIR = '.flow-version'
CONFIG_SECTION = 'flow-version'

PRE_RELEASE_DELIMITER = '-'
# git remote-tracking refs are always <remote>/<branch>
REMOTE_DELIMITER = '/'


@dataclass(frozen=True)
class Settings:
    """
    Naming conventions of a GitFlow style repository.

    Attributes:
        develop_branch (str): Mainline development branch name
        branch_delimiter (str): Delimiter after the branch type segment
            (``feature/login``)
        remote (str): Remote whose tracking develop branch is preferred
        release_candidate_label (str): Pre-release label of release candidate tags
    """
    develop_branch: str = 'develop'
    branch_delimiter: str = '/'
    remote: str = 'origin'
    release_candidate_label: str = 'rc'

    def __post_init__(self):
        for key in ('develop_branch', 'branch_delimiter', 'remote', 'release_candidate_label'):
            if not getattr(self, key):
                raise ConfigurationError(
                    f"Setting '{key}' cannot be empty", context={'key': key})

    @property
    def pre_release_delimiter(self) -> str:
        return PRE_RELEASE_DELIMITER

    @property
    def remote_develop_branch(self) -> str:
        "Returns the friendly name of the remote-tracking develop branch (origin/develop)"
        return f"{self.remote}{REMOTE_DELIMITER}{self.develop_branch}"


class Config:
    """
    Reads the flow-version configuration file of a repository.

    The file is optional. Any key it does not define keeps its default value.

    Example of ``.flow-version/config``::

        [flow-version]
        develop_branch = dev
        remote = upstream
    """
    def __init__(self, base_dir, **overrides):
        self.__file = os.path.join(base_dir, CONFIG_DIR, 'config')
        self.__values = {}
        if os.path.exists(self.__file):
            self.read()
        self.__values.update({key: value for key, value in overrides.items() if value is not None})

    def read(self):
        "Loads the [flow-version] section of the config file."
        config = ConfigParser()
        config.read(self.__file, encoding='utf-8')
        if not config.has_section(CONFIG_SECTION):
            raise ConfigurationError(
                f"Missing [{CONFIG_SECTION}] section in {self.__file}",
                context={'file': self.__file})
        section = config[CONFIG_SECTION]
        for key in ('develop_branch', 'branch_delimiter', 'remote', 'release_candidate_label'):
            if key in section:
                self.__values[key] = section[key].strip()

    @property
    def file(self):
        return self.__file

    @property
    def settings(self) -> Settings:
        "Returns the Settings built from the defaults, the file and the overrides."
        return replace(Settings(), **self.__values)
