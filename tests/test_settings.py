"""
Tests for Settings and Config.
"""

import os
import shutil
import tempfile
from dataclasses import FrozenInstanceError

import pytest

from flow_version.exceptions import ConfigurationError
from flow_version.settings import Config, Settings


@pytest.fixture
def base_dir():
    """Temporary repository root"""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


def write_config(base_dir, content):
    os.makedirs(os.path.join(base_dir, '.flow-version'))
    with open(os.path.join(base_dir, '.flow-version', 'config'), 'w', encoding='utf-8') as config:
        config.write(content)


class TestSettings:
    """Test the Settings dataclass"""

    def test_defaults(self):
        """Test GitFlow defaults"""
        settings = Settings()

        assert settings.develop_branch == 'develop'
        assert settings.branch_delimiter == '/'
        assert settings.remote == 'origin'
        assert settings.release_candidate_label == 'rc'
        assert settings.pre_release_delimiter == '-'
        assert settings.remote_develop_branch == 'origin/develop'

    def test_remote_develop_branch_ignores_branch_delimiter(self):
        """Test remote-tracking names always use '/'"""
        settings = Settings(branch_delimiter='-', remote='upstream')

        assert settings.remote_develop_branch == 'upstream/develop'

    def test_frozen(self):
        """Test Settings is immutable"""
        with pytest.raises(FrozenInstanceError):
            Settings().remote = 'upstream'

    @pytest.mark.parametrize("key", [
        'develop_branch', 'branch_delimiter', 'remote', 'release_candidate_label'])
    def test_empty_value_rejected(self, key):
        """Test empty values are configuration errors"""
        with pytest.raises(ConfigurationError, match=key):
            Settings(**{key: ''})


class TestConfig:
    """Test reading .flow-version/config"""

    def test_no_file(self, base_dir):
        """Test defaults without a config file"""
        assert Config(base_dir).settings == Settings()

    def test_file_values(self, base_dir):
        """Test values are read from the [flow-version] section"""
        write_config(base_dir, "[flow-version]\ndevelop_branch = dev\nremote = upstream\n")

        settings = Config(base_dir).settings

        assert settings == Settings(develop_branch='dev', remote='upstream')
        assert settings.remote_develop_branch == 'upstream/dev'

    def test_overrides_win(self, base_dir):
        """Test command line values override the file"""
        write_config(base_dir, "[flow-version]\ndevelop_branch = dev\nremote = upstream\n")

        settings = Config(base_dir, develop_branch='main-dev', remote=None).settings

        assert settings.develop_branch == 'main-dev'
        assert settings.remote == 'upstream'

    def test_missing_section(self, base_dir):
        """Test a config file without the section"""
        write_config(base_dir, "[other]\nremote = upstream\n")

        with pytest.raises(ConfigurationError, match=r"\[flow-version\]"):
            Config(base_dir)

    def test_empty_value_in_file(self, base_dir):
        """Test an empty value in the file"""
        write_config(base_dir, "[flow-version]\nrelease_candidate_label =\n")

        with pytest.raises(ConfigurationError):
            Config(base_dir).settings

    def test_file_path(self, base_dir):
        """Test the config file location"""
        assert Config(base_dir).file == os.path.join(base_dir, '.flow-version', 'config')
