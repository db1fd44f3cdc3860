"""
Test API Key Resolution
========================
Provider order, key file handling and setkey storage.
"""

import os
import stat
import pytest
from unittest.mock import patch

from hchk.api.credentials import (
    env_provider,
    file_provider,
    resolve_api_key,
    save_api_key,
)
from hchk.api.errors import CredentialError, ValidationError


class TestProviders:
    """Test individual key providers."""

    @patch.dict('os.environ', {'HCHK_API_KEY': 'env-key'})
    def test_env_provider_reads_variable(self):
        assert env_provider('HCHK_API_KEY')() == 'env-key'

    @patch.dict('os.environ', {'HCHK_API_KEY': '   '})
    def test_env_provider_blank_is_none(self):
        assert env_provider('HCHK_API_KEY')() is None

    @patch.dict('os.environ', {}, clear=True)
    def test_env_provider_missing_is_none(self):
        assert env_provider('HCHK_API_KEY')() is None

    def test_file_provider_strips_whitespace(self, tmp_path):
        key_file = tmp_path / 'key'
        key_file.write_text('file-key\n')
        assert file_provider(str(key_file))() == 'file-key'

    def test_file_provider_missing_file_is_none(self, tmp_path):
        assert file_provider(str(tmp_path / 'missing'))() is None

    def test_file_provider_empty_file_is_none(self, tmp_path):
        key_file = tmp_path / 'key'
        key_file.write_text('')
        assert file_provider(str(key_file))() is None


class TestResolveApiKey:
    """Test ordered resolution."""

    def test_first_provider_wins(self):
        assert resolve_api_key([lambda: 'first', lambda: 'second']) == 'first'

    def test_falls_through_empty_providers(self):
        assert resolve_api_key([lambda: None, lambda: '', lambda: 'third']) == 'third'

    def test_no_key_raises_with_instructions(self):
        with pytest.raises(CredentialError, match="environment variable or run `hchk setkey`"):
            resolve_api_key([lambda: None])

    def test_env_preferred_over_file(self, tmp_path):
        key_file = tmp_path / 'key'
        key_file.write_text('file-key')
        with patch.dict('os.environ', {'HCHK_API_KEY': 'env-key'}):
            key = resolve_api_key([env_provider('HCHK_API_KEY'), file_provider(str(key_file))])
        assert key == 'env-key'

    @patch.dict('os.environ', {}, clear=True)
    def test_file_used_when_env_unset(self, tmp_path):
        key_file = tmp_path / 'key'
        key_file.write_text('file-key')
        key = resolve_api_key([env_provider('HCHK_API_KEY'), file_provider(str(key_file))])
        assert key == 'file-key'

    def test_credential_error_is_validation_error(self):
        assert issubclass(CredentialError, ValidationError)


class TestSaveApiKey:
    """Test writing the key file."""

    def test_writes_key(self, tmp_path):
        key_file = tmp_path / 'hchk'
        path = save_api_key('  new-key  ', str(key_file))
        assert path == key_file
        assert key_file.read_text() == 'new-key\n'

    def test_overwrites_existing(self, tmp_path):
        key_file = tmp_path / 'hchk'
        key_file.write_text('old-key\nextra\n')
        save_api_key('new-key', str(key_file))
        assert file_provider(str(key_file))() == 'new-key'

    def test_creates_parent_directories(self, tmp_path):
        key_file = tmp_path / 'nested' / 'dir' / 'hchk'
        save_api_key('new-key', str(key_file))
        assert key_file.exists()

    @pytest.mark.skipif(os.name == 'nt', reason="POSIX permissions")
    def test_owner_only_permissions(self, tmp_path):
        key_file = tmp_path / 'hchk'
        save_api_key('new-key', str(key_file))
        mode = stat.S_IMODE(key_file.stat().st_mode)
        assert mode == 0o600

    @pytest.mark.parametrize("key", ['', '   ', None])
    def test_empty_key_rejected(self, tmp_path, key):
        key_file = tmp_path / 'hchk'
        with pytest.raises(ValidationError, match="cannot be empty"):
            save_api_key(key, str(key_file))
        assert not key_file.exists()
