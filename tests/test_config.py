import logging
import pytest
import time
from unittest.mock import patch
from altern.config import ConfigManager, InterleaveConfig

@pytest.fixture
def mock_ssm_client():
    with patch('altern.config.boto3.client') as mock:
        yield mock.return_value

def test_default_values(mock_ssm_client):
    """設定が取得できない場合、安全なデフォルト値を返すこと"""
    mock_ssm_client.get_parameters.side_effect = Exception("SSM Error")

    manager = ConfigManager()
    config = manager.get_config()

    assert config.log_level == "WARNING"
    assert config.trace_exhaustion is False
    assert config.default_method == "round_robin"

def test_get_config_ssm_success(mock_ssm_client):
    """SSMから設定が正しく取得できること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/altern/log_level', 'Value': 'info'},
            {'Name': '/altern/trace_exhaustion', 'Value': 'TRUE'},
            {'Name': '/altern/default_method', 'Value': 'pairwise'}
        ]
    }

    manager = ConfigManager()
    config = manager.get_config()

    assert config.log_level == "INFO"
    assert config.trace_exhaustion is True
    assert config.default_method == "pairwise"

    mock_ssm_client.get_parameters.assert_called_once()
    names = mock_ssm_client.get_parameters.call_args[1]['Names']
    assert '/altern/default_method' in names

def test_missing_parameters_use_defaults(mock_ssm_client):
    mock_ssm_client.get_parameters.return_value = {'Parameters': []}

    config = ConfigManager().get_config()

    assert config == InterleaveConfig()

def test_get_config_ssm_failure_logs_fallback(mock_ssm_client, caplog):
    """SSM取得失敗時はデフォルト設定を返し、警告ログを出すこと"""
    mock_ssm_client.get_parameters.side_effect = Exception("SSM access failed")

    with caplog.at_level(logging.WARNING, logger="altern"):
        config = ConfigManager().get_config()

    assert config == InterleaveConfig()
    assert any("config_fallback" in record.getMessage() for record in caplog.records)

def test_config_caching(mock_ssm_client):
    """設定がTTL内でキャッシュされること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/altern/default_method', 'Value': 'pairwise'}
        ]
    }

    manager = ConfigManager(ttl_seconds=60)

    config1 = manager.get_config()
    assert config1.default_method == "pairwise"

    config2 = manager.get_config()
    assert config2.default_method == "pairwise"

    # SSMは1回しか呼ばれていないはず
    assert mock_ssm_client.get_parameters.call_count == 1

def test_config_cache_expiration(mock_ssm_client):
    """TTL経過後に再取得すること"""
    mock_ssm_client.get_parameters.return_value = {'Parameters': []}

    manager = ConfigManager(ttl_seconds=0.1)

    manager.get_config()
    time.sleep(0.2) # TTL切れ待ち
    manager.get_config()

    assert mock_ssm_client.get_parameters.call_count == 2
