import json
from domain.constants import get_app_config


def test_defaults_file_and_environment(tmp_path, monkeypatch):
    (tmp_path / 'app_config.json').write_text(json.dumps({'backend': 'rpc', 'unknown': 1}), encoding='utf-8')
    monkeypatch.setenv('DEEDS_DATA_DIR', str(tmp_path))
    monkeypatch.delenv('DEEDS_BACKEND', raising=False)
    config = get_app_config()
    assert config['backend'] == 'rpc'
    assert 'unknown' not in config
    assert config['log_level']

    monkeypatch.setenv('DEEDS_BACKEND', 'local')
    monkeypatch.setenv('DEEDS_CONTRACT', 'other.testnet')
    config = get_app_config()
    assert config['backend'] == 'local'
    assert config['contract_name'] == 'other.testnet'
