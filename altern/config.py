import time
import boto3
from dataclasses import dataclass
from typing import Optional
from altern.observability.logging import log_config_fallback

@dataclass
class InterleaveConfig:
    log_level: str = "WARNING"
    trace_exhaustion: bool = False
    default_method: str = "round_robin"

class ConfigManager:
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[InterleaveConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> InterleaveConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            config = self._fetch_from_ssm()
            self._cached_config = config
            self._last_fetched_at = current_time
            return config
        except Exception as e:
            log_config_fallback(str(e))
            return self._get_default_config()

    def _fetch_from_ssm(self) -> InterleaveConfig:
        names = [
            '/altern/log_level',
            '/altern/trace_exhaustion',
            '/altern/default_method'
        ]

        response = self._ssm_client.get_parameters(Names=names)
        params = {p['Name']: p['Value'] for p in response.get('Parameters', [])}

        log_level = params.get('/altern/log_level', 'WARNING').upper()

        # trace_exhaustion assumes "true" (case-insensitive) is True
        trace_str = params.get('/altern/trace_exhaustion', 'false').lower()
        trace_exhaustion = trace_str == 'true'

        default_method = params.get('/altern/default_method', 'round_robin')

        return InterleaveConfig(
            log_level=log_level,
            trace_exhaustion=trace_exhaustion,
            default_method=default_method
        )

    def _get_default_config(self) -> InterleaveConfig:
        # トレースなし、ラウンドロビン
        return InterleaveConfig()
