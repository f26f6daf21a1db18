import json
import logging
from typing import Union

logger = logging.getLogger("altern")
logger.setLevel(logging.WARNING)
# Handler設定は利用側の環境に依存するため、ここでは標準出力への出力のみを想定
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)

def configure_logging(config) -> None:
    """
    InterleaveConfig に従ってロガーのレベルを設定する。
    trace_exhaustion が有効な場合は Producer の枯渇イベントまで出力する (DEBUG)。
    """
    if config.trace_exhaustion:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(config.log_level.upper())

def log_producer_exhausted(combinator: str, slot: Union[str, int], live_producers: int):
    """
    Producer の枯渇を構造化ログ(JSON)として出力する。
    """
    # next() のたびに呼ばれ得るため、無効時は JSON 化しない
    if not logger.isEnabledFor(logging.DEBUG):
        return

    log_data = {
        "event": "producer_exhausted",
        "combinator": combinator,
        "slot": slot,
        "live_producers": live_producers,
    }

    logger.debug(json.dumps(log_data))

def log_config_fallback(reason: str):
    log_data = {
        "event": "config_fallback",
        "reason": reason,
    }

    logger.warning(json.dumps(log_data))
