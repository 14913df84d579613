import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(debug: bool = False) -> int:
    """
    루트 로거를 stdout 으로 설정하고 적용된 레벨을 돌려준다.
    (-d 플래그가 있으면 DEBUG, 없으면 INFO)
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
    # basicConfig 는 이미 핸들러가 있으면 아무 것도 하지 않으므로 레벨은 따로 맞춘다.
    logging.getLogger("gfpub").setLevel(level)
    return level


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
