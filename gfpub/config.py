from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .logging_utils import get_logger


logger = get_logger(__name__)


APP_NAME = "Publish Google Functions"
APP_SHORT_NAME = "gfpub"
APP_CONFIG_FILE = "gfpub.json"

# 기본 배포 플래그 (부트스트랩에서 "Use default flags?" 에 동의한 경우)
DEFAULT_FLAGS: List[str] = [
    "--region=us-east1",
    "--runtime=nodejs20",
    "--trigger-http",
    "--allow-unauthenticated",
]

ENV_FILES_DEFAULT_ORDER = [".env", ".env.gfpub"]

FOLDERS_KEY = "functionFolders"
FLAGS_KEY = "flags"


class ConfigFileError(RuntimeError):
    """설정 파일을 읽을 수 없거나 JSON/형식이 올바르지 않을 때 발생."""


def load_env_files(base_dir: str = ".",
                   files: Optional[List[str]] = None) -> None:
    """
    주어진 디렉토리에서 .env 계열 파일을 순서대로 로드한다.
    후순위 파일이 같은 키를 덮어쓴다.
    """
    order = files or ENV_FILES_DEFAULT_ORDER
    for name in order:
        path = os.path.join(base_dir, name)
        if os.path.exists(path):
            load_dotenv(path, override=True)


@dataclass
class AppSettings:
    config_file: str = APP_CONFIG_FILE
    editor_command: str = "code"
    term_program: Optional[str] = None

    @property
    def in_vscode_terminal(self) -> bool:
        return self.term_program == "vscode"

    @classmethod
    def from_env(cls) -> "AppSettings":
        return cls(
            config_file=os.getenv("GFPUB_CONFIG_FILE") or APP_CONFIG_FILE,
            editor_command=os.getenv("GFPUB_EDITOR") or "code",
            term_program=os.getenv("TERM_PROGRAM"),
        )


def _string_list(raw: Dict[str, Any], key: str) -> List[str]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigFileError(f"{key} 는 문자열 배열이어야 합니다: {value!r}")
    return list(value)


@dataclass
class FunctionsConfig:
    # 배포할 함수 폴더 목록 (작업 디렉토리 기준 상대 경로)
    function_folders: List[str] = field(default_factory=list)
    # gcloud functions deploy 에 그대로 전달되는 플래그
    flags: List[str] = field(default_factory=list)
    # 해석하지 않는 나머지 키 (읽은 그대로 보존)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> "FunctionsConfig":
        if not isinstance(raw, dict):
            raise ConfigFileError("설정 파일의 최상위 값은 JSON 객체여야 합니다.")
        extra = {k: v for k, v in raw.items() if k not in (FOLDERS_KEY, FLAGS_KEY)}
        return cls(
            function_folders=_string_list(raw, FOLDERS_KEY),
            flags=_string_list(raw, FLAGS_KEY),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            FOLDERS_KEY: list(self.function_folders),
            FLAGS_KEY: list(self.flags),
        }
        data.update(self.extra)
        return data


def build_config_object() -> FunctionsConfig:
    """
    기본(빈) 설정 객체. 설정 파일이 없을 때 부트스트랩의 시드로만 사용한다.
    """
    return FunctionsConfig(function_folders=[], flags=[])


def read_config_file(config_file_path: str) -> FunctionsConfig:
    try:
        with open(config_file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise ConfigFileError(f"설정 파일을 찾을 수 없습니다: {config_file_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigFileError(
            f"설정 파일이 올바른 JSON 이 아닙니다: {config_file_path} ({e})"
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigFileError(
            f"설정 파일이 UTF-8 로 인코딩되어 있지 않습니다: {config_file_path} ({e})"
        ) from e
    except OSError as e:
        raise ConfigFileError(f"설정 파일을 읽을 수 없습니다: {config_file_path} ({e})") from e

    cfg = FunctionsConfig.from_dict(raw)
    logger.debug("Config loaded: %s", cfg)
    return cfg


def serialize_config(cfg: FunctionsConfig) -> str:
    """
    들여쓰기된 JSON 으로 직렬화한 뒤 역슬래시를 슬래시로 바꾼다.
    (Windows 경로가 이중 역슬래시로 저장되지 않도록 `//` 도 `/` 로 합친다)
    """
    output = json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False)
    output = output.replace("\\", "/")
    return output.replace("//", "/")


def save_config_file(config_file_path: str, cfg: FunctionsConfig) -> bool:
    """
    설정 파일을 쓴다. 기존 파일은 확인 없이 덮어쓴다.

    실패 시 예외 대신 False 를 돌려주어 종료 방식은 호출자가 결정하게 한다.
    """
    logger.info("설정 파일 작성: %s", config_file_path)
    try:
        with open(config_file_path, "w", encoding="utf-8") as f:
            f.write(serialize_config(cfg))
    except OSError as e:
        logger.error("설정 파일을 쓸 수 없습니다: %s (%s)", config_file_path, e)
        return False
    logger.info("설정 파일을 저장했습니다.")
    return True
