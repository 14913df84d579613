"""
validation
----------

배포 전에 설정 값(함수 폴더, 플래그)을 점검하는 술어 함수들.
실패 시 로그만 남기고 False 를 돌려주며, 종료는 CLI 가 담당한다.
"""

from __future__ import annotations

import os
import stat
from typing import List, Optional, Sequence

from .logging_utils import get_logger


logger = get_logger(__name__)


def directory_exists(path: str) -> bool:
    # 심볼릭 링크는 따라가지 않는다.
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.error("디렉토리 확인 실패: %s (%s)", path, e)
        return False


def is_folder_array_valid(
    field_name: str,
    folders: Sequence[str],
    base_dir: Optional[str] = None,
) -> bool:
    """
    모든 폴더가 base_dir(기본: 현재 디렉토리) 아래에 디렉토리로 존재하는지 확인한다.

    첫 번째 오류에서 멈추지 않고 잘못된 항목을 모두 모아 한 번에 보고한다.
    """
    if not folders:
        logger.error("설정 항목 %s 이(가) 비어 있습니다.", field_name)
        return False

    root = base_dir or os.getcwd()
    missing: List[str] = [
        folder for folder in folders if not directory_exists(os.path.join(root, folder))
    ]
    if missing:
        logger.error(
            "설정 항목 %s 에 존재하지 않는 폴더가 포함되어 있습니다.", field_name
        )
        label = "Folders" if len(missing) > 1 else "Folder"
        logger.error("%s: %s", label, ", ".join(missing))
    return not missing


def is_flag_array_valid(flags: Sequence[str]) -> bool:
    # 개별 플래그 문자열은 그대로 전달하므로 내용은 검사하지 않는다.
    if not flags:
        logger.error("설정 파일의 flags 배열이 비어 있습니다.")
        return False
    return True
