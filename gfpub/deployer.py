"""
deployer
--------

설정된 함수 폴더마다 `gcloud functions deploy` 를 순서대로 실행하는 모듈.

폴더 하나의 배포가 끝나야(성공 또는 실패) 다음 폴더로 넘어간다.
각 배포는 프로세스의 작업 디렉토리를 해당 폴더로 옮긴 뒤 실행되므로
동시에 여러 배포를 돌리지 않는다.
"""

from __future__ import annotations

import os
import shlex
from typing import List, Sequence

from .config import APP_SHORT_NAME, FunctionsConfig
from .logging_utils import get_logger
from .subprocess_utils import run_command


logger = get_logger(__name__)


DEPLOY_COMMAND_PREFIX = "gcloud functions deploy"


def build_deploy_command(folder: str, flags: Sequence[str]) -> str:
    flag_str = " ".join(flags)
    return f"{DEPLOY_COMMAND_PREFIX} {folder} {flag_str}"


def deploy_function(folder: str, flags: Sequence[str]) -> None:
    """
    폴더 하나를 배포한다. 실패 시 CommandError 가 그대로 전파된다.

    작업 디렉토리는 성공/실패와 관계없이 호출 전 위치로 되돌린다.
    """
    deploy_cmd = build_deploy_command(folder, flags)
    previous_cwd = os.getcwd()
    os.chdir(folder)
    try:
        logger.info("%s: Deploying the %s function", APP_SHORT_NAME, folder)
        logger.info(deploy_cmd)
        run_command(shlex.split(deploy_cmd), stream_output=True)
    finally:
        os.chdir(previous_cwd)
    logger.info("%s: %s function deployed", APP_SHORT_NAME, folder)


def deploy_all(cfg: FunctionsConfig) -> List[str]:
    """
    function_folders 를 순서대로 배포한다.

    Returns:
        deployed: 배포가 끝난 폴더 목록 (입력 순서 그대로)

    첫 번째 실패에서 예외가 전파되며 남은 폴더는 시도하지 않는다.
    재시도나 부분 성공 요약은 하지 않는다.
    """
    deployed: List[str] = []
    for folder in cfg.function_folders:
        deploy_function(folder, cfg.flags)
        deployed.append(folder)

    logger.info("%s: All functions deployed successfully", APP_SHORT_NAME)
    return deployed
