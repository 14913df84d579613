"""
bootstrap
---------

설정 파일(gfpub.json)이 없을 때 사용자에게 질문하여 파일을 만들어 주는 대화형 흐름.

부트스트랩을 실행한 호출에서는 배포로 넘어가지 않는다.
사용자가 파일을 확인/수정한 뒤 명령을 다시 실행해야 한다.
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from typing import List, Optional, Sequence

import click

from .config import (
    DEFAULT_FLAGS,
    AppSettings,
    FunctionsConfig,
    build_config_object,
    save_config_file,
)
from .logging_utils import get_logger
from .subprocess_utils import CommandError, run_command


logger = get_logger(__name__)


@dataclass(frozen=True)
class FolderChoice:
    title: str
    value: str


def get_local_folders(base_dir: Optional[str] = None) -> List[FolderChoice]:
    """
    작업 디렉토리의 하위 디렉토리를 선택지로 만든다. (이름순)
    """
    root = base_dir or os.getcwd()
    choices: List[FolderChoice] = []
    with os.scandir(root) as it:
        for entry in it:
            if entry.is_dir(follow_symlinks=False):
                choices.append(FolderChoice(title=entry.name, value=entry.name))
    return sorted(choices, key=lambda c: c.title)


def _parse_selection(raw: str, count: int) -> List[int]:
    """
    "1,3" / "1 3" 형태의 입력을 0-based 인덱스 목록으로 바꾼다.
    범위를 벗어나거나 숫자가 아니면 click.BadParameter 를 던진다.
    """
    indexes: List[int] = []
    for token in raw.replace(",", " ").split():
        if not token.isdecimal() or not 1 <= int(token) <= count:
            raise click.BadParameter(f"1 ~ {count} 사이의 번호를 입력하세요: {token}")
        idx = int(token) - 1
        if idx not in indexes:
            indexes.append(idx)
    return indexes


def prompt_folders(choices: Sequence[FolderChoice]) -> List[str]:
    """
    번호 목록을 보여주고 여러 폴더를 선택받는다. 빈 입력은 선택 없음.
    """
    if not choices:
        click.echo("선택할 수 있는 하위 폴더가 없습니다.")
        return []

    click.secho("Select one or more function folders to deploy:", fg="green")
    for i, choice in enumerate(choices, start=1):
        click.echo(f"  {i}) {choice.title}")

    while True:
        raw = click.prompt(
            "번호 (쉼표/공백 구분, 없으면 Enter)",
            default="",
            show_default=False,
        )
        try:
            indexes = _parse_selection(raw, len(choices))
        except click.BadParameter as e:
            click.echo(f"Error: {e.message}", err=True)
            continue
        return [choices[i].value for i in indexes]


def assemble_config(folders: Sequence[str], use_default_flags: bool) -> FunctionsConfig:
    cfg = build_config_object()
    # 빈 선택도 허용한다. 이후 배포 전 검증 단계에서 걸러진다.
    cfg.function_folders = list(folders)
    if use_default_flags:
        logger.debug("Using default flags")
        cfg.flags.extend(DEFAULT_FLAGS)
    return cfg


def open_in_editor(config_file_path: str, settings: AppSettings) -> bool:
    try:
        run_command([*shlex.split(settings.editor_command), config_file_path])
    except CommandError as e:
        logger.error("에디터 실행 실패: %s", e)
        return False
    return True


def run_bootstrap(config_file_path: str, settings: AppSettings) -> int:
    """
    설정 파일 생성 흐름을 실행하고 프로세스 종료 코드를 돌려준다.

    - 사용자가 생성을 거절: 0
    - 저장 후 VS Code 에서 파일을 열었음: 0
    - 저장 후 직접 편집 안내: 1 (재실행을 강제)
    - 저장 실패 / 에디터 실행 실패: 1
    """
    logger.info("설정 파일이 없습니다: %s", config_file_path)
    logger.info(
        "이 도구는 많은 명령행 인자 대신 설정 파일을 사용합니다. "
        "다음 단계에서 설정 파일을 자동으로 만들어 드립니다."
    )
    logger.info("생성이 끝나면 파일을 편집해 기본값을 바꾼 뒤 명령을 다시 실행하세요.")

    if not click.confirm(click.style("Create configuration file?", fg="green"), default=True):
        logger.info("Exiting...")
        return 0

    use_default_flags = click.confirm(click.style("Use default flags?", fg="green"), default=True)
    folders = prompt_folders(get_local_folders())

    cfg = assemble_config(folders, use_default_flags)
    logger.debug("Config object: %s", cfg)

    if not save_config_file(config_file_path, cfg):
        return 1

    if settings.in_vscode_terminal:
        return 0 if open_in_editor(config_file_path, settings) else 1

    logger.info("에디터에서 %s 를 열어 프로젝트 설정을 편집하세요.", config_file_path)
    return 1
