import os
import sys

import click

from . import __version__
from .bootstrap import run_bootstrap
from .config import (
    APP_NAME,
    FOLDERS_KEY,
    AppSettings,
    ConfigFileError,
    load_env_files,
    read_config_file,
)
from .deployer import deploy_all
from .logging_utils import get_logger, setup_logging
from .subprocess_utils import CommandError
from .validation import is_flag_array_valid, is_folder_array_valid


logger = get_logger(__name__)


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.option(
    "-C",
    "--chdir",
    "chdir",
    type=click.Path(file_okay=False, dir_okay=True, exists=True),
    default=".",
    help="작업 디렉토리 (기본: 현재 디렉토리)",
)
@click.option(
    "-d",
    "--debug",
    is_flag=True,
    help="로그 레벨을 DEBUG로 올립니다.",
)
@click.version_option(__version__, prog_name="gfpub")
def main(chdir: str, debug: bool) -> None:
    """gfpub.json 에 나열된 Google Cloud Functions 폴더를 순서대로 배포하는 CLI"""
    setup_logging(debug)
    os.chdir(chdir)

    click.secho(f"\n  {APP_NAME}  \n", fg="green", bold=True)
    logger.debug("Debug mode enabled")
    logger.debug("Working directory: %s", os.getcwd())

    load_env_files(".")
    settings = AppSettings.from_env()

    config_file_path = os.path.join(os.getcwd(), settings.config_file)
    logger.info("Configuration path: %s", config_file_path)

    if not os.path.exists(config_file_path):
        # 부트스트랩을 실행한 호출은 배포로 넘어가지 않는다.
        sys.exit(run_bootstrap(config_file_path, settings))

    try:
        cfg = read_config_file(config_file_path)
    except ConfigFileError as e:
        click.echo(f"[ERROR] 설정 로드 실패: {e}", err=True)
        sys.exit(1)

    if not is_folder_array_valid(FOLDERS_KEY, cfg.function_folders):
        logger.error("설정 파일의 functionFolders 배열이 올바르지 않아 종료합니다.")
        sys.exit(1)

    if not is_flag_array_valid(cfg.flags):
        sys.exit(1)

    try:
        deploy_all(cfg)
    except CommandError as e:
        click.echo(f"[ERROR] Command error: {e}", err=True)
        sys.exit(1)
    except Exception as e:  # noqa: BLE001
        logger.exception("배포 중 오류 발생")
        click.echo(f"[ERROR] 배포 실패: {e}", err=True)
        sys.exit(1)
