from __future__ import annotations

import subprocess
from dataclasses import dataclass
from textwrap import shorten
from typing import Optional, Sequence

from .logging_utils import get_logger


logger = get_logger(__name__)


class CommandError(RuntimeError):
    """
    subprocess 실행 계층에서 발생한 오류.
    (명령을 찾을 수 없음 / 0 이 아닌 종료 코드)
    """

    def __init__(self, message: str, *, cmd: Sequence[str], returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.cmd = list(cmd)
        self.returncode = returncode


@dataclass(frozen=True)
class RunResult:
    returncode: int
    stdout: str
    stderr: str


def run_command(
    cmd: Sequence[str],
    *,
    stream_output: bool = False,
) -> RunResult:
    """
    subprocess 실행 공통 유틸.

    - stream_output=False: stdout/stderr 캡처, 실패 시 요약 포함
    - stream_output=True : stdout/stderr 를 터미널에 그대로 연결한다(버퍼링/캡처 없음)

    타임아웃은 두지 않는다. gcloud 배포는 수 분 이상 걸릴 수 있다.
    """
    joined = " ".join(cmd)
    logger.debug("명령 실행: %s", joined)

    try:
        result = subprocess.run(  # noqa: S603
            list(cmd),
            check=True,
            capture_output=not stream_output,
            text=True,
        )
    except FileNotFoundError as e:
        raise CommandError(
            f"필요한 명령을 찾을 수 없습니다: {cmd[0]} (설치되어 있고 PATH 에 있는지 확인하세요)",
            cmd=cmd,
        ) from e
    except subprocess.CalledProcessError as e:
        stdout = (e.stdout or "").strip()
        stderr = (e.stderr or "").strip()
        detail = ""
        if stderr:
            detail = "\nstderr:\n" + shorten(stderr, width=2000)
        elif stdout:
            detail = "\nstdout:\n" + shorten(stdout, width=2000)
        raise CommandError(
            f"명령 실행 실패: {joined} (exit={e.returncode}){detail}",
            cmd=cmd,
            returncode=e.returncode,
        ) from e

    if result.stdout:
        logger.debug("명령 stdout: %s", shorten(result.stdout.strip(), width=2000))
    if result.stderr:
        logger.debug("명령 stderr: %s", shorten(result.stderr.strip(), width=2000))
    return RunResult(
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
    )
