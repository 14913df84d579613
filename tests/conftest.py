"""
pytest 설정:

로컬 작업 환경에 다른 버전의 gfpub 패키지가 설치되어 있으면
site-packages 쪽이 먼저 import 되어 테스트가 깨질 수 있으므로 repo root 를 sys.path 최상단에 고정한다.

또한 개발자 셸의 TERM_PROGRAM / GFPUB_* 값이 테스트에 새어 들어오지 않도록 비운다.
"""

from __future__ import annotations

import os
import sys

import pytest


def pytest_configure() -> None:
    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TERM_PROGRAM", "GFPUB_CONFIG_FILE", "GFPUB_EDITOR"):
        monkeypatch.delenv(name, raising=False)
