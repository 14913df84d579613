"""
gfpub
-----

Google Cloud Functions 일괄 배포 CLI 패키지.
프로젝트 루트의 gfpub.json 에 나열된 함수 폴더마다
`gcloud functions deploy` 를 순서대로 실행하는 것을 목표로 한다.
"""

__all__ = [
    "config",
    "bootstrap",
    "deployer",
]

__version__ = "0.1.0"
