"""공유 유틸리티 - CLI와 분석 코어에서 공통 사용.

- io: 입출력 유틸리티 (출력 설정, 파일 저장)

의존성 구조:
    core (분석 코어)
       ↑
    shared (공유 유틸리티)
       ↑
    cli
"""

from . import io

__all__ = ["io"]
