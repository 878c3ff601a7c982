"""
PR Diff Data Models

Pull Request 메타데이터와 변경 파일 관련 데이터 모델들
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PRReference:
    """분석 대상 Pull Request 좌표"""
    owner: str
    repo: str
    number: int

    def __post_init__(self):
        """데이터 검증"""
        if not self.owner or not self.repo:
            raise ValueError("Owner and repo must be non-empty")
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise ValueError(f"PR number must be an integer, got {self.number!r}")
        if self.number <= 0:
            raise ValueError("PR number must be positive")

    @property
    def full_name(self) -> str:
        """'owner/repo' 형식의 저장소 이름"""
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.full_name}#{self.number}"


@dataclass
class FileChange:
    """파일 변경사항"""
    path: str
    status: str  # 'added', 'modified', 'removed', 'renamed', ...
    additions: int
    deletions: int
    changes: int
    patch: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if not self.path:
            raise ValueError("File path cannot be empty")
        if self.additions < 0 or self.deletions < 0 or self.changes < 0:
            raise ValueError("Line counts must be non-negative")

    @property
    def has_patch(self) -> bool:
        """patch 텍스트 존재 여부 (바이너리/대용량 파일은 없음)"""
        return bool(self.patch)

    @property
    def patch_length(self) -> int:
        return len(self.patch or "")


@dataclass
class PullRequestInfo:
    """Pull Request 헤더 정보"""
    number: int
    title: str
    author: Optional[str]
    state: str
    base_ref: str
    head_ref: str
    body: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if self.number <= 0:
            raise ValueError("PR number must be positive")
