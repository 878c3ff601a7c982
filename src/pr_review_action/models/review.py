"""
Review Data Models

analyze_pr 도구의 출력 스키마 (analyzer ↔ invoker 계약)
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class ReviewComment(BaseModel):
    """파일 단위 리뷰 코멘트"""
    path: str
    body: str
    position: Optional[int] = None

    @field_validator('path', 'body')
    @classmethod
    def validate_non_empty(cls, v):
        if not v.strip():
            raise ValueError('Field cannot be empty')
        return v

    def to_review_line(self) -> str:
        """집계 리뷰 본문의 한 항목"""
        return f"**{self.path}**: {self.body}"


class AnalysisResult(BaseModel):
    """PR 분석 결과"""
    summary: str
    comments: List[ReviewComment] = Field(default_factory=list)

    @classmethod
    def from_error(cls, message: str) -> "AnalysisResult":
        """분석 실패 시 반환하는 degraded 결과"""
        return cls(summary=f"Error during PR analysis: {message}", comments=[])

    @property
    def has_comments(self) -> bool:
        return len(self.comments) > 0
