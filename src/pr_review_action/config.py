"""
Configuration Management

액션(invoker)과 분석 서버(analyzer)의 설정 관리
"""

import os
import re
import sys
import shlex
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Mapping, Union
from pathlib import Path
import logging

from .models.pr_diff import PRReference


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
ANALYSIS_MODES = ('auto', 'ai', 'heuristic')
VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}

# YAML 키 → 환경 변수 (토큰/API 키/PR 번호는 파일에서 읽지 않음)
YAML_ENV_KEYS = {
    ('github', 'repository'): 'GITHUB_REPOSITORY',
    ('github', 'api_base_url'): 'GITHUB_API_URL',
    ('github', 'timeout_seconds'): 'GITHUB_TIMEOUT',
    ('gemini', 'model'): 'GEMINI_MODEL',
    ('analysis', 'mode'): 'ANALYSIS_MODE',
    ('server', 'command'): 'ANALYZER_COMMAND',
    ('logging', 'level'): 'LOG_LEVEL',
    ('logging', 'format'): 'LOG_FORMAT',
    ('logging', 'file_path'): 'LOG_FILE',
}


class ConfigurationError(ValueError):
    """필수 설정 누락 또는 잘못된 값"""


def parse_pr_number(value: Optional[str]) -> int:
    """PR 번호 문자열을 양의 정수로 변환"""
    if value is None or not re.fullmatch(r'\+?\d+', value.strip()):
        raise ConfigurationError(f"Invalid PR number: {value}. Must be a positive integer.")

    number = int(value.strip())
    if number <= 0:
        raise ConfigurationError(f"Invalid PR number: {value}. Must be a positive integer.")
    return number


def _int_setting(env: Mapping[str, str], name: str, default: int) -> Union[int, str]:
    """정수 환경 변수 (변환 실패 시 원본 문자열 유지, validate()에서 보고)"""
    value = env.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return value


def _is_valid_int(value: Union[int, str], minimum: int) -> bool:
    return isinstance(value, int) and value >= minimum


def default_server_command() -> List[str]:
    return [sys.executable, "-m", "pr_review_action.server"]


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    repository: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: Union[int, str] = 30

    def split_repository(self) -> List[str]:
        """'owner/repo' → [owner, repo]"""
        if not self.repository:
            raise ConfigurationError("Missing owner/repo from environment (GITHUB_REPOSITORY)")

        parts = self.repository.split('/')
        if len(parts) != 2 or not all(parts):
            raise ConfigurationError(f"Repository must be in format 'owner/repo', got {self.repository!r}")
        return parts


@dataclass
class GeminiConfig:
    """Gemini API 설정"""
    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL


@dataclass
class AnalysisConfig:
    """분석 방식 설정"""
    mode: str = "auto"


@dataclass
class ServerConfig:
    """분석 서버 실행 설정"""
    command: List[str] = field(default_factory=default_server_command)


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    file_path: Optional[str] = None
    max_file_size: Union[int, str] = 10 * 1024 * 1024  # 10MB
    backup_count: Union[int, str] = 5


def _logging_from_env(env: Mapping[str, str]) -> LoggingConfig:
    return LoggingConfig(
        level=env.get("LOG_LEVEL", "INFO"),
        format=env.get("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        file_path=env.get("LOG_FILE") or None,
        max_file_size=_int_setting(env, "LOG_MAX_SIZE", 10 * 1024 * 1024),
        backup_count=_int_setting(env, "LOG_BACKUP_COUNT", 5),
    )


def _validate_common(
    analysis: AnalysisConfig,
    logging_config: LoggingConfig,
    timeout_seconds: Union[int, str]
) -> List[str]:
    errors = []

    if analysis.mode not in ANALYSIS_MODES:
        errors.append(f"Invalid analysis mode: {analysis.mode} (expected one of {', '.join(ANALYSIS_MODES)})")

    if logging_config.level.upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid log level: {logging_config.level}")

    if not _is_valid_int(timeout_seconds, 1):
        errors.append(f"Invalid GitHub timeout: {timeout_seconds}. Must be a positive integer.")

    if not _is_valid_int(logging_config.max_file_size, 0):
        errors.append(f"Invalid log max size: {logging_config.max_file_size}. Must be a non-negative integer.")

    if not _is_valid_int(logging_config.backup_count, 0):
        errors.append(f"Invalid log backup count: {logging_config.backup_count}. Must be a non-negative integer.")

    return errors


@dataclass
class ActionConfig:
    """GitHub Action(invoker) 설정"""
    github: GitHubConfig
    gemini: GeminiConfig
    analysis: AnalysisConfig
    server: ServerConfig
    logging: LoggingConfig
    pr_number: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ActionConfig":
        """환경 변수에서 설정 로드 (검증은 validate()에서 수행)"""
        env = os.environ if environ is None else environ

        command = env.get("ANALYZER_COMMAND")
        return cls(
            github=GitHubConfig(
                token=env.get("GITHUB_TOKEN") or env.get("GH_TOKEN"),
                repository=env.get("GITHUB_REPOSITORY"),
                api_base_url=env.get("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=_int_setting(env, "GITHUB_TIMEOUT", 30),
            ),
            gemini=GeminiConfig(
                api_key=env.get("GEMINI_API_KEY") or None,
                model=env.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            ),
            analysis=AnalysisConfig(
                mode=env.get("ANALYSIS_MODE", "auto").lower(),
            ),
            server=ServerConfig(
                command=shlex.split(command) if command else default_server_command(),
            ),
            logging=_logging_from_env(env),
            pr_number=env.get("PR_NUMBER") or env.get("PR_NUMBER_INPUT"),
        )

    @classmethod
    def from_yaml(cls, config_path: str, environ: Optional[Mapping[str, str]] = None) -> "ActionConfig":
        """YAML 파일에서 설정 로드 (환경 변수가 파일 값보다 우선)"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        file_env = {}
        for (section, key), env_name in YAML_ENV_KEYS.items():
            value = (config_data.get(section) or {}).get(key)
            if value is None:
                continue
            if isinstance(value, list):
                value = shlex.join(str(v) for v in value)
            file_env[env_name] = str(value)

        env = os.environ if environ is None else environ
        return cls.from_env({**file_env, **env})

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if not self.github.token:
            errors.append("Missing GITHUB_TOKEN/GH_TOKEN in environment")

        try:
            self.github.split_repository()
        except ConfigurationError as e:
            errors.append(str(e))

        if self.pr_number is None:
            errors.append("Missing PR number from environment (PR_NUMBER/PR_NUMBER_INPUT)")
        else:
            try:
                parse_pr_number(self.pr_number)
            except ConfigurationError as e:
                errors.append(str(e))

        if not self.server.command:
            errors.append("Analyzer command cannot be empty")

        errors.extend(_validate_common(self.analysis, self.logging, self.github.timeout_seconds))

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def pr_reference(self) -> PRReference:
        """검증된 설정으로부터 PR 좌표 생성"""
        owner, repo = self.github.split_repository()
        return PRReference(owner=owner, repo=repo, number=parse_pr_number(self.pr_number))

    def server_environment(self, environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """분석 서버 프로세스 환경 변수"""
        env = dict(os.environ if environ is None else environ)
        env.update({
            'GITHUB_API_URL': self.github.api_base_url,
            'GITHUB_TIMEOUT': str(self.github.timeout_seconds),
            'GEMINI_MODEL': self.gemini.model,
            'ANALYSIS_MODE': self.analysis.mode,
            'LOG_LEVEL': self.logging.level,
            'LOG_FORMAT': self.logging.format,
        })
        return {key: value for key, value in env.items() if value is not None}

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'repository': self.github.repository,
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                # 보안상 토큰은 제외
            },
            'gemini': {
                'model': self.gemini.model,
                'api_key_configured': bool(self.gemini.api_key),
            },
            'analysis': {
                'mode': self.analysis.mode,
            },
            'server': {
                'command': list(self.server.command),
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
            },
            'pr_number': self.pr_number,
        }


@dataclass
class AnalyzerSettings:
    """분석 서버(analyzer) 설정"""
    gemini: GeminiConfig
    analysis: AnalysisConfig
    logging: LoggingConfig
    github_api_url: str = "https://api.github.com"
    github_timeout: Union[int, str] = 30

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AnalyzerSettings":
        """환경 변수에서 설정 로드"""
        env = os.environ if environ is None else environ

        return cls(
            gemini=GeminiConfig(
                api_key=env.get("GEMINI_API_KEY") or None,
                model=env.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            ),
            analysis=AnalysisConfig(mode=env.get("ANALYSIS_MODE", "auto").lower()),
            logging=_logging_from_env(env),
            github_api_url=env.get("GITHUB_API_URL", "https://api.github.com"),
            github_timeout=_int_setting(env, "GITHUB_TIMEOUT", 30),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = _validate_common(self.analysis, self.logging, self.github_timeout)
        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def resolve_gemini_key(self, requested_key: Optional[str] = None) -> Optional[str]:
        """
        분석 방식에 따라 사용할 Gemini 키 결정

        None이면 휴리스틱 분석을 사용한다.
        """
        if self.analysis.mode == 'heuristic':
            return None

        api_key = requested_key or self.gemini.api_key
        if self.analysis.mode == 'ai' and not api_key:
            raise ConfigurationError(
                "Gemini API key is required. Set GEMINI_API_KEY environment variable "
                "or pass geminiApiKey parameter."
            )
        return api_key


def setup_logging(logging_config: LoggingConfig) -> None:
    """로깅 설정 (stderr, 선택적으로 로테이션 파일)"""
    level = getattr(logging, logging_config.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=logging_config.format)

    # 파일 로깅이 설정된 경우 로테이션 설정
    if logging_config.file_path:
        from logging.handlers import RotatingFileHandler

        handler = RotatingFileHandler(
            logging_config.file_path,
            maxBytes=logging_config.max_file_size,
            backupCount=logging_config.backup_count,
        )
        handler.setFormatter(logging.Formatter(logging_config.format))

        # 루트 로거에 핸들러 추가
        root_logger = logging.getLogger()
        root_logger.addHandler(handler)
