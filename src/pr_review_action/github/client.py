"""
GitHub API Client

Handles GitHub API authentication, error classification and communication.
Provides the pull request reads and comment writes the action needs.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime, status_code: Optional[int] = None):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=status_code)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub API client with authentication and error handling.

    Provides methods for:
    - Pull request and changed-file retrieval
    - Issue comment and pull request review creation

    Requests are issued once; failures surface as GitHubAPIError.
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: int = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (GITHUB_TOKEN in Actions or a personal access token)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Per-request timeout in seconds
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()
        self.rate_limit_remaining: Optional[int] = None
        self.rate_limit_reset: Optional[datetime] = None

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.session.headers)

    def _create_session(self) -> requests.Session:
        """Create requests session with authentication headers."""
        session = requests.Session()
        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'PR-Review-Action/0.1'
        })
        return session

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Record rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _is_rate_limited(self, response: requests.Response) -> bool:
        if response.status_code == 429:
            return True
        return response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API and transport errors
            RateLimitExceeded: When GitHub reports an exhausted rate limit
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}")

        self._update_rate_limit(response)
        logger.debug(
            f"{method} {endpoint} -> {response.status_code} "
            f"(rate limit remaining: {self.rate_limit_remaining}, resets at {self.rate_limit_reset})"
        )

        if self._is_rate_limited(response):
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time, status_code=response.status_code)

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> Dict:
        """
        Get pull request information.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            Pull request data
        """
        logger.info(f"Fetching PR {owner}/{repo}#{pr_number}")

        response = self._make_request('GET', f'/repos/{owner}/{repo}/pulls/{pr_number}')
        return response.json()

    def get_pull_request_files(self, owner: str, repo: str, pr_number: int) -> List[Dict]:
        """
        Get files changed in a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            List of file change data
        """
        logger.info(f"Fetching PR files for {owner}/{repo}#{pr_number}")

        files = []
        page = 1
        per_page = 100

        while True:
            response = self._make_request(
                'GET',
                f'/repos/{owner}/{repo}/pulls/{pr_number}/files',
                params={'page': page, 'per_page': per_page}
            )

            page_files = response.json()
            if not page_files:
                break

            files.extend(page_files)

            if len(page_files) < per_page:
                break

            page += 1

        logger.info(f"Found {len(files)} changed files")
        return files

    def create_issue_comment(self, owner: str, repo: str, pr_number: int, body: str) -> Dict:
        """
        Post a top-level comment on a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request (issue) number
            body: Markdown comment body

        Returns:
            Created comment data
        """
        logger.info(f"Posting issue comment on {owner}/{repo}#{pr_number} ({len(body)} chars)")

        response = self._make_request(
            'POST',
            f'/repos/{owner}/{repo}/issues/{pr_number}/comments',
            json={'body': body}
        )
        return response.json()

    def create_review(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        body: str,
        event: str = "COMMENT"
    ) -> Dict:
        """
        Create a pull request review.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            body: Review body
            event: Review event type (COMMENT, APPROVE, REQUEST_CHANGES)

        Returns:
            Created review data
        """
        logger.info(f"Creating {event} review on {owner}/{repo}#{pr_number}")

        response = self._make_request(
            'POST',
            f'/repos/{owner}/{repo}/pulls/{pr_number}/reviews',
            json={'body': body, 'event': event}
        )
        return response.json()
