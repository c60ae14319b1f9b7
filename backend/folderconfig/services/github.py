import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from folderconfig.core.http_utils import InstrumentedAsyncClient
from folderconfig.schemas.github import GitHubMember

logger = logging.getLogger(__name__)


_GITHUB_API_TIMEOUT = 10.0


class GitHubAPIError(Exception):
    """The GitHub API could not be reached or refused the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubService:
    """
    Read-only client for a GitHub organisation's member list.

    Works against github.com and GitHub Enterprise Server (pass the
    ``https://{host}/api/v3`` base URL for the latter).
    """

    def __init__(self, token: str, api_url: str = "https://api.github.com"):
        if not token:
            raise ValueError("A GitHub access token is required")
        self.token = token
        self.api_url = api_url.rstrip("/")

    def _get_auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}", "Accept": "application/vnd.github+json"}

    @asynccontextmanager
    async def _api_client(self) -> AsyncIterator[InstrumentedAsyncClient]:
        async with InstrumentedAsyncClient("GitHub API", timeout=_GITHUB_API_TIMEOUT) as client:
            yield client

    async def _api_get_paginated(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        max_pages: int = 50,
    ) -> List[Dict[str, Any]]:
        """
        Paginated GET using GitHub's Link header pagination.

        Raises:
            GitHubAPIError: on any non-200 response or transport failure
        """
        all_items: List[Dict[str, Any]] = []
        page = 1
        per_page = 100

        try:
            async with self._api_client() as client:
                while page <= max_pages:
                    request_params = {**(params or {}), "page": page, "per_page": per_page}
                    response = await client.get(
                        f"{self.api_url}{endpoint}",
                        headers=self._get_auth_headers(),
                        params=request_params,
                    )

                    if response.status_code != 200:
                        raise GitHubAPIError(
                            f"GitHub API GET {endpoint} page {page} failed: {response.status_code}",
                            status_code=response.status_code,
                        )

                    items = response.json()
                    if not items:
                        break

                    all_items.extend(items)

                    # Check Link header for next page
                    link_header = response.headers.get("link", "")
                    if 'rel="next"' not in link_header:
                        break

                    page += 1
        except GitHubAPIError:
            raise
        except Exception as e:
            raise GitHubAPIError(f"GitHub API paginated GET {endpoint} failed: {e}") from e

        return all_items

    async def list_org_members(self, org: str) -> List[GitHubMember]:
        """Fetches every member of an organisation. Malformed entries are skipped."""
        raw_members = await self._api_get_paginated(f"/orgs/{org}/members")
        members = []
        for raw in raw_members:
            try:
                members.append(GitHubMember(**raw))
            except PydanticValidationError as e:
                logger.warning(f"Skipping malformed GitHub member entry: {e}")
        logger.info(f"Fetched {len(members)} members of GitHub organisation '{org}'")
        return members
