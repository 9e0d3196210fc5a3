from __future__ import annotations

import logging
from datetime import datetime

import httpx

from corpus.domain.entities import RateLimit, RawRecord, SearchPage
from corpus.domain.errors import SearchError
from corpus.domain.interfaces import ISearchClient

log = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com/graphql"
PAGE_SIZE      = 100

GRAPHQL_QUERY = """
query SearchGoModules($query: String!, $first: Int!, $after: String) {
  rateLimit {
    cost
    limit
    remaining
    resetAt
  }
  search(query: $query, type: REPOSITORY, first: $first, after: $after) {
    repositoryCount
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      ... on Repository {
        url
        stargazerCount
        forkCount
        defaultBranchRef {
          target {
            ... on Commit {
              oid
              pushedDate
            }
          }
        }
        goMod: object(expression: "HEAD:go.mod") {
          ... on Blob {
            text
          }
        }
      }
    }
  }
}
"""


class GitHubClient(ISearchClient):
    """
    Concrete implementation of ISearchClient for GitHub's GraphQL API.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally. This lets callers control the client lifecycle
    and makes testing trivial: pass in a client built on httpx.MockTransport.

    Every failure is raised as SearchError; retrying is not this class's job.
    """

    def __init__(self, token: str, client: httpx.AsyncClient) -> None:
        self._client = client
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type":  "application/json",
        }

    # Anti-Corruption Layer
    @staticmethod
    def _parse_datetime(value: str | None) -> datetime | None:
        """Convert GitHub's ISO datetime string to Python datetime."""
        if not value:
            return None
        return datetime.fromisoformat(value.replace("Z", "+00:00"))

    def _parse_node(self, node: dict) -> RawRecord | None:
        """
        ANTI-CORRUPTION LAYER: translates GitHub's raw API response
        into our RawRecord.

        GitHub sends:                                 We store as:
          "stargazerCount"                         ->  stargazer_count
          "defaultBranchRef.target.pushedDate"     ->  pushed_date
          "goMod.text"                             ->  go_mod_text

        Missing optional parts (empty repo, no go.mod) become None or "".
        """
        if not node:
            # search can return nodes we have no fragment for
            return None
        try:
            commit = ((node.get("defaultBranchRef") or {}).get("target")) or {}
            blob   = node.get("goMod") or {}
            return RawRecord(
                url             = node["url"],
                stargazer_count = node.get("stargazerCount", 0),
                fork_count      = node.get("forkCount", 0),
                pushed_date     = self._parse_datetime(commit.get("pushedDate")),
                head_oid        = commit.get("oid"),
                go_mod_text     = blob.get("text") or "",
            )
        except (KeyError, TypeError, ValueError) as exc:
            log.debug("Skipping malformed API node %s: %s", node.get("url"), exc)
            return None

    def _parse_rate_limit(self, rate: dict | None) -> RateLimit | None:
        if not rate:
            return None
        return RateLimit(
            cost      = rate.get("cost", 0),
            limit     = rate.get("limit", 0),
            remaining = rate.get("remaining", 0),
            reset_at  = self._parse_datetime(rate.get("resetAt")),
        )

    # ISearchClient implementation
    async def fetch_page(self, query_str: str, cursor: str | None = None) -> SearchPage:
        """Fetch one page of repository search results for `query_str`."""
        variables = {
            "query": query_str,
            "first": PAGE_SIZE,
            "after": cursor,
        }

        try:
            response = await self._client.post(
                GITHUB_API_URL,
                headers=self._headers,
                json={"query": GRAPHQL_QUERY, "variables": variables},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise SearchError(f"GitHub returned HTTP {exc.response.status_code} for query {query_str!r}") from exc
        except httpx.RequestError as exc:
            raise SearchError(f"request to GitHub failed: {exc}") from exc
        except ValueError as exc:
            raise SearchError(f"GitHub returned invalid JSON: {exc}") from exc

        # GraphQL-level errors arrive with HTTP 200
        if data.get("errors"):
            messages = "; ".join(err.get("message", str(err)) for err in data["errors"])
            raise SearchError(f"GraphQL errors for query {query_str!r}: {messages}")

        try:
            search    = data["data"]["search"]
            page_info = search["pageInfo"]
            records = [parsed for node in search["nodes"] if (parsed := self._parse_node(node)) is not None]
            return SearchPage(
                records          = records,
                end_cursor       = page_info.get("endCursor"),
                has_next_page    = bool(page_info.get("hasNextPage")),
                rate_limit       = self._parse_rate_limit(data["data"].get("rateLimit")),
                repository_count = search.get("repositoryCount", 0),
            )
        except (KeyError, TypeError) as exc:
            raise SearchError(f"unexpected search response shape: {exc!r}") from exc
