"""HTTP client for the odds/results vendor feed."""

import logging
from typing import Any, Optional

import requests

from .adapters import join_vendor_scores
from .models import ScoreRecord
from .schemas import PoolConfig

logger = logging.getLogger('pickem.vendor_client')


class VendorClient:
    """
    Fetches results (scores) and matches (teams, kickoff) per sport.

    Results carry scores and an id; matches carry the teams and kickoff for
    the same id. fetch_scores joins the two into ScoreRecords.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = 'https://jsonodds.com/api',
        results_endpoint: str = '/results',
        odds_endpoint: str = '/odds',
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ):
        if not api_key:
            raise ValueError('No vendor API key configured')
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.results_endpoint = results_endpoint.rstrip('/')
        self.odds_endpoint = odds_endpoint.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: PoolConfig, session: Optional[requests.Session] = None) -> 'VendorClient':
        """Build a client from pool configuration."""
        return cls(
            api_key=config.vendor_api_key or '',
            base_url=config.vendor_base_url,
            results_endpoint=config.vendor_results_endpoint,
            odds_endpoint=config.vendor_odds_endpoint,
            session=session,
        )

    def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        """GET a JSON payload; redirects are followed."""
        logger.info(f'GET {url}')
        response = self.session.get(
            url,
            headers={'x-api-key': self.api_key},
            params={k: v for k, v in (params or {}).items() if v is not None and str(v)},
            timeout=self.timeout,
        )
        response.raise_for_status()

        content_type = response.headers.get('content-type', '').lower()
        if 'json' not in content_type:
            raise ValueError(
                f'Non-JSON response ({response.status_code}) from {url}: {response.text[:120]}'
            )
        return response.json()

    def fetch_results(self, sport: str, params: Optional[dict] = None) -> Any:
        """Raw results payload for a sport."""
        return self._get_json(f'{self.base_url}{self.results_endpoint}/{sport}', params)

    def fetch_matches(self, sport: str, params: Optional[dict] = None) -> Any:
        """Raw matches/odds payload for a sport."""
        return self._get_json(f'{self.base_url}{self.odds_endpoint}/{sport}', params)

    def fetch_scores(
        self,
        sport: str,
        alias_map: Optional[dict[str, str]] = None,
        tz_name: str = 'America/Chicago',
    ) -> tuple[list[ScoreRecord], list[dict], dict[str, Any]]:
        """
        Fetch and join one sport's results and matches.

        Returns:
            Tuple of (score records, rejected rows, raw payloads keyed
            'results' and 'matches' for saving alongside)
        """
        results_payload = self.fetch_results(sport)
        matches_payload = self.fetch_matches(sport)
        scores, rejected = join_vendor_scores(results_payload, matches_payload, alias_map, tz_name)
        logger.info(f'{sport}: {len(scores)} scores joined, {len(rejected)} rejected')
        return scores, rejected, {'results': results_payload, 'matches': matches_payload}
