"""Tests for the vendor feed client."""

from unittest.mock import MagicMock

import pytest
import requests

from pickem.schemas import PoolConfig
from pickem.vendor_client import VendorClient


def fake_response(payload, content_type='application/json', status=200):
    response = MagicMock()
    response.status_code = status
    response.headers = {'content-type': content_type}
    response.json.return_value = payload
    response.text = str(payload)
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status} Error')
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestVendorClient:
    """Tests for VendorClient."""

    def test_requires_api_key(self):
        """Test that a client cannot be built without a key."""
        with pytest.raises(ValueError, match='No vendor API key'):
            VendorClient(api_key='')

    def test_from_config(self, session):
        """Test building a client from pool configuration."""
        config = PoolConfig(vendor_api_key='secret', vendor_base_url='https://example.test/api/')
        client = VendorClient.from_config(config, session=session)
        assert client.base_url == 'https://example.test/api'
        assert client.api_key == 'secret'

    def test_fetch_results_sends_key(self, session):
        """Test the request URL, header and timeout."""
        session.get.return_value = fake_response([])
        client = VendorClient(api_key='secret', base_url='https://example.test/api', session=session)

        client.fetch_results('nfl')

        args, kwargs = session.get.call_args
        assert args[0] == 'https://example.test/api/results/nfl'
        assert kwargs['headers'] == {'x-api-key': 'secret'}
        assert kwargs['timeout'] == 30.0

    def test_non_json_response(self, session):
        """Test that an HTML error page is reported, not parsed."""
        session.get.return_value = fake_response('<html>', content_type='text/html')
        client = VendorClient(api_key='secret', session=session)
        with pytest.raises(ValueError, match='Non-JSON response'):
            client.fetch_matches('nfl')

    def test_http_error(self, session):
        """Test that HTTP errors propagate."""
        session.get.return_value = fake_response({}, status=401)
        client = VendorClient(api_key='secret', session=session)
        with pytest.raises(requests.HTTPError):
            client.fetch_results('nfl')

    def test_fetch_scores_joins(self, session):
        """Test that results and matches are joined into score records."""
        results = [{'ID': 'g1', 'HomeScore': 24, 'AwayScore': 27}]
        matches = {'matches': [{'ID': 'g1', 'HomeTeam': 'KC Chiefs', 'AwayTeam': 'Buffalo Bills'}]}
        session.get.side_effect = [fake_response(results), fake_response(matches)]
        client = VendorClient(api_key='secret', session=session)

        scores, rejected, raw = client.fetch_scores('nfl', {'KC Chiefs': 'Kansas City'})

        assert rejected == []
        assert len(scores) == 1
        assert (scores[0].team1, scores[0].score1) == ('Buffalo Bills', 27)
        assert (scores[0].team2, scores[0].score2) == ('Kansas City', 24)
        assert raw == {'results': results, 'matches': matches}
