from __future__ import annotations

from unittest.mock import MagicMock, patch

from config import Configuration
from models import Location
from services.city_registry import lookup_city, resolve_city_center
from services.geoapify import GeoapifyClient, GeoapifyError


def test_lookup_supports_aliases() -> None:
    loc = lookup_city("Bombay")
    assert loc is not None
    assert loc.city == "Mumbai"
    assert 19 < loc.latitude < 20


def test_lookup_unknown_city() -> None:
    assert lookup_city("Atlantis") is None
    assert lookup_city("") is None


def test_resolve_without_key_skips_geocoder() -> None:
    with patch.object(GeoapifyClient, "geocode_city") as geocode:
        assert resolve_city_center("Pune", Configuration()) is None
    geocode.assert_not_called()


def test_resolve_uses_geocoder_for_unlisted_city() -> None:
    cfg = Configuration(geoapify_api_key="test-key")
    client = MagicMock()
    client.geocode_city.return_value = Location(18.5204, 73.8567, "Pune", "Maharashtra")

    loc = resolve_city_center("Pune", cfg, client)

    assert loc is not None and loc.city == "Pune"
    client.geocode_city.assert_called_once_with("Pune")


def test_resolve_geocoder_failure_means_unknown() -> None:
    cfg = Configuration(geoapify_api_key="test-key")
    client = MagicMock()
    client.geocode_city.side_effect = GeoapifyError("upstream 503")

    assert resolve_city_center("Pune", cfg, client) is None


def test_geocode_city_parses_and_caches() -> None:
    cfg = Configuration(geoapify_api_key="test-key")
    session = MagicMock()
    response = MagicMock(status_code=200, ok=True)
    response.json.return_value = {
        "features": [{"properties": {"lat": 18.52, "lon": 73.85, "city": "Pune", "state": "Maharashtra"}}]
    }
    session.get.return_value = response
    client = GeoapifyClient(cfg, session=session)

    first = client.geocode_city("Pune")
    second = client.geocode_city(" pune ")

    assert first == second == Location(18.52, 73.85, "Pune", "Maharashtra", "India")
    assert session.get.call_count == 1
