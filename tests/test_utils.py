from __future__ import annotations

import pytest

from errors import ValidationFailure
from utils import haversine_km, mask_secret, normalize_text, validate_coordinates

DELHI = (28.6139, 77.2090)
MUMBAI = (19.0760, 72.8777)


def test_haversine_identity() -> None:
    assert haversine_km(*DELHI, *DELHI) == 0.0


def test_haversine_symmetry() -> None:
    assert haversine_km(*DELHI, *MUMBAI) == pytest.approx(haversine_km(*MUMBAI, *DELHI))


def test_haversine_delhi_mumbai() -> None:
    assert 1100 < haversine_km(*DELHI, *MUMBAI) < 1200


def test_normalize_text_strips_case_space_and_punctuation() -> None:
    assert normalize_text("  Fundoo!! ") == "fundoo"
    assert normalize_text("Bas yaar, chalo.") == "bas yaar chalo"
    assert normalize_text("") == ""


def test_validate_coordinates_collects_both_errors() -> None:
    validate_coordinates(0.0, 0.0)
    with pytest.raises(ValidationFailure) as excinfo:
        validate_coordinates(91.0, -181.0)
    assert len(excinfo.value.errors) == 2


def test_mask_secret() -> None:
    assert mask_secret(None) == "unset"
    assert mask_secret("abcdefghijkl") == "abcd...ijkl"
