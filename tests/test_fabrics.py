from __future__ import annotations

import pytest

from xstitch.core.errors import ConfigurationError
from xstitch.core.fabrics import DEFAULT_FABRIC, FABRIC_TYPES, finished_size, get_fabric


def test_default_fabric():
    assert get_fabric(None).id == DEFAULT_FABRIC == "aida14"
    assert len(FABRIC_TYPES) == 9


def test_finished_size():
    size = finished_size(140, 70, "aida14")
    assert size == {
        "fabric": "aida14",
        "width_in": 10.0,
        "height_in": 5.0,
        "width_cm": 25.4,
        "height_cm": 12.7,
    }


def test_unknown_fabric():
    with pytest.raises(ConfigurationError) as info:
        get_fabric("burlap")
    assert info.value.field == "fabric_type"
