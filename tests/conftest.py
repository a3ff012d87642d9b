"""Shared pytest fixtures for the stroke_segmenter test suite.

Fixtures:
    two_stacked_characters: Input with two clusters in one column.
    payload: The same clusters as a camelCase JSON payload.
    input_file: Writes the payload to a temp file and returns its path.

Markers:
    integration: Mark test as integration test
"""

import json

import pytest

from tests.helpers import make_character_strokes, make_input


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Input Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def two_stacked_characters():
    """Return a SegmentInput with two clusters stacked in one column.

    Clusters are centred on (600, 100) and (600, 350), 60 units in size.
    """
    strokes = make_character_strokes(600, 100, 60) + make_character_strokes(600, 350, 60)
    return make_input(strokes, max_characters=2)


@pytest.fixture
def payload():
    """Return the JSON payload for the two stacked characters, camelCase keys."""
    strokes = make_character_strokes(600, 100, 60) + make_character_strokes(600, 350, 60)
    return {
        'strokes': [[p.to_dict() for p in s] for s in strokes],
        'lassos': [],
        'canvasWidth': 800,
        'canvasHeight': 600,
        'maxCharacters': 2,
    }


@pytest.fixture
def input_file(tmp_path, payload):
    """Write ``payload`` to a temp JSON file and return its path."""
    path = tmp_path / 'input.json'
    path.write_text(json.dumps(payload))
    return path
