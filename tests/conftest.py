"""Shared Java rules documents for both schema generations."""

import copy

import pytest

RANGE_DOCUMENT = {
    "distribution": "CORRETTO",
    "supported": ">=17",
    "suggestedMajor": 17,
    "ram": {"recommended": 4096, "minimum": 2048},
    "platformOptions": [
        {"platform": "darwin", "architecture": "arm64", "distribution": "TEMURIN"},
        {"platform": "win32", "supported": ">=16 <20", "suggestedMajor": 17},
    ],
}

MATRIX_DOCUMENT = {
    "validationMatrices": [
        {
            "platform": "all",
            "supportedMajors": [17, 21],
            "ram": {"recommended": 3000, "minimum": 1000},
        },
        {
            "platform": "win32",
            "architecture": "x64",
            "distribution": "TEMURIN",
            "supportedMajors": [17],
            "versions": {
                "17": {"minimum": "17.0.2+8", "blacklist": ["17.0.5+8"]},
            },
        },
        {
            "platform": "linux",
            "distribution": "CORRETTO",
        },
    ]
}


@pytest.fixture
def range_document():
    """A platformOptions generation document."""
    return copy.deepcopy(RANGE_DOCUMENT)


@pytest.fixture
def matrix_document():
    """A validationMatrices generation document."""
    return copy.deepcopy(MATRIX_DOCUMENT)
