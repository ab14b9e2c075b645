"""Tests for feature vector extraction."""

import pytest

from fitness_tracking.core.errors import IncompleteRecord
from fitness_tracking.services.analytics import FEATURE_FIELDS, FeatureExtractor


@pytest.fixture
def extractor() -> FeatureExtractor:
    return FeatureExtractor()


def test_vector_follows_field_order(extractor, make_workout) -> None:
    workout = make_workout(
        duration_minutes=45.0,
        average_heart_rate=152.0,
        max_heart_rate=185.0,
        resting_heart_rate=58.0,
        temperature=21.5,
        hours_slept=6.0,
        stress_level=4.0,
    )

    assert extractor.vector(workout) == (45.0, 152.0, 185.0, 58.0, 21.5, 6.0, 4.0)
    assert len(FEATURE_FIELDS) == 7


def test_extract_preserves_input_order(extractor, make_workout) -> None:
    workouts = [make_workout(duration_minutes=float(d)) for d in (50, 20, 35)]

    vectors = extractor.extract(workouts)

    assert len(vectors) == len(workouts)
    assert [v[0] for v in vectors] == [50.0, 20.0, 35.0]


def test_extract_empty(extractor) -> None:
    assert extractor.extract([]) == []


def test_missing_field_aborts_batch(extractor, make_workout) -> None:
    workouts = [make_workout(), make_workout(workout_id=13, temperature=None), make_workout()]

    with pytest.raises(IncompleteRecord) as exc_info:
        extractor.extract(workouts)

    assert exc_info.value.workout_id == 13
    assert exc_info.value.field == "temperature"
    assert "13" in str(exc_info.value)
