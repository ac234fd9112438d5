"""Tests for the sample data generator."""

from __future__ import annotations

import pytest

from schedulo.data.generator import (
    GeneratorConfig,
    generate_sample_request,
    generate_small_request,
    get_generation_stats,
    request_to_dict,
    save_request,
)
from schedulo.data.loader import load_request, parse_request
from schedulo.data.models import ScheduleRequest


class TestGeneratorConfig:
    """Tests for GeneratorConfig."""

    def test_default_config(self):
        config = GeneratorConfig()
        assert config.program == "B.Tech"
        assert config.department == "CSE"
        assert config.seed is None

    def test_seed_makes_reproducible(self):
        first = generate_sample_request(GeneratorConfig(seed=42))
        second = generate_sample_request(GeneratorConfig(seed=42))
        assert request_to_dict(first) == request_to_dict(second)

    def test_different_seeds_differ(self):
        first = generate_sample_request(GeneratorConfig(seed=1))
        second = generate_sample_request(GeneratorConfig(seed=2))
        assert request_to_dict(first) != request_to_dict(second)


class TestGenerateSampleRequest:
    """Tests for generate_sample_request."""

    @pytest.fixture
    def request_(self) -> ScheduleRequest:
        return generate_sample_request(GeneratorConfig(seed=7))

    def test_counts(self, request_):
        assert len(request_.scheduled_courses) == 12
        assert len(request_.courses) == 16
        assert len(request_.faculty) == 8
        assert len(request_.rooms) == 4

    def test_distractors_from_other_departments(self, request_):
        ignored = [c for c in request_.courses if c not in request_.scheduled_courses]
        assert ignored
        assert all(c.department != "CSE" for c in ignored)

    def test_every_course_has_eligible_faculty(self, request_):
        for course in request_.scheduled_courses:
            assert request_.eligible_faculty(course.id)

    def test_sessions_fit_in_week(self, request_):
        assert all(1 <= c.sessions <= request_.days for c in request_.courses)

    def test_unique_ids(self, request_):
        assert len({f.id for f in request_.faculty}) == len(request_.faculty)
        assert len({c.id for c in request_.courses}) == len(request_.courses)


class TestGenerateSmallRequest:
    """Tests for generate_small_request."""

    def test_small_request(self):
        request = generate_small_request(seed=3)
        assert len(request.scheduled_courses) == 6
        assert request.periods_per_day == 4


class TestSerialization:
    """Tests for saving and reloading generated requests."""

    def test_dict_parses_back(self):
        request = generate_small_request(seed=5)
        assert request_to_dict(parse_request(request_to_dict(request))) == request_to_dict(request)

    def test_save_and_load(self, tmp_path):
        request = generate_small_request(seed=5)
        path = tmp_path / "nested" / "request.json"
        save_request(request, path)
        assert request_to_dict(load_request(path)) == request_to_dict(request)


class TestGenerationStats:
    """Tests for get_generation_stats."""

    def test_stats(self):
        request = generate_sample_request(GeneratorConfig(seed=9))
        stats = get_generation_stats(request)
        assert stats["courses"] == 12
        assert stats["ignored_courses"] == 4
        assert stats["total_cells"] == 5 * 6 * 4
        assert stats["is_feasible"]
