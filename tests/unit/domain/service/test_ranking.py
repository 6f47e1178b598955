"""Unit tests for post ranking."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from board.domain.repository.post import PostSortOrder
from board.domain.service.ranking import (
    DEFAULT_GRAVITY,
    DEFAULT_TIME_OFFSET,
    age_in_hours,
    decayed_score,
    sort_posts,
)
from tests.conftest import hours_ago, make_post

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestDecayedScore:
    """Tests for the time-decayed score."""

    @pytest.mark.parametrize("points", [1, 3, 50, 1000])
    def test_score_strictly_decreases_with_age(self, points):
        """Fixed votes: an older item always scores lower."""
        ages = [0.0, 0.5, 1.0, 6.0, 24.0, 24.0 * 30]
        scores = [decayed_score(points, age) for age in ages]

        assert all(a > b for a, b in zip(scores, scores[1:]))

    @pytest.mark.parametrize("age", [0.0, 1.0, 24.0, 500.0])
    def test_score_strictly_increases_with_points(self, age):
        """Fixed age: more votes always score higher."""
        scores = [decayed_score(points, age) for points in [0, 1, 2, 10, 100]]

        assert all(a < b for a, b in zip(scores, scores[1:]))

    def test_score_matches_formula(self):
        """score = points / (age + offset) ** gravity."""
        assert decayed_score(10, 1.0) == pytest.approx(10 / 3.0**1.8)
        assert DEFAULT_GRAVITY == 1.8
        assert DEFAULT_TIME_OFFSET == 2.0

    def test_negative_age_is_clamped(self):
        """Clock skew never yields an age below zero."""
        assert decayed_score(5, -3.0) == decayed_score(5, 0.0)

    def test_age_in_hours_treats_naive_as_utc(self):
        """Naive timestamps are read as UTC."""
        created = datetime(2026, 3, 1, 10, 30)

        assert age_in_hours(created, NOW) == pytest.approx(1.5)

    def test_age_in_hours_never_negative(self):
        """Items from the future are zero hours old."""
        assert age_in_hours(NOW + timedelta(hours=2), NOW) == 0.0


class TestSortPosts:
    """Tests for sort_posts."""

    def test_best_order_follows_computed_scores(self):
        """10 points at 1h vs 50 points at 24h rank exactly as the formula says."""
        # Arrange
        fresh = make_post("Fresh", points=10, created_at=hours_ago(1, NOW))
        old = make_post("Old", points=50, created_at=hours_ago(24, NOW))
        fresh_score = decayed_score(10, 1.0)
        old_score = decayed_score(50, 24.0)

        # Act
        ordered = sort_posts([old, fresh], PostSortOrder.BEST, NOW)

        # Assert
        expected = [fresh, old] if fresh_score > old_score else [old, fresh]
        assert [p.id for p in ordered] == [p.id for p in expected]
        # 10 / 3**1.8 ~ 1.38, 50 / 26**1.8 ~ 0.14
        assert ordered[0].id == fresh.id

    def test_new_orders_by_created_at_desc(self):
        """Newest first."""
        posts = [
            make_post("a", created_at=hours_ago(3, NOW)),
            make_post("b", created_at=hours_ago(1, NOW)),
            make_post("c", created_at=hours_ago(2, NOW)),
        ]

        ordered = sort_posts(posts, PostSortOrder.NEW, NOW)

        assert [p.title for p in ordered] == ["b", "c", "a"]

    def test_top_orders_by_points_then_recency(self):
        """Equal points fall back to the newer post."""
        posts = [
            make_post("low", points=1, created_at=hours_ago(1, NOW)),
            make_post("tie-old", points=5, created_at=hours_ago(5, NOW)),
            make_post("tie-new", points=5, created_at=hours_ago(2, NOW)),
        ]

        ordered = sort_posts(posts, PostSortOrder.TOP, NOW)

        assert [p.title for p in ordered] == ["tie-new", "tie-old", "low"]

    def test_full_ties_broken_by_id(self):
        """Same points and timestamp: the larger id comes first."""
        created = hours_ago(1, NOW)
        low = make_post("low", created_at=created, post_id=UUID(int=1))
        high = make_post("high", created_at=created, post_id=UUID(int=2))

        for sort in PostSortOrder:
            ordered = sort_posts([low, high], sort, NOW)
            assert [p.title for p in ordered] == ["high", "low"]

    @pytest.mark.parametrize("sort", list(PostSortOrder))
    def test_sorting_is_idempotent(self, sort):
        """Sorting a sorted list leaves it unchanged."""
        posts = [
            make_post(f"p{i}", points=(i * 7) % 5, created_at=hours_ago(i % 4, NOW))
            for i in range(20)
        ]

        once = sort_posts(posts, sort, NOW)
        twice = sort_posts(once, sort, NOW)

        assert [p.id for p in twice] == [p.id for p in once]

    def test_input_is_not_mutated(self):
        """A new list is returned."""
        posts = [make_post("a", points=1), make_post("b", points=2)]
        original = list(posts)

        sort_posts(posts, PostSortOrder.TOP, NOW)

        assert posts == original
