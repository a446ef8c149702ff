"""Tests for the eligibility ranking (build, filter, sort)."""

import datetime

import pytest

from app.models.military import Military
from app.roster.ranking import (
    build_entries,
    filter_entries,
    next_eligible,
    rank_militaries,
    sort_entries,
)
from app.roster.ranks import Grade, Rank

TODAY = datetime.date(2024, 6, 30)
CREATED = datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)


# ======================================================================
# Helpers
# ======================================================================


def _military(
    id: int,
    rank: Rank,
    last: datetime.date | None = None,
    history: dict | None = None,
    formation_year: int | None = None,
    active: bool = True,
    name: str | None = None,
    **extra,
) -> Military:
    return Military(
        id=id,
        name=name or f"Militar {id}",
        rank=rank.value,
        branch=extra.get("branch", "Infantaria"),
        squadron=extra.get("squadron", "Base Adm"),
        war_name=extra.get("war_name"),
        formation_year=formation_year,
        is_active=active,
        last_process_date=last,
        process_history=history or {},
        created_at=CREATED,
        updated_at=CREATED,
    )


def _ids(entries) -> list[int]:
    return [e.military.id for e in entries]


# ======================================================================
# build_entries
# ======================================================================


class TestBuildEntries:
    def test_overall_rest(self):
        [entry] = build_entries([_military(1, Rank.CAPTAIN, datetime.date(2024, 6, 20))], today=TODAY)
        assert entry.rest_days == 10
        assert entry.rest_days_for_process_type is None
        assert entry.effective_rest_days == 10
        assert entry.rest_class == "low"
        assert entry.military.grade == Grade.OFFICER

    def test_per_type_rest(self):
        m = _military(1, Rank.CAPTAIN, datetime.date(2024, 6, 20), {"TEAM": "2024-03-01"})
        [entry] = build_entries([m], process_type="TEAM", today=TODAY)
        assert entry.rest_days == 10
        assert entry.rest_days_for_process_type == 121
        assert entry.effective_rest_days == 121
        assert entry.rest_class == "high"
        assert entry.last_participation == datetime.date(2024, 3, 1)

    def test_never_served_in_type(self):
        m = _military(1, Rank.CAPTAIN, datetime.date(2024, 6, 20), {"TEAM": "2024-03-01"})
        [entry] = build_entries([m], process_type="PT", today=TODAY)
        assert entry.rest_days_for_process_type == 365
        assert entry.last_participation == datetime.date(2024, 6, 20)


# ======================================================================
# sort_entries
# ======================================================================


class TestSortEntries:
    def test_rank_then_rest(self):
        militaries = [
            _military(1, Rank.CAPTAIN, datetime.date(2024, 1, 1)),
            _military(2, Rank.THIRD_SERGEANT, datetime.date(2024, 6, 1)),
            _military(3, Rank.THIRD_SERGEANT, datetime.date(2024, 2, 1)),
            _military(4, Rank.FIRST_SERGEANT),
        ]
        result = sort_entries(build_entries(militaries, today=TODAY))
        assert _ids(result) == [3, 2, 4, 1]

    def test_rest_order_ignores_rank(self):
        militaries = [
            _military(1, Rank.THIRD_SERGEANT, datetime.date(2024, 6, 29)),
            _military(2, Rank.MAJOR, datetime.date(2024, 1, 1)),
            _military(3, Rank.CAPTAIN),
        ]
        result = sort_entries(build_entries(militaries, today=TODAY), order="rest")
        assert _ids(result) == [3, 2, 1]

    def test_stable_on_equal_keys(self):
        militaries = [_military(i, Rank.SECOND_SERGEANT) for i in (5, 2, 9)]
        result = sort_entries(build_entries(militaries, today=TODAY))
        assert _ids(result) == [5, 2, 9]

    def test_formation_year_tie_break(self):
        militaries = [
            _military(1, Rank.SECOND_LIEUTENANT, formation_year=2019),
            _military(2, Rank.SECOND_LIEUTENANT, formation_year=None),
            _military(3, Rank.SECOND_LIEUTENANT, formation_year=2022),
            _military(4, Rank.SECOND_LIEUTENANT, datetime.date(2024, 6, 1), formation_year=2019),
            _military(5, Rank.THIRD_SERGEANT, formation_year=2000),
        ]
        result = sort_entries(build_entries(militaries, today=TODAY), tie_break="formation_year")
        # Rank first, then most recent class, unknown year last, then most rested
        assert _ids(result) == [5, 3, 1, 4, 2]

    def test_unknown_order(self):
        with pytest.raises(ValueError):
            sort_entries([], order="alphabetical")


# ======================================================================
# filter_entries
# ======================================================================


class TestFilterEntries:
    @pytest.fixture()
    def entries(self):
        militaries = [
            _military(1, Rank.CAPTAIN, name="João Silva", war_name="Silva"),
            _military(2, Rank.THIRD_SERGEANT, name="Carlos Oliveira", branch="Cavalaria"),
            _military(3, Rank.THIRD_SERGEANT, name="Pedro Souza", active=False),
        ]
        return build_entries(militaries, today=TODAY)

    def test_active_only_by_default(self, entries):
        assert _ids(filter_entries(entries)) == [1, 2]
        assert _ids(filter_entries(entries, active_only=False)) == [1, 2, 3]

    def test_grade(self, entries):
        assert _ids(filter_entries(entries, grade=Grade.ENLISTED)) == [2]

    def test_rank(self, entries):
        assert _ids(filter_entries(entries, rank=Rank.THIRD_SERGEANT, active_only=False)) == [2, 3]

    def test_query_is_case_insensitive(self, entries):
        assert _ids(filter_entries(entries, query="  cavalaria ")) == [2]
        assert _ids(filter_entries(entries, query="SILVA")) == [1]
        assert _ids(filter_entries(entries, query="praça")) == [2]

    def test_blank_query_matches_all(self, entries):
        assert _ids(filter_entries(entries, query="   ")) == [1, 2]


# ======================================================================
# rank_militaries / next_eligible
# ======================================================================


class TestRankMilitaries:
    def test_limit_and_total(self):
        militaries = [_military(i, Rank.SECOND_SERGEANT) for i in range(1, 16)]
        entries, total = rank_militaries(militaries, limit=10, today=TODAY)
        assert total == 15
        assert len(entries) == 10
        assert [e.position for e in entries] == list(range(1, 11))

    def test_no_limit(self):
        militaries = [_military(i, Rank.SECOND_SERGEANT) for i in range(1, 16)]
        entries, total = rank_militaries(militaries, limit=None, today=TODAY)
        assert len(entries) == total == 15

    def test_next_eligible_excludes(self):
        militaries = [
            _military(1, Rank.MAJOR),
            _military(2, Rank.THIRD_SERGEANT, datetime.date(2024, 1, 1)),
            _military(3, Rank.CAPTAIN, datetime.date(2024, 6, 1)),
            _military(4, Rank.CAPTAIN, active=False),
        ]
        result = next_eligible(militaries, 2, exclude_ids=[1], today=TODAY)
        assert _ids(result) == [2, 3]
