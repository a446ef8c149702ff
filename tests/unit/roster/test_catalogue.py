"""Tests for process types and their assignment cardinality rules."""

import datetime
import random
import re

import pytest

from app.roster.catalogue import (
    ProcessClass,
    ProcessType,
    assignment_rule,
    check_assignment_count,
    generate_process_number,
)


class TestAssignmentRule:
    def test_gqr_commission_is_exact(self):
        rule = assignment_rule(ProcessType.GQR_COMMISSION)
        assert rule.minimum == 6
        assert rule.exact is True

    @pytest.mark.parametrize(
        "process_type, minimum",
        [
            (ProcessType.TEAM, 3),
            (ProcessType.TREM, 3),
            (ProcessType.AMMUNITION_COMMISSION, 3),
            (ProcessType.PT, 1),
        ],
    )
    def test_minimums(self, process_type, minimum):
        rule = assignment_rule(process_type)
        assert rule.minimum == minimum
        assert rule.exact is False

    def test_accepts_string_values(self):
        assert assignment_rule("PT").minimum == 1


class TestCheckAssignmentCount:
    def test_minimum_satisfied(self):
        assert check_assignment_count(ProcessType.TEAM, 3) is None
        assert check_assignment_count(ProcessType.TEAM, 7) is None

    def test_below_minimum(self):
        message = check_assignment_count(ProcessType.TREM, 2)
        assert message is not None
        assert "pelo menos 3 militares" in message

    def test_pt_singular_wording(self):
        message = check_assignment_count(ProcessType.PT, 0)
        assert "pelo menos 1 militar." in message

    @pytest.mark.parametrize("count", [5, 7])
    def test_exact_rule_rejects_other_counts(self, count):
        message = check_assignment_count(ProcessType.GQR_COMMISSION, count)
        assert message is not None
        assert "exatamente 6" in message

    def test_exact_rule_accepts_exact_count(self):
        assert check_assignment_count(ProcessType.GQR_COMMISSION, 6) is None


class TestProcessNumber:
    def test_format(self):
        number = generate_process_number(datetime.date(2024, 5, 1), random.Random(1))
        assert re.fullmatch(r"[1-9]\d{2}/2024", number)

    def test_ten_classes(self):
        assert len(list(ProcessClass)) == 10
