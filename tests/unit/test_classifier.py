"""Tests for keyword-based stage and role classification."""

import pytest
from careerguide.classifier import (
    ROLE_KEYWORDS,
    STAGE_KEYWORDS,
    classify,
    detect_role,
    detect_stage,
)
from careerguide.models import RoleCategory, Stage


class TestDetectStage:
    """Test stage detection and its priority order."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("I'm exploring what to do after college", Stage.EXPLORING),
            ("I applied to ten companies last week", Stage.APPLIED),
            ("I have an interview on Friday", Stage.INTERVIEWING),
            ("I just got a job offer!", Stage.OFFERED),
            ("Tomorrow is my first day", Stage.NEW_HIRE),
            ("I have 8 years of experience and want a promotion", Stage.PROFESSIONAL),
        ],
    )
    def test_single_stage_matches(self, text, expected):
        assert detect_stage(text) is expected

    def test_case_insensitive(self):
        assert detect_stage("MY INTERVIEW IS TOMORROW") is Stage.INTERVIEWING

    def test_offer_wins_over_interview(self):
        """Test the documented tie-break when keyword sets overlap."""
        text = "After the final interview they sent me an offer"
        assert detect_stage(text) is Stage.OFFERED

    def test_interview_wins_over_application(self):
        text = "My application went through and I have an interview next week"
        assert detect_stage(text) is Stage.INTERVIEWING

    def test_no_match(self):
        assert detect_stage("I need help") is None
        assert detect_stage("") is None

    def test_priority_order_is_stable(self):
        """Test the evaluation order of the stage table."""
        assert [stage for stage, _ in STAGE_KEYWORDS] == [
            Stage.OFFERED,
            Stage.INTERVIEWING,
            Stage.APPLIED,
            Stage.NEW_HIRE,
            Stage.PROFESSIONAL,
            Stage.EXPLORING,
        ]

    def test_unknown_has_no_keywords(self):
        assert Stage.UNKNOWN not in {stage for stage, _ in STAGE_KEYWORDS}


class TestDetectRole:
    """Test role detection and its priority order."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("I'm a backend developer", RoleCategory.SOFTWARE_ENGINEERING),
            ("I love machine learning", RoleCategory.DATA_SCIENCE),
            ("I want to be a product manager", RoleCategory.PRODUCT_MANAGEMENT),
            ("I work in supply chain", RoleCategory.OPERATIONS),
            ("I'm a UX designer", RoleCategory.DESIGN),
            ("I do SEO for a startup", RoleCategory.MARKETING),
            ("I'm studying accounting", RoleCategory.FINANCE),
        ],
    )
    def test_single_role_matches(self, text, expected):
        assert detect_role(text) is expected

    def test_data_engineer_is_data_science(self):
        """Test that narrower disciplines take priority over software."""
        assert detect_role("I'm a data engineer") is RoleCategory.DATA_SCIENCE

    def test_no_match(self):
        assert detect_role("I need help") is None

    def test_general_has_no_keywords(self):
        assert RoleCategory.GENERAL not in {role for role, _ in ROLE_KEYWORDS}


class TestClassify:
    """Test the classify contract used by the controller."""

    def test_both_fields_from_one_message(self):
        """Test stage and role are classified independently."""
        stage, role = classify(
            "I have a software engineer interview tomorrow",
            Stage.UNKNOWN,
            RoleCategory.GENERAL,
        )
        assert stage is Stage.INTERVIEWING
        assert role is RoleCategory.SOFTWARE_ENGINEERING

    def test_known_stage_is_not_reclassified(self):
        stage, role = classify(
            "I got an offer as a designer", Stage.APPLIED, RoleCategory.GENERAL
        )
        assert stage is None
        assert role is RoleCategory.DESIGN

    def test_known_role_is_not_reclassified(self):
        stage, role = classify(
            "I got an offer as a designer", Stage.UNKNOWN, RoleCategory.FINANCE
        )
        assert stage is Stage.OFFERED
        assert role is None

    def test_no_match_returns_none(self):
        assert classify("hello", Stage.UNKNOWN, RoleCategory.GENERAL) == (None, None)

    def test_accepts_string_values(self):
        """Test that plain string state values are treated like enums."""
        stage, _ = classify("I have an interview", "unknown", "general")
        assert stage is Stage.INTERVIEWING

    def test_is_pure(self):
        """Test repeated calls give the same answer."""
        args = ("Preparing for my interview as a data analyst", Stage.UNKNOWN, RoleCategory.GENERAL)
        assert classify(*args) == classify(*args)
