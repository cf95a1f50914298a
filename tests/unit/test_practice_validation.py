# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for practice session configuration validation."""

import pytest

from src.domains.practice.errors import (
    EmptyRequestError,
    InvalidConfigurationError,
    InvalidQuantityError,
    InvalidRangeError,
    MissingTimeLimitError,
    NoChaptersSelectedError,
    PracticeValidationError,
)
from src.domains.practice.validation import (
    validate_chapter,
    validate_chapter_request,
    validate_question_ids,
    validate_session_config,
)
from src.models.practice import ChapterMode, QuestionOrder, TestMode


class TestValidateSessionConfig:
    """Tests for whole-session validation."""

    def test_valid_config_keeps_selected_chapters(self, sample_session_config):
        """Test unselected chapters are dropped and order is preserved."""
        config = validate_session_config(sample_session_config)

        assert config.book_code == "HCV"
        assert list(config.chapters) == ["Kinematics", "Optics"]
        assert config.chapters["Kinematics"].mode == ChapterMode.RANGE
        assert config.chapters["Kinematics"].values.start == 1
        assert config.chapters["Kinematics"].values.end == 3
        assert config.chapters["Optics"].values.count == 2
        assert config.total_requested == 5

    def test_defaults_applied(self):
        """Test order and mode default to sequential practice."""
        config = validate_session_config({
            "bookCode": "HCV",
            "chapters": {"Optics": {"selected": True, "mode": "quantity", "values": {"count": 1}}},
        })

        assert config.question_order == QuestionOrder.SEQUENTIAL
        assert config.test_mode == TestMode.PRACTICE
        assert config.time_limit_in_minutes is None
        assert config.hide_metadata is False

    def test_no_chapters_selected(self, sample_session_config):
        """Test a config with every chapter unselected is rejected."""
        for chapter in sample_session_config["chapters"].values():
            chapter["selected"] = False

        with pytest.raises(NoChaptersSelectedError) as exc_info:
            validate_session_config(sample_session_config)

        assert exc_info.value.kind == "NoChaptersSelected"

    def test_empty_chapters(self):
        """Test an empty chapter map counts as nothing selected."""
        with pytest.raises(NoChaptersSelectedError):
            validate_session_config({"bookCode": "HCV", "chapters": {}})

    def test_unselected_chapter_with_bad_values_is_ignored(self):
        """Test values of unselected chapters are never checked."""
        config = validate_session_config({
            "bookCode": "HCV",
            "chapters": {
                "Waves": {"selected": False, "mode": "range", "values": {"start": 9, "end": 1}},
                "Optics": {"selected": True, "mode": "quantity", "values": {"count": 3}},
            },
        })

        assert list(config.chapters) == ["Optics"]

    def test_range_start_after_end(self, sample_session_config):
        """Test a range with start greater than end is rejected."""
        sample_session_config["chapters"]["Kinematics"]["values"] = {"start": 5, "end": 2}

        with pytest.raises(InvalidRangeError) as exc_info:
            validate_session_config(sample_session_config)

        assert exc_info.value.kind == "InvalidRange"
        assert "Kinematics" in exc_info.value.message

    @pytest.mark.parametrize(
        "values",
        [
            {"start": 0, "end": 3},
            {"start": 1},
            {"end": 4},
            {"start": "a", "end": 4},
            {"start": True, "end": 4},
        ],
    )
    def test_range_invalid_bounds(self, sample_session_config, values):
        """Test missing, non-positive or non-numeric bounds are rejected."""
        sample_session_config["chapters"]["Kinematics"]["values"] = values

        with pytest.raises(InvalidRangeError):
            validate_session_config(sample_session_config)

    def test_range_single_question(self, sample_session_config):
        """Test start equal to end is allowed."""
        sample_session_config["chapters"]["Kinematics"]["values"] = {"start": 4, "end": 4}

        config = validate_session_config(sample_session_config)

        assert config.chapters["Kinematics"].requested_count == 1

    def test_numeric_strings_are_coerced(self, sample_session_config):
        """Test numeric strings and integral floats are accepted."""
        sample_session_config["chapters"]["Kinematics"]["values"] = {"start": "2", "end": 6.0}

        config = validate_session_config(sample_session_config)

        assert config.chapters["Kinematics"].values.start == 2
        assert config.chapters["Kinematics"].values.end == 6

    @pytest.mark.parametrize(
        "values",
        [{"start": 1, "end": 10**30}, {"start": 1, "end": "2147483648"}, {"start": 1, "end": 1e20}],
    )
    def test_range_beyond_integer_column(self, sample_session_config, values):
        """Test bounds too large for the store's INTEGER column are rejected."""
        sample_session_config["chapters"]["Kinematics"]["values"] = values

        with pytest.raises(InvalidRangeError):
            validate_session_config(sample_session_config)

    def test_range_at_integer_limit(self, sample_session_config):
        """Test the largest INTEGER value is still accepted."""
        sample_session_config["chapters"]["Kinematics"]["values"] = {"start": 1, "end": 2**31 - 1}

        config = validate_session_config(sample_session_config)

        assert config.chapters["Kinematics"].values.end == 2**31 - 1

    def test_quantity_beyond_integer_column(self, sample_session_config):
        """Test a count too large for the store is rejected."""
        sample_session_config["chapters"]["Optics"]["values"] = {"count": 10**12}

        with pytest.raises(InvalidQuantityError):
            validate_session_config(sample_session_config)

    @pytest.mark.parametrize("count", [0, -3, None, "many", 2.5])
    def test_quantity_invalid_count(self, sample_session_config, count):
        """Test non-positive or non-integer counts are rejected."""
        sample_session_config["chapters"]["Optics"]["values"] = {"count": count}

        with pytest.raises(InvalidQuantityError) as exc_info:
            validate_session_config(sample_session_config)

        assert exc_info.value.kind == "InvalidQuantity"

    def test_timed_without_limit(self, sample_session_config):
        """Test a timed session needs a time limit."""
        sample_session_config["testMode"] = "timed"

        with pytest.raises(MissingTimeLimitError) as exc_info:
            validate_session_config(sample_session_config)

        assert exc_info.value.kind == "MissingTimeLimit"

    def test_timed_with_zero_limit(self, sample_session_config):
        """Test a non-positive time limit counts as missing."""
        sample_session_config["testMode"] = "timed"
        sample_session_config["timeLimitInMinutes"] = 0

        with pytest.raises(MissingTimeLimitError):
            validate_session_config(sample_session_config)

    def test_timed_with_limit(self, sample_session_config):
        """Test a timed session keeps its time limit."""
        sample_session_config["testMode"] = "timed"
        sample_session_config["timeLimitInMinutes"] = 30

        config = validate_session_config(sample_session_config)

        assert config.test_mode == TestMode.TIMED
        assert config.time_limit_in_minutes == 30

    def test_practice_drops_time_limit(self, sample_session_config):
        """Test the time limit is ignored for practice sessions."""
        sample_session_config["timeLimitInMinutes"] = 30

        config = validate_session_config(sample_session_config)

        assert config.time_limit_in_minutes is None

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            [],
            "HCV",
            {"chapters": {}},
            {"bookCode": "", "chapters": {}},
            {"bookCode": 12, "chapters": {}},
            {"bookCode": "HCV", "chapters": ["Optics"]},
            {"bookCode": "HCV", "chapters": {"Optics": "yes"}},
            {"bookCode": "HCV", "chapters": {"Optics": {"selected": "true"}}},
        ],
    )
    def test_malformed_config(self, raw):
        """Test structurally invalid bodies raise InvalidConfigurationError."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            validate_session_config(raw)

        assert exc_info.value.kind == "InvalidConfiguration"

    def test_unknown_question_order(self, sample_session_config):
        """Test an unknown ordering strategy is rejected."""
        sample_session_config["questionOrder"] = "random"

        with pytest.raises(InvalidConfigurationError) as exc_info:
            validate_session_config(sample_session_config)

        assert "questionOrder" in exc_info.value.message

    def test_hide_metadata_must_be_boolean(self, sample_session_config):
        """Test hideMetadata only accepts booleans."""
        sample_session_config["hideMetadata"] = "yes"

        with pytest.raises(InvalidConfigurationError):
            validate_session_config(sample_session_config)

    def test_validation_errors_share_base(self):
        """Test every validation failure is a PracticeValidationError."""
        for error in (
            InvalidRangeError,
            InvalidQuantityError,
            MissingTimeLimitError,
            NoChaptersSelectedError,
            EmptyRequestError,
            InvalidConfigurationError,
        ):
            assert issubclass(error, PracticeValidationError)


class TestValidateChapter:
    """Tests for single chapter validation."""

    def test_missing_mode(self):
        """Test a chapter rule without mode is rejected."""
        with pytest.raises(InvalidConfigurationError):
            validate_chapter("Optics", {"selected": True, "values": {"count": 2}})

    def test_range_drops_count(self):
        """Test only the values used by the mode are kept."""
        chapter = validate_chapter(
            "Optics", {"mode": "range", "values": {"start": 1, "end": 2, "count": 7}}
        )

        assert chapter.values.count is None
        assert chapter.selected is True


class TestValidateChapterRequest:
    """Tests for single chapter requests."""

    def test_valid_request(self):
        """Test a complete request is normalized."""
        request = validate_chapter_request({
            "bookCode": "HCV",
            "chapterName": "Optics",
            "mode": "quantity",
            "values": {"count": 4},
        })

        assert request.book_code == "HCV"
        assert request.chapter_name == "Optics"
        assert request.chapter.values.count == 4

    @pytest.mark.parametrize(
        "raw",
        [
            {"chapterName": "Optics", "mode": "quantity", "values": {"count": 4}},
            {"bookCode": "HCV", "mode": "quantity", "values": {"count": 4}},
            {"bookCode": "HCV", "chapterName": "  ", "mode": "quantity", "values": {"count": 4}},
        ],
    )
    def test_missing_book_or_chapter(self, raw):
        """Test book code and chapter name are required."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            validate_chapter_request(raw)

        assert exc_info.value.message == "Book code and chapter name are required"


class TestValidateQuestionIds:
    """Tests for question ID list validation."""

    @pytest.mark.parametrize("value", [None, [], "q1", {"q1": 1}])
    def test_missing_or_empty(self, value):
        """Test missing, empty or non-list values are an empty request."""
        with pytest.raises(EmptyRequestError) as exc_info:
            validate_question_ids(value)

        assert exc_info.value.message == "Question IDs are required"
        assert exc_info.value.kind == "EmptyRequest"

    @pytest.mark.parametrize("value", [["q1", 2], ["q1", ""], [None]])
    def test_invalid_members(self, value):
        """Test every ID must be a non-empty string."""
        with pytest.raises(InvalidConfigurationError):
            validate_question_ids(value)

    def test_preserves_order_and_duplicates(self):
        """Test the list is returned as given."""
        assert validate_question_ids(["q3", "q1", "q3"]) == ["q3", "q1", "q3"]
