"""Unit tests for request sanitization."""

from __future__ import annotations

import pytest

from report_comments.models import MAX_TOPICS, CommentRequest


def test_defaults_for_empty_body() -> None:
    req = CommentRequest.from_payload({})

    assert req.student_first_name == "Student"
    assert req.strength_topics == []
    assert req.developing_topics == []
    assert req.focus_topics == []


@pytest.mark.parametrize("body", [None, [], "text", 42, True])
def test_non_object_body_is_treated_as_empty(body: object) -> None:
    req = CommentRequest.from_payload(body)

    assert req.student_first_name == "Student"
    assert req.focus_topics == []


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_name_defaults_to_student(name: object) -> None:
    req = CommentRequest.from_payload({"studentFirstName": name})

    assert req.student_first_name == "Student"


def test_name_is_coerced_and_trimmed() -> None:
    assert CommentRequest.from_payload({"studentFirstName": "  Ava \n"}).student_first_name == "Ava"
    assert CommentRequest.from_payload({"studentFirstName": 7}).student_first_name == "7"


def test_topics_are_trimmed_and_empties_dropped() -> None:
    req = CommentRequest.from_payload(
        {"strengthTopics": ["  Fractions ", "", "   ", None, "Angles", 3]}
    )

    assert req.strength_topics == ["Fractions", "Angles", "3"]


def test_non_list_topics_become_empty() -> None:
    req = CommentRequest.from_payload(
        {"strengthTopics": "Fractions", "developingTopics": {"a": 1}, "focusTopics": 5}
    )

    assert req.strength_topics == []
    assert req.developing_topics == []
    assert req.focus_topics == []


def test_long_topic_lists_keep_first_ten_non_empty_in_order() -> None:
    topics = [" "] + [f"topic {chr(ord('a') + i)}" for i in range(15)]

    req = CommentRequest.from_payload({"focusTopics": topics})

    assert len(req.focus_topics) == MAX_TOPICS
    assert req.focus_topics == [f"topic {chr(ord('a') + i)}" for i in range(10)]


def test_prompt_payload_uses_wire_names() -> None:
    req = CommentRequest.from_payload({"studentFirstName": "Ava", "focusTopics": ["Algebra"]})

    assert req.prompt_payload() == {
        "studentFirstName": "Ava",
        "strengthTopics": [],
        "developingTopics": [],
        "focusTopics": ["Algebra"],
    }


@pytest.mark.parametrize("name", [False, 0, 0.0])
def test_falsy_name_defaults_to_student(name: object) -> None:
    assert CommentRequest.from_payload({"studentFirstName": name}).student_first_name == "Student"


def test_scalar_topics_render_like_json() -> None:
    req = CommentRequest.from_payload({"focusTopics": [True, False, 1.0, 2.5, 3]})

    assert req.focus_topics == ["true", "false", "1", "2.5", "3"]
