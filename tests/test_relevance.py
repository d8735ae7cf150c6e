import json

import pytest

from enginebuilder.relevance import RelevanceDecision, RelevanceStatus


def _round_trip(decision):
    return RelevanceDecision.from_dict(json.loads(json.dumps(decision.to_dict())))


def test_relevance_status_serialization():
    cases = [
        (RelevanceDecision.relevant("m", "s"), '"Relevant"', RelevanceStatus.RELEVANT),
        (RelevanceDecision.not_relevant("m"), '"NotRelevant"', RelevanceStatus.NOT_RELEVANT),
        (RelevanceDecision.parse_error("m"), '"ParseError"', RelevanceStatus.PARSE_ERROR),
    ]
    for decision, wire, status in cases:
        assert json.dumps(decision.to_dict()["status"]) == wire
        assert RelevanceStatus(json.loads(wire)) is status


def test_relevance_decision_relevant():
    message = "The file contains core functionality"
    summary = "This file defines the main data structures"
    decision = RelevanceDecision.relevant(message, summary)

    assert decision.message == message
    assert decision.status is RelevanceStatus.RELEVANT
    assert decision.summary == summary
    assert decision.is_relevant()

    restored = _round_trip(decision)
    assert restored.message == message
    assert restored.status is RelevanceStatus.RELEVANT
    assert restored.summary == summary
    assert restored.is_relevant()


def test_relevance_decision_not_relevant():
    message = "The file is a test utility and not relevant"
    decision = RelevanceDecision.not_relevant(message)

    assert decision.message == message
    assert decision.status is RelevanceStatus.NOT_RELEVANT
    assert decision.summary is None
    assert not decision.is_relevant()

    restored = _round_trip(decision)
    assert restored.message == message
    assert restored.status is RelevanceStatus.NOT_RELEVANT
    assert restored.summary is None
    assert not restored.is_relevant()


def test_relevance_decision_parse_error():
    message = "Could not parse the LLM response"
    decision = RelevanceDecision.parse_error(message)

    assert decision.message == message
    assert decision.status is RelevanceStatus.PARSE_ERROR
    assert decision.summary is None
    assert not decision.is_relevant()

    restored = _round_trip(decision)
    assert restored.message == message
    assert restored.status is RelevanceStatus.PARSE_ERROR
    assert restored.summary is None
    assert not restored.is_relevant()


def test_missing_summary_means_none():
    decision = RelevanceDecision.from_dict({"message": "m", "status": "NotRelevant"})
    assert decision.summary is None
    assert decision.status is RelevanceStatus.NOT_RELEVANT


def test_unknown_status_rejected():
    with pytest.raises(ValueError):
        RelevanceDecision.from_dict({"message": "m", "status": "Maybe"})


def test_missing_message_rejected():
    with pytest.raises(ValueError, match="message"):
        RelevanceDecision.from_dict({"status": "Relevant"})