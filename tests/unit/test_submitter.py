import asyncio

from tests.helpers.fake_page import FakeElement, FakePage
from tests.helpers.webpilot_imports import CandidateKind, Pacing, dom_scripts, submitter


def _submitter():
    return submitter.FormSubmitter(pacing=Pacing.disabled(), timeout_ms=100)


def _candidates_page(candidates, elements=None, native=True):
    scripts = {
        dom_scripts.SUBMIT_CANDIDATES_SCRIPT: lambda _arg: {
            "scope_found": True,
            "scope_path": "body:nth-of-type(1) > form:nth-of-type(1)",
            "candidates": candidates,
        },
        dom_scripts.NATIVE_SUBMIT_SCRIPT: native,
    }
    return FakePage(elements, scripts)


def test_candidate_kinds():
    assert submitter.candidate_kind({"tag": "button"}) is CandidateKind.EXPLICIT_SUBMIT
    assert submitter.candidate_kind({"tag": "input", "type": "submit"}) is CandidateKind.EXPLICIT_SUBMIT
    assert submitter.candidate_kind({"tag": "div", "class_name": "btn send-now"}) is CandidateKind.ATTRIBUTE_HEURISTIC
    assert submitter.candidate_kind({"tag": "a", "onclick": "doSubmit()"}) is CandidateKind.ATTRIBUTE_HEURISTIC
    assert submitter.candidate_kind({"tag": "button", "type": "button"}) is None
    assert submitter.candidate_kind({"tag": "input", "type": "reset", "id": "submit"}) is None


def test_explicit_candidates_come_before_heuristic_ones():
    raw = [
        {"tag": "div", "id": "send-link", "path": "div:nth-of-type(1)"},
        {"tag": "button", "type": "submit", "path": "button:nth-of-type(1)", "text": "Go"},
    ]

    candidates = submitter.build_candidates(raw, "#form")

    assert [candidate.kind for candidate in candidates] == [
        CandidateKind.EXPLICIT_SUBMIT,
        CandidateKind.ATTRIBUTE_HEURISTIC,
    ]
    assert [candidate.selector for candidate in candidates] == [
        "#form > button:nth-of-type(1)",
        "#send-link",
    ]


def test_unscoped_discovery_targets_first_form():
    page = _candidates_page([{"tag": "button", "path": "button:nth-of-type(1)"}])

    candidates = asyncio.run(_submitter().discover(page))

    assert page.evaluations[0][1] == {"scopeSelector": None, "pattern": submitter.SUBMIT_ATTRIBUTE_PATTERN}
    assert candidates[0].selector == (
        ":root > body:nth-of-type(1) > form:nth-of-type(1) > button:nth-of-type(1)"
    )


def test_first_working_click_wins():
    broken = FakeElement(fail_on={"click"}, error="element is not visible")
    working = FakeElement()
    page = _candidates_page(
        [
            {"tag": "button", "type": "submit", "id": "broken"},
            {"tag": "span", "class_name": "submit-button"},
        ],
        {"#broken": broken, ".submit-button": working},
    )

    result = asyncio.run(_submitter().submit(page, "#form"))

    assert result.succeeded
    assert result.method == "click"
    assert result.candidate.selector == ".submit-button"
    assert result.candidate.kind is CandidateKind.ATTRIBUTE_HEURISTIC
    assert [attempt.error for attempt in result.attempts] == ["element is not visible", None]
    assert ("evaluate", dom_scripts.HIGHLIGHT_SCRIPT) in working.calls
    assert page.clicked == [working]


def test_disabled_only_candidate_falls_back_to_programmatic_submit():
    page = _candidates_page([{"tag": "div", "class_name": "btn-submit", "disabled": True}], {".btn-submit": FakeElement()})

    result = asyncio.run(_submitter().submit(page, "#f"))

    assert result.succeeded
    assert result.method == "programmatic"
    assert result.candidate is None
    assert page.clicked == []
    assert (dom_scripts.NATIVE_SUBMIT_SCRIPT, "#f") in page.evaluations


def test_failure_reports_last_error():
    page = _candidates_page([], native=RuntimeError("No form element to submit"))

    result = asyncio.run(_submitter().submit(page, "#nothing"))

    assert not result.succeeded
    assert result.error == "No form element to submit"
    assert result.message == "Failed to submit #nothing: No form element to submit"
