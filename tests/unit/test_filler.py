import asyncio

from tests.helpers.fake_page import FakeElement, FakePage
from tests.helpers.webpilot_imports import FieldDescriptor, Pacing, Role, filler


def _field(selector, role=Role.GENERIC, *, tag="input", input_type="text", name=None):
    return FieldDescriptor(tag=tag, input_type=input_type, role=role, selector=selector, name=name)


def _filler():
    return filler.FieldFiller(pacing=Pacing.disabled(), timeout_ms=100)


def test_typed_value_is_verified():
    element = FakeElement("old")
    page = FakePage({"#email": element})

    result = asyncio.run(_filler().fill(page, _field("#email", Role.EMAIL), "testuser@example.com"))

    assert result.succeeded
    assert not result.retried
    assert result.observed_value == "testuser@example.com"
    assert element.call_names[:3] == ["wait_for", "scroll", "click"]
    assert page.keyboard.presses == ["ControlOrMeta+A", "Delete"]
    assert "fill" not in element.call_names


def test_mismatch_is_retried_once_with_direct_set():
    element = FakeElement(type_transform=lambda text: text[:-1])
    page = FakePage({"#phone": element})

    result = asyncio.run(_filler().fill(page, _field("#phone", Role.PHONE), "+1-555-123-4567"))

    assert result.retried
    assert result.succeeded
    assert result.observed_value == result.expected_value == "+1-555-123-4567"
    assert element.call_names.count("fill") == 1


def test_failed_retry_is_reported_as_mismatch():
    element = FakeElement(type_transform=str.upper, fill_transform=str.upper)
    page = FakePage({"#name": element})

    result = asyncio.run(_filler().fill(page, _field("#name"), "Test"))

    assert result.retried
    assert not result.succeeded
    assert result.error is None
    assert result.observed_value == "TEST"
    assert element.call_names.count("fill") == 1


def test_direct_set_error_keeps_typed_value():
    element = FakeElement(type_transform=lambda text: text[:-1], fail_on={"fill"}, error="masked input")
    page = FakePage({"#phone": element})

    result = asyncio.run(_filler().fill(page, _field("#phone", Role.PHONE), "+1-555-123-4567"))

    assert result.retried
    assert not result.succeeded
    assert result.observed_value == "+1-555-123-456"
    assert result.error == "masked input"


def test_interaction_error_becomes_failed_result():
    page = FakePage()

    result = asyncio.run(_filler().fill(page, _field("#missing"), "Test"))

    assert not result.succeeded
    assert result.observed_value is None
    assert "Timeout 5000ms exceeded" in result.error
    assert "#missing" in result.message


def test_checkbox_is_checked_instead_of_typed():
    element = FakeElement()
    page = FakePage({"#terms": element})

    result = asyncio.run(_filler().fill(page, _field("#terms", input_type="checkbox"), "Test"))

    assert result.succeeded
    assert result.expected_value == result.observed_value == "true"
    assert "press_sequentially" not in element.call_names


def test_select_falls_back_to_first_real_option():
    options = [{"value": "", "label": "Choose..."}, {"value": "us", "label": "United States"}]
    element = FakeElement(scripts={filler.OPTIONS_SCRIPT: options})
    page = FakePage({"#country": element})

    result = asyncio.run(
        _filler().fill(page, _field("#country", tag="select", input_type="select"), "Test")
    )

    assert result.succeeded
    assert result.observed_value == "us"
    assert ("select_option", "us") in element.calls


def test_choose_option_prefers_label_then_value():
    options = [{"value": "a", "label": "Alpha"}, {"value": "Test", "label": "Beta"}, {"value": "c", "label": "Test"}]

    assert filler.choose_option(options, "Test") == "c"
    assert filler.choose_option(options[:2], "Test") == "Test"
    assert filler.choose_option([{"value": "", "label": "None"}], "Test") is None


def test_batch_continues_past_failures_and_keeps_order():
    page = FakePage({"#a": FakeElement(), "#c": FakeElement()})
    fields = [
        _field("#a", Role.EMAIL),
        _field("#b", Role.SUBJECT),
        _field("#c", Role.MESSAGE, tag="textarea", input_type="textarea"),
    ]

    batch = asyncio.run(_filler().fill_all(page, fields, scope="#form"))

    assert batch.total == 3
    assert [result.selector for result in batch.results] == ["#a", "#b", "#c"]
    assert [result.succeeded for result in batch.results] == [True, False, True]
    assert batch.success_count == 2
    assert batch.message == "Filled 2/3 fields in #form"
    assert page.elements["#c"].value == "Hello, this is a test message from the automation agent."


def test_batch_applies_overrides():
    page = FakePage({"#p": FakeElement()})

    batch = asyncio.run(
        _filler().fill_all(page, [_field("#p", Role.PASSWORD)], overrides={Role.PASSWORD: "hunter2"})
    )

    assert batch.results[0].expected_value == "hunter2"
    assert page.elements["#p"].value == "hunter2"
