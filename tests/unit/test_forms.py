import asyncio

from tests.helpers.fake_page import FakePage
from tests.helpers.webpilot_imports import FormScanner, Role, ScanTarget, dom_scripts, values

CONTACT_PAGE = """
<html><body>
  <form id="contact-form" action="/send" method="post">
    <input type="text" name="email" placeholder="Email">
    <textarea name="msg"></textarea>
    <input type="hidden" name="csrf" value="x">
    <button type="submit">Send</button>
  </form>
</body></html>
"""


def test_contact_form_fields_are_classified():
    forms = FormScanner().scan_html(CONTACT_PAGE, "https://example.com/")

    assert len(forms) == 1
    form = forms[0]
    assert form.selector == "#contact-form"
    assert form.action == "https://example.com/send"
    assert form.method == "post"
    assert form.is_contact_form and not form.is_auth_form
    assert not form.implicit

    email, message = form.fields
    assert email.role is Role.EMAIL
    assert email.selector == "#contact-form > input:nth-of-type(1)"
    assert email.form_index == 0
    assert values.value_for_field(email) == "testuser@example.com"
    assert message.role is Role.MESSAGE
    assert message.selector == "#contact-form > textarea:nth-of-type(1)"
    assert values.value_for_field(message) == "Hello, this is a test message from the automation agent."


def test_document_without_forms_or_fields_is_empty():
    assert FormScanner().scan_html("<html><body><p>Nothing to see</p></body></html>") == ()


def test_loose_fields_become_implicit_scope():
    html = "<html><body><div><input name='email'><input type='submit' value='Go'></div></body></html>"

    forms = FormScanner().scan_html(html)

    assert len(forms) == 1
    scope = forms[0]
    assert scope.implicit
    assert scope.selector == ":root"
    assert [item.role for item in scope.fields] == [Role.EMAIL]
    assert scope.fields[0].form_index is None
    assert scope.fields[0].selector == (
        ":root > body:nth-of-type(1) > div:nth-of-type(1) > input:nth-of-type(1)"
    )


def test_hidden_fields_are_excluded_but_form_is_kept():
    html = """
    <html><body>
      <form id="f">
        <input name="phone" style="display: none">
        <div hidden><input name="email"></div>
        <input type="reset">
      </form>
    </body></html>
    """

    forms = FormScanner().scan_html(html)

    assert len(forms) == 1
    assert forms[0].fields == ()


def test_file_inputs_are_excluded():
    html = "<html><body><form id='f'><input type='file' name='cv'><input name='email'></form></body></html>"

    forms = FormScanner().scan_html(html)

    assert [item.name for item in forms[0].fields] == ["email"]


def test_radio_group_yields_one_field():
    html = """
    <html><body>
      <form id="f">
        <input type="radio" name="plan" value="basic">
        <input type="radio" name="plan" value="pro">
        <input type="radio" name="contact_by" value="email">
        <input name="email">
      </form>
    </body></html>
    """

    fields = FormScanner().scan_html(html)[0].fields

    assert [(item.input_type, item.name) for item in fields] == [
        ("radio", "plan"),
        ("radio", "contact_by"),
        ("text", "email"),
    ]


def test_duplicate_classes_get_structural_selectors():
    html = """
    <html><body>
      <form class="f"><input name="a"></form>
      <form class="f"><input name="b"></form>
    </body></html>
    """

    first, second = FormScanner().scan_html(html)

    assert first.selector == ":root > body:nth-of-type(1) > form:nth-of-type(1)"
    assert second.selector == ":root > body:nth-of-type(1) > form:nth-of-type(2)"
    assert second.index == 1
    assert second.fields[0].selector == second.selector + " > input:nth-of-type(1)"


def test_target_filters_forms_by_category():
    html = """
    <html><body>
      <form id="search"><input type="search" name="q"></form>
      <form id="signin"><input name="login"><input name="pass"></form>
    </body></html>
    """

    auth = FormScanner(target=ScanTarget.AUTH).scan_html(html)
    contact = FormScanner(target=ScanTarget.CONTACT).scan_html(html)
    everything = FormScanner().scan_html(html)

    assert [form.selector for form in auth] == ["#signin"]
    assert [item.role for item in auth[0].fields] == [Role.USERNAME, Role.PASSWORD]
    assert contact == ()
    assert len(everything) == 2


def test_scope_restricts_the_scan():
    html = """
    <html><body>
      <form id="one"><input name="email"></form>
      <form id="two"><input name="subject"></form>
    </body></html>
    """

    forms = FormScanner(scope="#two").scan_html(html)
    missing = FormScanner(scope="#nope").scan_html(html)

    assert [form.selector for form in forms] == ["#two"]
    assert forms[0].index == 1
    assert missing == ()


def test_live_scan_uses_raw_records():
    snapshot = {
        "url": "https://example.com/",
        "scope_found": True,
        "forms": [
            {
                "index": 0,
                "id": "contact",
                "path": "body:nth-of-type(1) > form:nth-of-type(1)",
                "fields": [
                    {"tag": "input", "type": "tel", "name": "contact_no", "id": "tel", "visible": True},
                    {"tag": "input", "type": "text", "name": "nick", "visible": False},
                    {"tag": "input", "type": "submit", "visible": True},
                ],
            }
        ],
        "loose_fields": [],
    }
    page = FakePage(scripts={dom_scripts.SCAN_SCRIPT: lambda scope: snapshot})

    forms = asyncio.run(FormScanner().scan_page(page))

    assert page.evaluations == [(dom_scripts.SCAN_SCRIPT, None)]
    assert len(forms) == 1
    assert [(item.role, item.selector) for item in forms[0].fields] == [(Role.PHONE, "#tel")]
