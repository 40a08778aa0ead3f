import asyncio

from bs4 import BeautifulSoup

from tests.helpers.fake_page import FakePage
from tests.helpers.webpilot_imports import ScanTarget, dom_scripts, sections

PAGE = """
<html><body>
  <nav><a href="/contact-us">Contact us</a><a href="/about">About</a></nav>
  <section id="contact">
    <h2>Get in touch</h2>
    <form id="cf"><input name="email"><textarea name="message"></textarea></form>
  </section>
  <footer class="site-footer"><a href="/login" title="Sign in">Account</a></footer>
</body></html>
"""


def _soup():
    return BeautifulSoup(PAGE, "html.parser")


def test_contact_section_from_static_html():
    report = sections.CONTACT_LOCATOR.locate_soup(_soup(), "https://example.com/")

    assert report.category is ScanTarget.CONTACT
    assert report.found
    assert [(link.text, link.href) for link in report.links] == [
        ("Contact us", "https://example.com/contact-us")
    ]
    assert report.links[0].selector == ":root > body:nth-of-type(1) > nav:nth-of-type(1) > a:nth-of-type(1)"
    assert [(region.tag, region.selector, region.has_form) for region in report.regions] == [
        ("section", "#contact", True)
    ]
    assert [form.selector for form in report.forms] == ["#cf"]


def test_auth_section_from_static_html():
    report = sections.AUTH_LOCATOR.locate_soup(_soup(), "https://example.com/")

    assert [link.href for link in report.links] == ["https://example.com/login"]
    assert report.links[0].title == "Sign in"
    assert report.regions == ()
    assert report.forms == ()


def test_duplicate_links_are_reported_once():
    link = {"tag": "a", "text": "Contact", "href": "https://example.com/contact", "id": "c"}

    report = sections.CONTACT_LOCATOR.build_report([link, dict(link)], [], ())

    assert len(report.links) == 1
    assert report.links[0].selector == "#c"


def test_live_section_lookup():
    scripts = {
        dom_scripts.SECTION_SCRIPT: lambda _arg: {
            "links": [{"tag": "a", "text": "Log in", "href": "https://example.com/login", "class_name": "nav-login"}],
            "regions": [{"tag": "div", "id": "auth-box", "has_form": False, "text": "Sign in"}],
        },
        dom_scripts.SCAN_SCRIPT: lambda _scope: {"forms": [], "loose_fields": []},
    }
    page = FakePage(scripts=scripts)

    report = asyncio.run(sections.AUTH_LOCATOR.locate_page(page))

    script, arg = page.evaluations[0]
    assert script == dom_scripts.SECTION_SCRIPT
    assert arg["pattern"] == sections.AUTH_SECTION_KEYWORDS
    assert "footer" in arg["containers"]
    assert report.links[0].selector == ".nav-login"
    assert report.regions[0].selector == "#auth-box"
    assert report.forms == ()
    assert report.found
