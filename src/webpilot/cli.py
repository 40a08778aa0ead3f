"""Command line interface for WebPilot."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import requests

from .auth.login import login_with_credentials
from .browser.session import capture_screenshot, navigate, open_page
from .core.config import EngineConfig, load_configuration, require_credentials
from .core.dependencies import verify_dependencies
from .core.errors import ConfigurationError
from .core.models import ScanTarget, SectionReport
from .core.report import ScanReport
from .engine import FormEngine
from .recon.forms import FormScanner
from .recon.sections import AUTH_LOCATOR, CONTACT_LOCATOR
from .recon.static import load_soup, page_title


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="WebPilot form discovery and fill engine")
    parser.add_argument("--headless", action="store_true", help="Run the browser without a window")
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    scan = commands.add_parser("scan", help="List forms and fields on a page")
    scan.add_argument("url")
    scan.add_argument("--target", choices=[item.value for item in ScanTarget], default="all")
    scan.add_argument("--static", action="store_true", help="Parse fetched HTML or a local file, no browser")
    scan.add_argument("--report", default="webpilot_report.json", help="Report output file")
    scan.add_argument("--screenshot", default=None, help="Save a viewport JPEG after the scan")

    for name, text in (("contact", "Locate the contact section"), ("auth", "Locate the login/sign-up section")):
        section = commands.add_parser(name, help=text)
        section.add_argument("url")

    fill = commands.add_parser("fill", help="Fill a form with test values")
    fill.add_argument("url")
    fill.add_argument("--form", default=None, help="CSS selector of the form (first form with fields when omitted)")
    fill.add_argument("--submit", action="store_true", help="Submit after filling")
    fill.add_argument("--no-pacing", action="store_true", help="Disable typing and step delays")

    login = commands.add_parser("login", help="Log in with the credentials from .env")
    login.add_argument("url")

    commands.add_parser("doctor", help="Check prerequisites")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_dependency_status() -> bool:
    status = verify_dependencies()
    missing = [name for name, ok in status.items() if not ok]
    for name, ok in status.items():
        print(f"[{'+' if ok else '!'}] {name} {'found' if ok else 'not found'}")
    if missing:
        print("[!] Install the dependencies above (and run `playwright install chromium`).")
        return False
    return True


def print_forms(report: ScanReport) -> None:
    if not report.forms:
        print(" - No forms found.")
    for form in report.forms:
        flags = [name for name, on in (("contact", form.is_contact_form), ("auth", form.is_auth_form)) if on]
        kind = "implicit scope" if form.implicit else "form"
        print(f" - {kind} {form.selector} [{', '.join(flags) or 'generic'}]")
        for item in form.fields:
            print(f"     {item.role.value:<10} {item.input_type:<9} {item.selector}")


def print_section(report: SectionReport) -> None:
    if report.error:
        print(f"[!] {report.error}")
        return
    if not report.found:
        print(f" - No {report.category.value} section found.")
        return
    for link in report.links:
        print(f" - link {link.text or link.href!r} -> {link.href}")
    for region in report.regions:
        print(f" - region {region.selector}{' (has form)' if region.has_form else ''}")
    for form in report.forms:
        print(f" - form {form.selector} ({len(form.fields)} field(s))")


def run_static_scan(url: str, target: ScanTarget) -> ScanReport:
    soup, base_url = load_soup(url)
    return ScanReport(
        url=base_url,
        title=page_title(soup),
        forms=FormScanner(target=target).scan_soup(soup, base_url),
        contact=CONTACT_LOCATOR.locate_soup(soup, base_url) if target is ScanTarget.CONTACT else None,
        auth=AUTH_LOCATOR.locate_soup(soup, base_url) if target is ScanTarget.AUTH else None,
    )


async def run_browser_command(args: argparse.Namespace, config: EngineConfig) -> int:
    engine = FormEngine(config)
    async with open_page(config) as page:
        ok, message = await navigate(page, args.url, config.navigation_timeout_ms)
        print(f"[{'+' if ok else '!'}] {message}")
        if not ok:
            return 1

        if args.command == "scan":
            report = await engine.scan(page, args.target)
            print_forms(report)
            if args.screenshot:
                saved = await capture_screenshot(page, Path(args.screenshot))
                print(f"[+] Screenshot saved to {saved}")
            report.save(config.report_path)
            print(f"[+] Report saved to {config.report_path}")
            return 1 if report.error else 0

        if args.command in ("contact", "auth"):
            locate = engine.locate_contact_section if args.command == "contact" else engine.locate_auth_section
            section = await locate(page)
            print_section(section)
            return 1 if section.error else 0

        if args.command == "fill":
            batch = await engine.fill_form(page, args.form)
            print(f"[{'+' if batch.success_count else '!'}] {batch.message}")
            for result in batch.results:
                print(f" - {'OK' if result.succeeded else 'FAIL'} :: {result.message}")
            if args.submit and not batch.error:
                submitted = await engine.submit(page, batch.scope)
                print(f"[{'+' if submitted.succeeded else '!'}] {submitted.message}")
            return 1 if batch.error else 0

        result = await login_with_credentials(page, engine, config)
        print(f"[{'+' if result.succeeded else '!'}] {result.message}")
        return 0 if result.succeeded else 1


def run_cli(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    if args.command == "doctor":
        print("[*] Checking dependencies...")
        return 0 if print_dependency_status() else 1

    try:
        config = load_configuration(
            args.url,
            getattr(args, "report", "webpilot_report.json"),
            pacing_enabled=not getattr(args, "no_pacing", False),
            headless=True if args.headless else None,
        )
        if args.command == "login":
            require_credentials(config)
    except ConfigurationError as exc:
        print(f"[!] {exc}")
        return 1

    if args.command == "scan" and args.static:
        if args.screenshot:
            print("[!] --screenshot needs a live browser (drop --static)")
            return 1
        print(f"[*] Static scan of {args.url}")
        try:
            report = run_static_scan(args.url, ScanTarget(args.target))
        except (requests.RequestException, OSError) as exc:
            print(f"[!] Could not read {args.url}: {exc}")
            return 1
        print_forms(report)
        for section in (report.contact, report.auth):
            if section is not None:
                print_section(section)
        report.save(config.report_path)
        print(f"[+] Report saved to {config.report_path}")
        return 0

    print(f"[*] Opening {args.url}")
    return asyncio.run(run_browser_command(args, config))


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
