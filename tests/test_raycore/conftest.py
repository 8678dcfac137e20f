"""
Pytest Configuration and HTML Report Hooks

Every run of the raycore suite writes a pytest-html report into
tests/test_raycore/test_reports/. Two columns are added to the results table:

Test Description, filled from the @pytest.mark.test_meta marker
(description, goal, passing_criteria).
Plot, filled with any figures a test attached through
helpers.attach_plot_to_html_report().
"""

from html import escape
from pathlib import Path

import pytest

REPORT_DIR = Path(__file__).resolve().parent / "test_reports"


def _report_name_from_args(args):
    """
    Name the report after the single test module being run, if there is one.

    "pytest tests/test_raycore/test_plane.py::test_x" -> "report_plane.html".
    Runs over several modules (or the whole directory) get "report_raycore.html".

    :param args: Command-line arguments pytest was invoked with.
    :return: Report filename.
    """
    modules = set()
    for arg in map(str, args):
        if arg.startswith("-"):
            continue
        path = Path(arg.split("::", 1)[0])
        if path.suffix == ".py" and path.name.startswith("test_"):
            modules.add(path.stem.removeprefix("test_"))

    if len(modules) == 1:
        return f"report_{modules.pop()}.html"
    return f"report_{REPORT_DIR.parent.name.removeprefix('test_')}.html"


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config):
    # An explicit --html on the command line wins.
    if any(str(arg).startswith("--html") for arg in config.invocation_params.args):
        return
    REPORT_DIR.mkdir(parents=True, exist_ok=True)
    config.option.htmlpath = str(REPORT_DIR / _report_name_from_args(config.invocation_params.args))


def pytest_html_results_table_header(cells):
    cells.insert(3, '<th class="col-testmeta">Test Description</th>')
    cells.insert(4, '<th class="col-plot">Plot</th>')


def _format_test_meta(report):
    """Render the test_meta marker of a report as an HTML block."""
    meta = getattr(report, "test_meta", None)
    if not meta:
        return '<div style="color:#666;">n/a</div>'

    rows = (
        ("Test Description", meta.get("description", "")),
        ("Test Goal", meta.get("goal", "")),
        ("Passing Criteria", meta.get("passing_criteria", "")),
    )
    body = "".join(f"<div><strong>{label}:</strong> {escape(str(text))}</div>" for label, text in rows)
    return f'<div style="min-width:340px;max-width:520px;line-height:1.35;">{body}</div>'


def _format_plots(report):
    images = []
    for extra in getattr(report, "extras", []):
        content = extra.get("content")
        if extra.get("format_type") != "image" or not content:
            continue
        images.append(
            f'<a href="{content}" target="_blank" rel="noopener noreferrer">'
            f'<img src="{content}" alt="plot" '
            f'style="max-width:320px;height:auto;display:block;margin:4px 0;cursor:zoom-in;" />'
            f"</a>"
        )
    return "".join(images)


def pytest_html_results_table_row(report, cells):
    cells.insert(3, f'<td class="col-testmeta">{_format_test_meta(report)}</td>')
    cells.insert(4, f'<td class="col-plot">{_format_plots(report)}</td>')


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Copy the test_meta marker and any attached plots onto the call-phase report.
    """
    outcome = yield
    report = outcome.get_result()
    if report.when != "call":
        return

    marker = item.get_closest_marker("test_meta")
    if marker:
        report.test_meta = {
            "description": marker.kwargs.get("description", ""),
            "goal": marker.kwargs.get("goal", ""),
            "passing_criteria": marker.kwargs.get("passing_criteria", ""),
        }

    item_extra = getattr(item, "extra", None)
    if not item_extra:
        return
    extras = getattr(report, "extras", [])
    extras.extend(dict(extra) for extra in item_extra)
    report.extras = extras
    # Older pytest-html versions read report.extra
    if hasattr(report, "extra"):
        report.extra = extras
