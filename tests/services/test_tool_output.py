from __future__ import annotations

from repolint.services.tool_output import PathTranslator, ToolFinding, parse_liche, parse_misspell


def test_translator_prefers_longest_match() -> None:
    translate = PathTranslator({"/s/README": "README", "/s/README.md": "docs/README.md"})

    assert translate("/s/README.md and /s/README") == "docs/README.md and README"


def test_empty_translator_is_identity() -> None:
    assert PathTranslator({})("unchanged") == "unchanged"


def test_misspell_skips_unparseable_lines() -> None:
    output = 'garbage line\n/s/a.md:1:2: "teh" is a misspelling of "the"\n\n'

    findings = parse_misspell(output, PathTranslator({"/s/a.md": "a.md"}))

    assert findings == [ToolFinding("a.md:1:2", '"teh" is a misspelling of "the"')]


def test_liche_error_without_detail_line_is_dropped() -> None:
    output = "/s/a.md\n\tERROR\thttp://x.invalid"

    assert parse_liche(output, PathTranslator({"/s/a.md": "a.md"})) == []


def test_liche_ignores_root_directory_errors() -> None:
    output = "/s/a.md\n\tERROR\t/abs/link\n\t\troot directory is not specified\n"

    assert parse_liche(output, PathTranslator({})) == []


def test_finding_renders_location_and_message() -> None:
    assert str(ToolFinding("a.md: http://x", "refused")) == "a.md: http://x: refused"
