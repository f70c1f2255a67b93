"""Tests for the markdown and terminal report renderers."""

from react_cycles.analyzer.models import (
    AnalysisResult,
    ComponentInfo,
    EdgeInfo,
    StateInfo,
)
from react_cycles.render.markdown import render_markdown
from react_cycles.render.text import render_text


def _result_with_cycle() -> AnalysisResult:
    return AnalysisResult(
        entry="/tmp/app",
        components=[
            ("Writer", ComponentInfo(file_path="src/Writer.jsx", line_number=4)),
            ("Reader", ComponentInfo(file_path="src/Reader.jsx", line_number=7)),
        ],
        states=[
            ("global.a", StateInfo(name="a", owner_scope="global",
                                   state_kind="useSetRecoilState",
                                   file_path="src/Writer.jsx", line_number=5)),
            ("global.b", StateInfo(name="b", owner_scope="global",
                                   state_kind="useRecoilValue")),
        ],
        edges=[
            EdgeInfo(from_="Writer", to="global.a", kind="recoil-writes"),
            EdgeInfo(from_="global.a", to="Reader", kind="recoil-reads"),
            EdgeInfo(from_="Reader", to="global.b", kind="recoil-writes"),
            EdgeInfo(from_="global.b", to="Writer", kind="recoil-reads"),
        ],
        cycles=[["Writer", "global.a", "Reader", "global.b", "Writer"]],
        raw_cycle_count=3,
        suppressed={"self_update": 2},
        files_analyzed=2,
        files_skipped=["src/Broken.jsx"],
    )


def test_markdown_report_with_cycle():
    md = render_markdown(_result_with_cycle())

    assert md.startswith("# Circular State Dependency Report")
    assert "**Entry point**: `/tmp/app`" in md
    assert "**Cycles reported**: 1 (of 3 found)" in md
    assert "## Circular Dependencies" in md
    assert "`Writer → global.a → Reader → global.b → Writer`" in md
    assert "| `Writer` | component | src/Writer.jsx:4 |" in md
    assert "| `global.a` | state | useSetRecoilState at src/Writer.jsx:5 |" in md
    assert "| `global.b` | state | useRecoilValue |" in md
    assert "- Infinite re-renders" in md

    # Supporting sections
    assert "| state updater callback | 2 |" in md
    assert "| `Reader` | `src/Reader.jsx:7` |" in md
    assert "- `recoil-writes`: 2" in md
    assert "- `src/Broken.jsx`" in md

    # Section order
    assert md.index("## Circular Dependencies") < md.index("## Suppressed Cycles")
    assert md.index("## Components") < md.index("## State") < md.index("## Edges by Kind")


def test_markdown_report_without_cycles():
    md = render_markdown(AnalysisResult(entry="."))
    assert "No circular state dependencies found." in md
    assert "## Circular Dependencies" not in md
    assert "## Suppressed Cycles" not in md
    assert "## Skipped Files" not in md


def test_text_report_lists_node_kinds():
    text = render_text(_result_with_cycle(), color=False)
    lines = text.splitlines()
    assert lines[0] == "Found 1 circular dependencies:"
    assert "Cycle 1:" in lines
    assert "  [component] Writer (src/Writer.jsx:4) → " in lines
    assert "  [state] global.b (useRecoilValue) → " in lines
    assert lines[-5] == "These circular dependencies may cause:"
    assert "(cycles back)" in text


def test_text_report_unknown_node():
    result = AnalysisResult(cycles=[["X", "Y", "X"]])
    text = render_text(result, color=False)
    assert "  [?] X → " in text.splitlines()


def test_text_report_no_cycles():
    assert render_text(AnalysisResult(), color=False) == "No circular state dependencies found!"


def test_text_report_color():
    assert "\x1b[" in render_text(_result_with_cycle(), color=True)
