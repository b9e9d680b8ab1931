"""Tests for hf.output.console module."""

from __future__ import annotations

from hf.output.console import ConsoleProtocol, MockConsole, OutputRecord, Style


def test_style_str() -> None:
    assert str(Style.SUCCESS) == "success"
    assert str(Style.DIM) == "dim"


class TestMockConsole:
    def test_captures_styles(self) -> None:
        console = MockConsole()
        console.print("plain")
        console.success("done")
        console.error("boom")
        console.header("Hotfix v1")

        assert console.outputs == [
            OutputRecord("plain", Style.DEFAULT),
            OutputRecord("OK done", Style.SUCCESS),
            OutputRecord("error: boom", Style.ERROR),
            OutputRecord("Hotfix v1", Style.HEADER),
        ]
        assert console.has_error()

    def test_text_and_find(self) -> None:
        console = MockConsole()
        console.info("a [b] c")
        console.warning("w")
        assert console.text == "info: a [b] c\nwarning: w"
        assert len(console.find("[b]")) == 1

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("x", Style.DIM)
