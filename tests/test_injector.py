"""
Tests for the injector — applying one decoded Injection.
"""

import logging
from pathlib import Path

import pytest

from stencil.adapters.console import CollectingPrinter
from stencil.adapters.memory import MemoryStorage
from stencil.core.engine.injector import apply_injection, run_injection, should_skip
from stencil.core.errors import TargetMissingError
from stencil.core.models.directive import Injection


def _inj(**kwargs) -> Injection:
    kwargs.setdefault("into", "target.txt")
    return Injection.model_validate(kwargs)


# ── Pure application ────────────────────────────────────────────────


class TestApplyInjection:
    def test_prepend(self):
        assert apply_injection("body", _inj(prepend=True, content="head")) == "head\nbody"

    def test_append(self):
        assert apply_injection("body", _inj(append=True, content="tail")) == "body\ntail"

    def test_before(self):
        result = apply_injection("a\nEND\nEND", _inj(before="END", content="X"))
        assert result == "a\nX\nEND\nEND"

    def test_before_last(self):
        result = apply_injection("a\nEND\nb\nEND\nc", _inj(before_last="END", content="X"))
        assert result == "a\nEND\nb\nX\nEND\nc"

    def test_before_all(self):
        result = apply_injection("END\nEND", _inj(before_all="END", content="X"))
        assert result == "X\nEND\nX\nEND"

    def test_after(self):
        result = apply_injection("END\nEND", _inj(after="END", content="X"))
        assert result == "END\nX\nEND"

    def test_after_last(self):
        result = apply_injection("END\nEND", _inj(after_last="END", content="X"))
        assert result == "END\nEND\nX"

    def test_after_all(self):
        result = apply_injection("END\nx\nEND", _inj(after_all="END", content="X"))
        assert result == "END\nX\nx\nEND\nX"

    def test_inline_flag_is_honoured(self):
        result = apply_injection("foo(a)", _inj(after="foo\\(", content="b, ", inline=True))
        assert result == "foo(b, a)"

    def test_remove_lines(self):
        text = "keep1\ndrop me\nkeep2\ndrop again\nkeep3"
        assert apply_injection(text, _inj(remove_lines="^drop")) == "keep1\nkeep2\nkeep3"

    def test_remove_lines_keeps_final_newline(self):
        assert apply_injection("a\n\nb\n", _inj(remove_lines=r"^\s*$")) == "a\nb\n"

    def test_remove_every_line(self):
        assert apply_injection("x\nx\n", _inj(remove_lines="x")) == ""

    def test_remove_lines_no_match(self):
        assert apply_injection("a\nb", _inj(remove_lines="zzz")) == "a\nb"

    def test_replace_first_only(self):
        assert apply_injection("aXaXa", _inj(replace="X", content="Y")) == "aYaXa"

    def test_replace_all(self):
        assert apply_injection("aXaXa", _inj(replace_all="X", content="Y")) == "aYaYa"

    def test_replace_payload_is_literal(self):
        result = apply_injection("path=X", _inj(replace="X", content=r"C:\new"))
        assert result == r"path=C:\new"

    def test_replace_across_lines(self):
        result = apply_injection("start\nold\nend", _inj(replace="start\nold", content="new"))
        assert result == "new\nend"

    def test_no_placement_is_unchanged_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="stencil"):
            result = apply_injection("content", _inj(content="x"))
        assert result == "content"
        assert "No injection made" in caplog.text


class TestShouldSkip:
    def test_matches_anywhere_in_file(self):
        assert should_skip("a\nmod post;\nb", _inj(append=True, skip_if="mod post;"))

    def test_no_match(self):
        assert not should_skip("a\nb", _inj(append=True, skip_if="mod post;"))

    def test_without_skip_if(self):
        assert not should_skip("anything", _inj(append=True))


# ── With storage ────────────────────────────────────────────────────


class TestRunInjection:
    def test_patches_and_notifies(self):
        storage = MemoryStorage({"target.txt": "a"})
        printer = CollectingPrinter()
        done = run_injection(_inj(append=True, content="b"), Path("target.txt"), storage, printer)
        assert done is True
        assert storage.files["target.txt"] == "a\nb"
        assert printer.events == [("injected", "target.txt")]

    def test_missing_target_fails(self):
        storage = MemoryStorage()
        with pytest.raises(TargetMissingError) as exc:
            run_injection(_inj(append=True), Path("target.txt"), storage, CollectingPrinter())
        assert exc.value.path == Path("target.txt")
        assert storage.write_count == 0

    def test_skip_if_writes_nothing(self):
        storage = MemoryStorage({"target.txt": "pub mod post;"})
        printer = CollectingPrinter()
        injection = _inj(append=True, skip_if="pub mod post;", content="pub mod post;")
        assert run_injection(injection, Path("target.txt"), storage, printer) is False
        assert storage.write_count == 0
        assert printer.events == []

    def test_no_placement_still_writes_and_notifies(self):
        storage = MemoryStorage({"target.txt": "same"})
        printer = CollectingPrinter()
        run_injection(_inj(content="x"), Path("target.txt"), storage, printer)
        assert storage.write_log == [("target.txt", "same")]
        assert printer.of("injected") == ["target.txt"]

    def test_crlf_target_is_normalized(self):
        storage = MemoryStorage({"target.txt": "a\r\nEND\r\nb\r\n"})
        run_injection(_inj(after="END$", content="X"), Path("target.txt"), storage, CollectingPrinter())
        assert storage.files["target.txt"] == "a\nEND\nX\nb\n"
