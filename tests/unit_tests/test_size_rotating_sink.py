"""
按大小轮转的 sink 单元测试

测试轮转时机、环形序号、槽位复用时的截断以及打开失败的降级处理。
"""

from __future__ import annotations

from pathlib import Path

import pytest

from snakelog import sinks
from snakelog.exceptions import SinkOpenError
from snakelog.sinks import SizeRotatingFileSink


def read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class FlakyOpen:
    """Fails opens in the given modes while ``failing`` is set."""

    def __init__(self, *modes: str) -> None:
        self.modes = modes
        self.failing = False
        self._original = sinks._open_file

    def __call__(self, path: Path, mode: str):
        if self.failing and mode in self.modes:
            raise SinkOpenError(path=str(path), reason="simulated")
        return self._original(path, mode)


class TestConstruction:
    """构造测试"""

    def test_slot_zero_created_at_construction(self, tmp_path) -> None:
        """构造时即创建并打开 0 号文件"""
        sink = SizeRotatingFileSink(tmp_path / "logs", max_size_bytes=10, max_file_count=3)
        assert sink.current_index == 0
        assert (tmp_path / "logs" / "0").exists()
        sink.close()

    def test_existing_slot_zero_is_appended(self, tmp_path) -> None:
        """重启时 0 号文件以追加方式打开，不丢失旧内容"""
        (tmp_path / "0").write_text("old|", encoding="utf-8")
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=100, max_file_count=3)
        sink.write("new")
        sink.close()
        assert read(tmp_path / "0") == "old|new"

    @pytest.mark.parametrize("max_size_bytes,max_file_count", [(0, 3), (-1, 3), (10, 0)])
    def test_non_positive_limits_rejected(self, tmp_path, max_size_bytes, max_file_count) -> None:
        """非正数的大小或文件数量属于编程错误"""
        with pytest.raises(ValueError):
            SizeRotatingFileSink(tmp_path, max_size_bytes=max_size_bytes, max_file_count=max_file_count)


class TestRotation:
    """轮转测试"""

    def test_rotates_before_write_once_limit_reached(self, tmp_path) -> None:
        """写满 10 字节后，下一次写入进入 1 号文件"""
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=10, max_file_count=5)
        assert sink.write("0123456789") == str(tmp_path / "0")
        assert sink.write("X") == str(tmp_path / "1")
        sink.close()
        assert read(tmp_path / "0") == "0123456789"
        assert read(tmp_path / "1") == "X"

    def test_no_rotation_below_limit(self, tmp_path) -> None:
        """未达到上限时继续写同一文件"""
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=10, max_file_count=5)
        sink.write("012345678")
        sink.write("9")
        sink.close()
        assert read(tmp_path / "0") == "0123456789"
        assert not (tmp_path / "1").exists()

    def test_single_write_may_overshoot(self, tmp_path) -> None:
        """单次写入可以超过上限，轮转只发生在两次写入之间"""
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=4, max_file_count=2)
        sink.write("0123456789")
        assert sink.current_index == 0
        sink.write("next")
        assert sink.current_index == 1
        sink.close()
        assert read(tmp_path / "0") == "0123456789"

    def test_index_sequence_is_cyclic(self, tmp_path) -> None:
        """序号按 0,1,...,n-1,0 循环"""
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=1, max_file_count=3)
        names = [Path(sink.write("a")).name for _ in range(7)]
        sink.close()
        assert names == ["0", "1", "2", "0", "1", "2", "0"]

    def test_reused_slot_holds_only_new_output(self, tmp_path) -> None:
        """环绕后复用最老的槽位，旧内容被覆盖"""
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=1, max_file_count=3)
        for text in ("a", "b", "c", "d"):
            sink.write(text)
        sink.close()
        assert read(tmp_path / "0") == "d"
        assert read(tmp_path / "1") == "b"
        assert read(tmp_path / "2") == "c"

    def test_size_counts_utf8_bytes(self, tmp_path) -> None:
        """大小按 UTF-8 字节计算"""
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=6, max_file_count=2)
        sink.write("日本")
        sink.write("x")
        sink.close()
        assert read(tmp_path / "0") == "日本"
        assert read(tmp_path / "1") == "x"


class TestFailures:
    """失败降级测试"""

    def test_unusable_directory_drops_writes(self, tmp_path, diagnostics_stream) -> None:
        """目录不可用时写入被丢弃并写诊断，不抛异常"""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        sink = SizeRotatingFileSink(blocker, max_size_bytes=10, max_file_count=2)
        assert sink.write("lost") is None
        assert sink.write("lost again") is None
        sink.close()
        assert "SINK_OPEN_FAILED" in diagnostics_stream.getvalue()
        assert read(blocker) == "not a directory"

    def test_close_is_idempotent(self, tmp_path) -> None:
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=10, max_file_count=2)
        sink.close()
        sink.close()

    def test_failed_truncation_is_retried_on_next_write(self, tmp_path, monkeypatch, diagnostics_stream) -> None:
        """复用槽位截断打开失败后，下次写入仍先截断旧内容"""
        (tmp_path / "1").write_text("stale", encoding="utf-8")
        flaky = FlakyOpen("wb")
        monkeypatch.setattr(sinks, "_open_file", flaky)
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=1, max_file_count=2)
        assert sink.write("a") == str(tmp_path / "0")
        flaky.failing = True
        assert sink.write("b") is None
        assert "SINK_OPEN_FAILED" in diagnostics_stream.getvalue()
        flaky.failing = False
        assert sink.write("c") == str(tmp_path / "1")
        sink.close()
        assert read(tmp_path / "0") == "a"
        assert read(tmp_path / "1") == "c"

    def test_reopen_after_failed_construction_checks_size(self, tmp_path, monkeypatch) -> None:
        """构造时打开失败，之后的写入重新打开并照常检查大小"""
        (tmp_path / "0").write_text("full", encoding="utf-8")
        flaky = FlakyOpen("ab", "wb")
        flaky.failing = True
        monkeypatch.setattr(sinks, "_open_file", flaky)
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=4, max_file_count=2)
        assert sink.write("lost") is None
        flaky.failing = False
        assert sink.write("x") == str(tmp_path / "1")
        sink.close()
        assert read(tmp_path / "0") == "full"
        assert read(tmp_path / "1") == "x"

    def test_unencodable_text_is_escaped(self, tmp_path) -> None:
        """孤立代理字符以反斜杠转义写入，不抛异常"""
        sink = SizeRotatingFileSink(tmp_path, max_size_bytes=100, max_file_count=2)
        assert sink.write("name=\udcff") == str(tmp_path / "0")
        sink.close()
        assert read(tmp_path / "0") == "name=\\udcff"
