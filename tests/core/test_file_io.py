"""Tests for assetdb.core.utils.file_io."""

import pytest

from assetdb.core.utils.file_io import discard, remove_tree, stage_copy, stage_write


class TestStageWrite:
    @pytest.mark.asyncio
    async def test_writes_bytes_beside_target(self, tmp_path):
        target = tmp_path / "file.bin"
        staged = await stage_write(target, b"\x00\x01")
        assert staged.parent == tmp_path
        assert staged.name.startswith(".file.bin.")
        assert staged.read_bytes() == b"\x00\x01"
        assert not target.exists()

    @pytest.mark.asyncio
    async def test_writes_text(self, tmp_path):
        staged = await stage_write(tmp_path / "file.json", '{"a": "é"}')
        assert staged.read_text(encoding="utf-8") == '{"a": "é"}'

    @pytest.mark.asyncio
    async def test_unique_temp_names(self, tmp_path):
        target = tmp_path / "file.bin"
        first = await stage_write(target, b"a")
        second = await stage_write(target, b"b")
        assert first != second

    @pytest.mark.asyncio
    async def test_missing_parent(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await stage_write(tmp_path / "no" / "file.bin", b"x")


class TestStageCopy:
    @pytest.mark.asyncio
    async def test_copy(self, tmp_path):
        source = tmp_path / "src.bin"
        source.write_bytes(b"payload")

        staged = await stage_copy(source, tmp_path / "dest.bin")
        assert staged.read_bytes() == b"payload"
        assert source.exists()
        assert not (tmp_path / "dest.bin").exists()

    @pytest.mark.asyncio
    async def test_missing_source_leaves_nothing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await stage_copy(tmp_path / "gone", tmp_path / "dest.bin")
        assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_discard(tmp_path):
    path = tmp_path / "f"
    path.write_text("x")
    await discard(path)
    assert not path.exists()
    # already gone
    await discard(path)


@pytest.mark.asyncio
async def test_remove_tree(tmp_path):
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    (nested / "f").write_text("x")

    await remove_tree(tmp_path / "a")
    assert not (tmp_path / "a").exists()
