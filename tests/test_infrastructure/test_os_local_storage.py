"""
Tests for OsLocalStorage.
"""

import asyncio
import os
from contextlib import aclosing

import pytest

from tg_files.domain.ports import LocalStorage
from tg_files.infrastructure.local_storage import (
    TEMP_DIR_PREFIX,
    TEMP_FILE_NAME,
    OsLocalStorage,
)


@pytest.fixture
def storage(tmp_path):
    return OsLocalStorage(temp_dir=str(tmp_path), chunk_size=100)


def test_satisfies_port(storage):
    assert isinstance(storage, LocalStorage)


class TestIsAbsolute:
    def test_absolute(self, storage):
        assert storage.is_absolute("/var/lib/telegram-bot-api/T/photos/a.jpg")

    def test_relative(self, storage):
        assert not storage.is_absolute("photos/a.jpg")

    def test_empty(self, storage):
        assert not storage.is_absolute("")


class TestCreateTempPath:
    @pytest.mark.asyncio
    async def test_layout(self, storage, tmp_path):
        path = await storage.create_temp_path()
        directory, name = os.path.split(path)
        assert name == TEMP_FILE_NAME
        assert os.path.basename(directory).startswith(TEMP_DIR_PREFIX)
        assert os.path.dirname(directory) == os.path.realpath(tmp_path)

    @pytest.mark.asyncio
    async def test_directory_created_file_not(self, storage):
        path = await storage.create_temp_path()
        assert os.path.isdir(os.path.dirname(path))
        assert not os.path.exists(path)

    @pytest.mark.asyncio
    async def test_fresh_directory_each_call(self, storage):
        paths = {await storage.create_temp_path() for _ in range(5)}
        assert len({os.path.dirname(p) for p in paths}) == 5

    @pytest.mark.asyncio
    async def test_resolves_symlinked_temp_dir(self, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)
        path = await OsLocalStorage(temp_dir=str(link)).create_temp_path()
        assert path.startswith(str(real.resolve()) + os.sep)


class TestCopyFile:
    @pytest.mark.asyncio
    async def test_copies_bytes(self, storage, local_file, tmp_path, file_bytes):
        dest = tmp_path / "copy.pdf"
        await storage.copy_file(str(local_file), str(dest))
        assert dest.read_bytes() == file_bytes
        assert local_file.read_bytes() == file_bytes

    @pytest.mark.asyncio
    async def test_missing_source(self, storage, tmp_path):
        dest = tmp_path / "copy.pdf"
        with pytest.raises(FileNotFoundError):
            await storage.copy_file(str(tmp_path / "nope"), str(dest))
        assert not dest.exists()

    @pytest.mark.asyncio
    async def test_refuses_to_overwrite(self, storage, local_file, tmp_path):
        dest = tmp_path / "existing.pdf"
        dest.write_bytes(b"keep me")
        with pytest.raises(FileExistsError):
            await storage.copy_file(str(local_file), str(dest))
        assert dest.read_bytes() == b"keep me"

    @pytest.mark.asyncio
    async def test_missing_destination_directory(self, storage, local_file, tmp_path):
        with pytest.raises(FileNotFoundError):
            await storage.copy_file(str(local_file), str(tmp_path / "no" / "dir.pdf"))


class TestOpenChunks:
    @pytest.mark.asyncio
    async def test_reads_in_chunk_size_pieces(self, storage, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"x" * 250)
        chunks = [c async for c in storage.open_chunks(str(path))]
        assert [len(c) for c in chunks] == [100, 100, 50]

    @pytest.mark.asyncio
    async def test_empty_file(self, storage, tmp_path):
        path = tmp_path / "empty.bin"
        path.write_bytes(b"")
        assert [c async for c in storage.open_chunks(str(path))] == []

    @pytest.mark.asyncio
    async def test_missing_file_raises_on_first_pull(self, storage, tmp_path):
        chunks = storage.open_chunks(str(tmp_path / "nope"))
        with pytest.raises(FileNotFoundError):
            await chunks.__anext__()

    @pytest.mark.asyncio
    async def test_early_close_releases_handle(self, storage, local_file, monkeypatch):
        opened = []
        real_open = open

        def tracking_open(*args, **kwargs):
            handle = real_open(*args, **kwargs)
            opened.append(handle)
            return handle

        monkeypatch.setattr("builtins.open", tracking_open)
        async with aclosing(storage.open_chunks(str(local_file))) as chunks:
            async for _ in chunks:
                break
        handles = [h for h in opened if h.name == str(local_file)]
        assert len(handles) == 1
        assert handles[0].closed


class TestCopyCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_copy_removes_destination(self, storage, tmp_path):
        source = tmp_path / "big.bin"
        source.write_bytes(b"y" * 500_000)
        dest = tmp_path / "copy.bin"

        task = asyncio.create_task(storage.copy_file(str(source), str(dest)))
        while not dest.exists():
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert not dest.exists()


class TestRemove:
    @pytest.mark.asyncio
    async def test_removes_file(self, storage, tmp_path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"x")
        await storage.remove(str(path))
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_missing_file_is_fine(self, storage, tmp_path):
        await storage.remove(str(tmp_path / "nope"))

    @pytest.mark.asyncio
    async def test_temp_path_takes_its_directory(self, storage):
        path = await storage.create_temp_path()
        with open(path, "wb") as f:
            f.write(b"downloaded")
        await storage.remove(path)
        assert not os.path.exists(os.path.dirname(path))

    @pytest.mark.asyncio
    async def test_unused_temp_path_takes_its_directory(self, storage):
        path = await storage.create_temp_path()
        await storage.remove(path)
        assert not os.path.exists(os.path.dirname(path))

    @pytest.mark.asyncio
    async def test_ordinary_directory_kept(self, storage, tmp_path):
        folder = tmp_path / "downloads"
        folder.mkdir()
        path = folder / TEMP_FILE_NAME
        path.write_bytes(b"x")
        await storage.remove(str(path))
        assert not path.exists()
        assert folder.is_dir()
