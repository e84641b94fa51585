import pytest
from meanforce.io.discovery import find_block_files


def touch(directory, *names):
    for name in names:
        (directory / name).write_text("")


def test_blocks_in_index_order(tmp_path):
    touch(tmp_path, "sys.160.rot.60.block.2.fout.dat", "sys.160.rot.60.block.10.fout.dat",
          "sys.160.rot.60.block.1.fout.dat", "notes.txt")
    for i in range(3, 10):
        touch(tmp_path, f"sys.160.rot.60.block.{i}.fout.dat")
    files = find_block_files(tmp_path)
    assert [f.name for f in files] == [f"sys.160.rot.60.block.{i}.fout.dat" for i in range(1, 11)]


def test_missing_blocks_are_skipped(tmp_path):
    touch(tmp_path, "run.block.1.fout.dat", "run.block.3.fout.dat")
    assert [f.name for f in find_block_files(tmp_path)] == ["run.block.1.fout.dat", "run.block.3.fout.dat"]


def test_custom_tail(tmp_path):
    touch(tmp_path, "a.block.1.f.txt", "a.block.2.f.txt", "a.block.1.fout.dat")
    assert [f.name for f in find_block_files(tmp_path, tail=".f.txt")] == ["a.block.1.f.txt", "a.block.2.f.txt"]


def test_no_matching_files(tmp_path):
    touch(tmp_path, "frames.fout.dat", "other.dat")
    assert find_block_files(tmp_path) == []


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_block_files(tmp_path / "nowhere")
