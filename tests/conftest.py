"""
Shared fixtures for keepclean tests.
Creates isolated keep/clean trees with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Make the src/ package importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def trees(temp_dir) -> Dict[str, Path]:
    """
    Keep and clean trees for matching scenarios:
    - keep/A.txt and clean/B.txt: same 10 bytes (duplicate)
    - clean/C.txt: 10 bytes, different content (size collision only)
    - keep/photos/pic.JPG and clean/nested/deep/pic_copy.jpg: same 2KB (duplicate in subdirs)
    - keep/only_keep.bin: 300 bytes, no size match in clean
    - clean/only_clean.txt: 77 bytes, no size match in keep
    """
    keep = temp_dir / "keep"
    clean = temp_dir / "clean"
    keep.mkdir()
    clean.mkdir()
    files = {"keep": keep, "clean": clean}

    files["A"] = keep / "A.txt"
    files["A"].write_bytes(b"0123456789")
    files["B"] = clean / "B.txt"
    files["B"].write_bytes(b"0123456789")
    files["C"] = clean / "C.txt"
    files["C"].write_bytes(b"abcdefghij")

    (keep / "photos").mkdir()
    files["keep_pic"] = keep / "photos" / "pic.JPG"
    files["keep_pic"].write_bytes(b"P" * 2048)
    (clean / "nested" / "deep").mkdir(parents=True)
    files["clean_pic"] = clean / "nested" / "deep" / "pic_copy.jpg"
    files["clean_pic"].write_bytes(b"P" * 2048)

    files["only_keep"] = keep / "only_keep.bin"
    files["only_keep"].write_bytes(b"K" * 300)
    files["only_clean"] = clean / "only_clean.txt"
    files["only_clean"].write_bytes(b"Q" * 77)

    return files
