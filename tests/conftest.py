import os

import pytest

from sharefolder.app import create_app

# Fixed mtime for files whose timestamp is asserted on
STAMP = 1700000000


def _make_symlink(target, link):
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")


@pytest.fixture
def share_root(tmp_path):
    """
    share/
        docs/
            guide.md
            nested/
                deep.txt
        images/
        data.bin
        page.HTML
        photo.JPG
        readme.txt
    """
    root = tmp_path / "share"
    (root / "docs" / "nested").mkdir(parents=True)
    (root / "images").mkdir()
    (root / "docs" / "guide.md").write_text("# Guide\n")
    (root / "docs" / "nested" / "deep.txt").write_text("deep")
    (root / "data.bin").write_bytes(bytes(range(256)) * 8)
    (root / "page.HTML").write_text("<p>hi</p>")
    (root / "photo.JPG").write_bytes(b"\xff\xd8\xff\xe0fakejpeg")
    (root / "readme.txt").write_text("hello world")
    os.utime(root / "readme.txt", (STAMP, STAMP))
    return root


@pytest.fixture
def app(share_root):
    app = create_app(str(share_root))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def symlink():
    return _make_symlink
