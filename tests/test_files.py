import os
import stat

import pytest

from azure_tts.files import atomic_write_bytes

pytestmark = pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")


def _mode(path):
    return stat.S_IMODE(path.stat().st_mode)


def test_overwrite_keeps_existing_permissions(tmp_path):
    target = tmp_path / "speech.mp3"
    target.write_bytes(b"old")
    os.chmod(target, 0o644)

    atomic_write_bytes(target, b"new audio")

    assert target.read_bytes() == b"new audio"
    assert _mode(target) == 0o644


def test_new_file_gets_umask_default_permissions(tmp_path):
    umask = os.umask(0o022)
    try:
        target = atomic_write_bytes(tmp_path / "nested" / "speech.mp3", b"audio")
    finally:
        os.umask(umask)

    assert _mode(target) == 0o644
    assert list(target.parent.iterdir()) == [target]


def test_failed_write_leaves_target_and_no_temp_file(tmp_path, monkeypatch):
    target = tmp_path / "speech.mp3"
    target.write_bytes(b"old")

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError):
        atomic_write_bytes(target, b"new")

    assert target.read_bytes() == b"old"
    assert list(tmp_path.iterdir()) == [target]
