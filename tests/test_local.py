from __future__ import annotations

import datetime
import os
import stat
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fileutil import EPOCH, LocalConnector, ShortWriteError


class AccessorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.connector = LocalConnector()
        self.path = str(self.tmp / "a.txt")
        Path(self.path).write_bytes(b"hello")
        self.missing = str(self.tmp / "dummy.dummy")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_exists(self) -> None:
        self.assertTrue(self.connector.exists(self.path))
        self.assertTrue(self.connector.exists(str(self.tmp)))
        self.assertFalse(self.connector.exists(self.missing))

    def test_exists_below_regular_file_is_false(self) -> None:
        self.assertFalse(self.connector.exists(os.path.join(self.path, "child")))

    def test_exists_reports_true_on_other_lookup_errors_unless_strict(self) -> None:
        with mock.patch("fileutil.local.os.stat", side_effect=PermissionError(13, "Permission denied")):
            self.assertTrue(self.connector.exists(self.path))
            with self.assertRaises(PermissionError):
                self.connector.exists(self.path, strict=True)

    def test_size(self) -> None:
        self.assertEqual(self.connector.size(self.path), 5)

    def test_missing_path_sentinels(self) -> None:
        self.assertEqual(self.connector.size(self.missing), -1)
        self.assertEqual(self.connector.mod_time(self.missing), EPOCH)
        self.assertLess(self.connector.mod_time_unix(self.missing), 0)
        self.assertLess(self.connector.mod_time_unix_nano(self.missing), 0)
        self.assertEqual(self.connector.mode(self.missing), 0)
        self.assertEqual(self.connector.perm(self.missing), 0)

    def test_mod_time_representations_agree(self) -> None:
        os.utime(self.path, ns=(1_600_000_000_123_456_789, 1_600_000_000_123_456_789))
        self.assertEqual(self.connector.mod_time_unix(self.path), 1_600_000_000)
        self.assertEqual(self.connector.mod_time_unix_nano(self.path), 1_600_000_000_123_456_789)
        self.assertEqual(
            self.connector.mod_time(self.path),
            datetime.datetime(2020, 9, 13, 12, 26, 40, 123456, tzinfo=datetime.timezone.utc),
        )

    def test_mode_and_perm(self) -> None:
        os.chmod(self.path, 0o640)
        self.assertTrue(stat.S_ISREG(self.connector.mode(self.path)))
        self.assertEqual(self.connector.perm(self.path), 0o640)

    def test_get_file_info(self) -> None:
        info = self.connector.get_file_info(self.path)
        self.assertEqual(info.name, "a.txt")
        self.assertEqual(info.type, "file")
        self.assertTrue(info.is_regular)
        self.assertEqual(self.connector.get_file_info(str(self.tmp)).type, "dir")
        with self.assertRaises(FileNotFoundError):
            self.connector.get_file_info(self.missing)


class ReadWriteTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.connector = LocalConnector()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_write_read_round_trip(self) -> None:
        path = str(self.tmp / "data.bin")
        for content in [b"", b"\x00\xffbinary", "ünïcode".encode("utf-8")]:
            self.connector.write(path, content)
            self.assertEqual(self.connector.read(path), content)
            self.assertEqual(self.connector.size(path), len(content))

    def test_write_truncates(self) -> None:
        path = str(self.tmp / "data.txt")
        self.connector.write_string(path, "long content")
        self.connector.write_string(path, "short")
        self.assertEqual(self.connector.read_string(path), "short")

    def test_append(self) -> None:
        path = str(self.tmp / "log.txt")
        self.connector.append_string(path, "one\n")
        self.connector.append_contents(path, "two\n")
        self.assertEqual(self.connector.get_contents(path), "one\ntwo\n")

    def test_put_contents(self) -> None:
        path = str(self.tmp / "put.txt")
        self.connector.put_contents(path, "hello")
        self.assertEqual(self.connector.read(path), b"hello")

    def test_new_file_perm(self) -> None:
        old_umask = os.umask(0)
        try:
            default_path = str(self.tmp / "default.txt")
            self.connector.write(default_path, b"x")
            self.assertEqual(self.connector.perm(default_path), 0o644)

            custom_path = str(self.tmp / "custom.txt")
            self.connector.append(custom_path, b"x", perm=0o600)
            self.assertEqual(self.connector.perm(custom_path), 0o600)

            configured = LocalConnector(new_file_perm="0640")
            configured_path = str(self.tmp / "configured.txt")
            configured.write(configured_path, b"x")
            self.assertEqual(configured.perm(configured_path), 0o640)
        finally:
            os.umask(old_umask)

    def test_existing_file_keeps_mode(self) -> None:
        path = str(self.tmp / "kept.txt")
        self.connector.write(path, b"x")
        os.chmod(path, 0o600)
        self.connector.write(path, b"y", perm=0o666)
        self.assertEqual(self.connector.perm(path), 0o600)

    def test_append_short_write(self) -> None:
        path = str(self.tmp / "short.txt")

        class ShortFile:
            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def write(self, data):
                return len(data) - 1

        with mock.patch.object(LocalConnector, "_open_for_write", return_value=ShortFile()):
            with self.assertRaises(ShortWriteError) as ctx:
                self.connector.append(path, b"abc")
        self.assertEqual(ctx.exception.written, 2)
        self.assertEqual(ctx.exception.expected, 3)

    def test_read_missing_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            self.connector.read(str(self.tmp / "missing"))


class TempTests(unittest.TestCase):
    def test_temp_name(self) -> None:
        connector = LocalConnector()
        name = connector.temp_name()
        try:
            self.assertTrue(os.path.isfile(name))
            self.assertEqual(connector.size(name), 0)
        finally:
            os.remove(name)

    def test_temp_file(self) -> None:
        connector = LocalConnector()
        f = connector.temp_file()
        try:
            f.write(b"temp")
            f.close()
            self.assertEqual(connector.read(f.name), b"temp")
        finally:
            os.remove(f.name)


class ConfigTests(unittest.TestCase):
    def test_from_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "fileutil.yaml"
            config_path.write_text("new_file_perm: '0600'\nchunk_size: 4096\nhardlink: false\n")
            connector = LocalConnector.from_yaml(str(config_path))
        self.assertEqual(connector.new_file_perm, 0o600)
        self.assertEqual(connector.chunk_size, 4096)
        self.assertFalse(connector.hardlink)
        self.assertEqual(connector.encoding, "utf-8")

    def test_from_empty_yaml_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "fileutil.yaml"
            config_path.write_text("")
            connector = LocalConnector.from_yaml(str(config_path))
        self.assertEqual(connector.new_file_perm, 0o644)
        self.assertTrue(connector.hardlink)

    def test_unknown_key_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "fileutil.yaml"
            config_path.write_text("colour: blue\n")
            with self.assertRaises(TypeError):
                LocalConnector.from_yaml(str(config_path))


if __name__ == "__main__":
    unittest.main()
