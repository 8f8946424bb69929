"""Unit tests for Attribute (single sysfs attribute file access)."""

import copy
import os
import unittest

from ev3.driver.attribute import Attribute
from ev3.driver.codec import FLOAT
from ev3.errors import InternalError

from tests.sysfs_tree import SysfsTree

CLASS = "tacho-motor"
NAME = "motor0"


class AttributeTestCase(unittest.TestCase):
    """Fresh fake sysfs tree for each test."""

    def setUp(self):
        self.tree = SysfsTree()
        self.tree.add_device(CLASS, NAME)

    def tearDown(self):
        self.tree.cleanup()

    def open(self, attribute_name):
        return Attribute.open(CLASS, NAME, attribute_name, root=self.tree.root)


class TestAttributeOpen(AttributeTestCase):
    """Tests for opening attribute files."""

    def test_permissions_read_write(self):
        """Owner read and write bits give a read-write handle."""
        self.tree.write(CLASS, NAME, "speed_sp", "0\n", mode=0o644)
        attribute = self.open("speed_sp")

        self.assertTrue(attribute.readable)
        self.assertTrue(attribute.writable)
        self.assertEqual(attribute.path, self.tree.path(CLASS, NAME, "speed_sp"))

    def test_permissions_read_only(self):
        """Only the owner read bit gives a read-only handle."""
        self.tree.write(CLASS, NAME, "speed", "0\n", mode=0o444)
        attribute = self.open("speed")

        self.assertTrue(attribute.readable)
        self.assertFalse(attribute.writable)

    def test_permissions_write_only(self):
        """Only the owner write bit gives a write-only handle."""
        self.tree.write(CLASS, NAME, "command", "", mode=0o200)
        attribute = self.open("command")

        self.assertFalse(attribute.readable)
        self.assertTrue(attribute.writable)

    def test_open_write_only_does_not_truncate(self):
        """Opening a write-only file keeps its content."""
        self.tree.write(CLASS, NAME, "command", "stop", mode=0o200)
        self.open("command")

        self.assertEqual(self.tree.read(CLASS, NAME, "command"), "stop")

    def test_permissions_not_requeried(self):
        """Mode changes after open do not affect the handle."""
        path = self.tree.write(CLASS, NAME, "speed_sp", "0\n", mode=0o644)
        attribute = self.open("speed_sp")
        os.chmod(path, 0o444)

        self.assertTrue(attribute.writable)

    def test_open_missing_attribute(self):
        """Missing file raises InternalError chained from the OSError."""
        with self.assertRaises(InternalError) as ctx:
            self.open("does_not_exist")

        self.assertIsInstance(ctx.exception.__cause__, FileNotFoundError)
        self.assertIn("does_not_exist", ctx.exception.message)


class TestAttributeRead(AttributeTestCase):
    """Tests for typed reads."""

    def test_get_string_trims_trailing_whitespace(self):
        self.tree.write(CLASS, NAME, "address", "ev3-ports:outA\n")
        self.assertEqual(self.open("address").get(), "ev3-ports:outA")

    def test_get_int(self):
        self.tree.write(CLASS, NAME, "position", "-90\n")
        self.assertEqual(self.open("position").get(int), -90)

    def test_get_float(self):
        self.tree.write(CLASS, NAME, "hold_pid/Kp", "1.5\n")
        self.assertEqual(self.open("hold_pid/Kp").get(float), 1.5)

    def test_get_with_codec_instance(self):
        self.tree.write(CLASS, NAME, "hold_pid/Kp", "2.25\n")
        self.assertEqual(self.open("hold_pid/Kp").get(FLOAT), 2.25)

    def test_get_parse_failure(self):
        """Parse failures surface as InternalError with the parser message."""
        self.tree.write(CLASS, NAME, "position", "abc\n")

        with self.assertRaises(InternalError) as ctx:
            self.open("position").get(int)

        self.assertIn("invalid literal", ctx.exception.message)
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    def test_get_decode_failure(self):
        """Undecodable bytes surface as InternalError."""
        path = self.tree.path(CLASS, NAME, "address")
        with open(path, "wb") as fp:
            fp.write(b"\xff\xfe\n")

        with self.assertRaises(InternalError):
            self.open("address").get()

    def test_get_list(self):
        """Content is split on whitespace runs."""
        self.tree.write(CLASS, NAME, "state", "a  b\tc\n")
        self.assertEqual(self.open("state").get_list(), ["a", "b", "c"])

    def test_get_list_empty(self):
        self.tree.write(CLASS, NAME, "state", "\n")
        self.assertEqual(self.open("state").get_list(), [])

    def test_get_reflects_external_change(self):
        """Values are not cached; every get reads the file again."""
        self.tree.write(CLASS, NAME, "position", "10\n")
        attribute = self.open("position")
        self.assertEqual(attribute.get(int), 10)

        self.tree.write(CLASS, NAME, "position", "20\n")
        self.assertEqual(attribute.get(int), 20)

    def test_get_on_write_only_fails(self):
        self.tree.write(CLASS, NAME, "command", "", mode=0o200)

        with self.assertRaises(InternalError):
            self.open("command").get()


class TestAttributeWrite(AttributeTestCase):
    """Tests for writes."""

    def test_set_then_get_int(self):
        self.tree.write(CLASS, NAME, "speed_sp", "")
        attribute = self.open("speed_sp")

        attribute.set(-500)
        self.assertEqual(attribute.get(int), -500)

    def test_set_then_get_float(self):
        self.tree.write(CLASS, NAME, "speed_pid/Kd", "")
        attribute = self.open("speed_pid/Kd")

        attribute.set(0.75)
        self.assertEqual(attribute.get(float), 0.75)

    def test_set_writes_without_newline(self):
        self.tree.write(CLASS, NAME, "speed_sp", "")
        self.open("speed_sp").set(250)

        self.assertEqual(self.tree.read(CLASS, NAME, "speed_sp"), "250")

    def test_set_raw(self):
        """set_raw writes the exact string."""
        self.tree.write(CLASS, NAME, "command", "", mode=0o200)
        self.open("command").set_raw("run-forever")

        self.assertEqual(self.tree.read(CLASS, NAME, "command"), "run-forever")

    def test_set_with_explicit_kind(self):
        self.tree.write(CLASS, NAME, "time_sp", "")
        self.open("time_sp").set("1000", int)

        self.assertEqual(self.tree.read(CLASS, NAME, "time_sp"), "1000")

    def test_set_invalid_value_for_kind(self):
        self.tree.write(CLASS, NAME, "time_sp", "")

        with self.assertRaises(InternalError):
            self.open("time_sp").set("soon", int)

    def test_shorter_value_replaces_longer(self):
        """A write leaves no tail of the previous, longer content."""
        self.tree.write(CLASS, NAME, "speed_sp", "1000\n")
        attribute = self.open("speed_sp")

        attribute.set(5)

        self.assertEqual(attribute.get(int), 5)
        self.assertEqual(self.tree.read(CLASS, NAME, "speed_sp"), "5")

    def test_set_bool_fails(self):
        self.tree.write(CLASS, NAME, "speed_sp", "0\n")

        with self.assertRaises(InternalError):
            self.open("speed_sp").set(True)
        self.assertEqual(self.tree.read(CLASS, NAME, "speed_sp"), "0\n")

    def test_set_fractional_as_int_fails(self):
        """Fractions are rejected rather than truncated."""
        self.tree.write(CLASS, NAME, "time_sp", "0\n")

        with self.assertRaises(InternalError) as ctx:
            self.open("time_sp").set(3.9, int)

        self.assertIsInstance(ctx.exception.__cause__, ValueError)
        self.assertEqual(self.tree.read(CLASS, NAME, "time_sp"), "0\n")

    def test_set_unknown_kind_fails(self):
        self.tree.write(CLASS, NAME, "time_sp", "")

        with self.assertRaises(InternalError):
            self.open("time_sp").set(1, dict)

    def test_read_only_get_succeeds_set_fails(self):
        """Read-only handle reads fine but refuses writes."""
        self.tree.write(CLASS, NAME, "speed", "100\n", mode=0o444)
        attribute = self.open("speed")

        self.assertEqual(attribute.get(int), 100)
        with self.assertRaises(InternalError):
            attribute.set(5)
        with self.assertRaises(InternalError):
            attribute.set_raw("5")
        self.assertEqual(self.tree.read(CLASS, NAME, "speed"), "100\n")


class TestAttributeSharing(AttributeTestCase):
    """Tests for clones sharing one open file."""

    def test_clone_shares_descriptor(self):
        self.tree.write(CLASS, NAME, "state", "\n")
        attribute = self.open("state")
        clone = attribute.clone()

        self.assertIsNot(clone, attribute)
        self.assertEqual(clone.raw_descriptor(), attribute.raw_descriptor())
        self.assertEqual(copy.copy(attribute).raw_descriptor(), attribute.raw_descriptor())

    def test_clone_observes_writes(self):
        self.tree.write(CLASS, NAME, "position_sp", "")
        attribute = self.open("position_sp")
        clone = attribute.clone()

        attribute.set(360)
        self.assertEqual(clone.get(int), 360)

    def test_close_closes_for_all_clones(self):
        self.tree.write(CLASS, NAME, "state", "\n")
        attribute = self.open("state")
        clone = attribute.clone()

        clone.close()

        with self.assertRaises(InternalError):
            attribute.get()
        with self.assertRaises(InternalError):
            attribute.set(1)
        self.assertTrue(attribute.closed)

    def test_raw_descriptor_after_close_fails(self):
        self.tree.write(CLASS, NAME, "state", "\n")
        attribute = self.open("state")
        attribute.close()

        with self.assertRaises(InternalError):
            attribute.raw_descriptor()

    def test_raw_descriptor_refers_to_file(self):
        path = self.tree.write(CLASS, NAME, "state", "running\n")
        attribute = self.open("state")
        fd = attribute.raw_descriptor()

        self.assertEqual(os.fstat(fd).st_ino, os.stat(path).st_ino)


if __name__ == "__main__":
    unittest.main()
