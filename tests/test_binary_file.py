import pytest

from ecumapkit.binary_file import BinaryFile
from ecumapkit.endianness import Endianness


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "ecu.bin"
    path.write_bytes(bytes(range(16)))
    bf = BinaryFile()
    bf.load(path)
    return bf, path


def test_load_reads_contents(image):
    bf, path = image
    assert bf.is_loaded
    assert len(bf) == 16
    assert bf.data == bytes(range(16))
    assert bf.filepath == str(path)
    assert not bf.has_changes


def test_load_missing_file_raises_and_clears(image, tmp_path):
    bf, _ = image
    with pytest.raises(OSError):
        bf.load(tmp_path / "missing.bin")
    assert not bf.is_loaded
    assert len(bf) == 0


def test_save_round_trip(image, tmp_path):
    bf, _ = image
    bf.write_byte(3, 0xAA)
    assert bf.has_changes
    target = tmp_path / "out.bin"
    bf.save(target)
    assert not bf.has_changes
    assert bf.filepath == str(target)
    reloaded = BinaryFile()
    reloaded.load(target)
    assert reloaded.data == bf.data


def test_save_without_path_uses_loaded_path(image):
    bf, path = image
    bf.write_byte(0, 0x7F)
    bf.save()
    assert path.read_bytes()[0] == 0x7F


def test_save_without_data_raises(tmp_path):
    with pytest.raises(ValueError):
        BinaryFile().save(tmp_path / "x.bin")
    with pytest.raises(ValueError):
        BinaryFile().save()


def test_reads_out_of_range_return_zero(image):
    bf, _ = image
    assert bf.read_byte(16) == 0
    assert bf.read_uint16(15) == 0
    assert bf.read_int32(13) == 0
    assert bf.read_float(100) == 0.0
    assert bf.read_byte(-1) == 0


def test_little_endian_write_layout(image):
    bf, _ = image
    bf.write_uint16(0, 0x1234)
    assert bf.read_bytes(0, 2) == b"\x34\x12"
    assert bf.read_uint16(0, Endianness.BIG) == 0x3412


@pytest.mark.parametrize("endian", list(Endianness))
def test_typed_round_trips(image, endian):
    bf, _ = image
    bf.write_int16(0, -1234, endian)
    assert bf.read_int16(0, endian) == -1234
    bf.write_uint16(2, 54321, endian)
    assert bf.read_uint16(2, endian) == 54321
    bf.write_int32(4, -123456789, endian)
    assert bf.read_int32(4, endian) == -123456789
    bf.write_uint32(8, 3000000000, endian)
    assert bf.read_uint32(8, endian) == 3000000000
    bf.write_float(12, 2.5, endian)
    assert bf.read_float(12, endian) == 2.5


def test_int8_and_uint8_share_the_byte(image):
    bf, _ = image
    bf.write_int8(5, -1)
    assert bf.read_uint8(5) == 255
    assert bf.read_int8(5) == -1
    bf.write_uint8(6, 200)
    assert bf.read_byte(6) == 200


def test_write_out_of_range_raises(image):
    bf, _ = image
    with pytest.raises(IndexError):
        bf.write_byte(16, 1)
    with pytest.raises(IndexError):
        bf.write_uint32(14, 1)
    assert not bf.has_changes


def test_read_bytes_truncates_and_handles_invalid(image):
    bf, _ = image
    assert bf.read_bytes(14, 10) == bytes([14, 15])
    assert bf.read_bytes(16, 2) == b""


def test_write_bytes_grows_image(image):
    bf, _ = image
    bf.write_bytes(15, b"\xAA\xBB\xCC")
    assert len(bf) == 18
    assert bf.read_bytes(15, 3) == b"\xAA\xBB\xCC"
    assert bf.has_changes


def test_write_bytes_empty_is_noop(image):
    bf, _ = image
    bf.write_bytes(0, b"")
    assert not bf.has_changes
    assert len(bf) == 16


def test_mark_and_clear(image):
    bf, _ = image
    bf.mark_changed()
    assert bf.has_changes
    bf.mark_saved()
    assert not bf.has_changes
    bf.clear()
    assert not bf.is_loaded
    assert bf.filepath == ""
    assert len(bf) == 0


def test_is_valid_offset(image):
    bf, _ = image
    assert bf.is_valid_offset(0)
    assert bf.is_valid_offset(15)
    assert not bf.is_valid_offset(16)
    assert not bf.is_valid_offset(-1)