import zlib

import pytest

from ecumapkit.checksum import (
    Additive16Checksum,
    AdditiveChecksum,
    ChecksumType,
    CRC16Checksum,
    CRC32Checksum,
    SimpleSum16Checksum,
    SimpleSumChecksum,
    XOR16Checksum,
    XORChecksum,
    available_algorithms,
    calculate_checksum,
    create_algorithm,
    verify_checksum,
)

DIGITS = bytes([0x31, 0x32, 0x33, 0x34, 0x35, 0x36, 0x37, 0x38, 0x39])


def test_simple_sum():
    data = bytes([0x01, 0x02, 0x03, 0x04, 0x05])
    assert calculate_checksum(ChecksumType.SIMPLE_SUM, data) == 0x0F


def test_crc16():
    result = calculate_checksum(ChecksumType.CRC16, DIGITS)
    assert result != 0
    assert result == 0x29B1  # CRC-16/CCITT-FALSE check value


def test_crc32():
    result = calculate_checksum(ChecksumType.CRC32, DIGITS)
    assert 0 < result <= 0xFFFFFFFF
    assert result == CRC32Checksum(0x04C11DB7).calculate(DIGITS)
    assert result == calculate_checksum(ChecksumType.CRC32, DIGITS, 0, len(DIGITS))
    assert calculate_checksum(ChecksumType.CRC32, DIGITS[:-1]) != result


def test_crc32_with_reflected_polynomial_matches_zlib():
    algorithm = CRC32Checksum(0xEDB88320)
    assert algorithm.calculate(DIGITS) == zlib.crc32(DIGITS)


def test_xor():
    data = bytes([0x01, 0x02, 0x03, 0x04])
    assert calculate_checksum(ChecksumType.XOR, data) == 0x04


def test_verify_checksum_with_matching_byte():
    data = bytes([0x01, 0x02, 0x03, 0x04, 0x0A])
    assert verify_checksum(ChecksumType.SIMPLE_SUM, data, 4, 0, 4) is True


def test_verify_checksum_detects_mismatch():
    data = bytes([0x01, 0x02, 0x03, 0x04, 0x0F])
    assert verify_checksum(ChecksumType.SIMPLE_SUM, data, 4, 0, 4) is False


def test_verify_checksum_offset_past_end():
    assert verify_checksum(ChecksumType.XOR, b"\x01\x02", 2) is False


def test_verify_crc32_reads_four_bytes():
    payload = b"abcdef"
    crc = CRC32Checksum().calculate(payload)
    image = payload + crc.to_bytes(4, "little")
    assert verify_checksum(ChecksumType.CRC32, image, len(payload), 0, len(payload))


def test_empty_data_values():
    assert SimpleSumChecksum().calculate(b"") == 0
    assert XORChecksum().calculate(b"") == 0
    assert CRC16Checksum().calculate(b"") == 0xFFFF
    assert CRC32Checksum().calculate(b"") == 0xFFFFFFFF
    assert SimpleSum16Checksum().calculate(b"\x01") == 0


def test_sum16_little_endian_words():
    data = b"\x01\x00\x02\x00\x03\x01"
    assert SimpleSum16Checksum().calculate(data) == 0x0001 + 0x0002 + 0x0103


def test_sum16_aligns_odd_start_and_end():
    data = b"\xff\x01\x00\x02\x00\xff"
    assert SimpleSum16Checksum().calculate(data, 1, 5) == 0x0002


def test_xor16_words():
    data = b"\x0f\x00\xf0\x00"
    assert XOR16Checksum().calculate(data) == 0x00FF


def test_additive_matches_simple_sum():
    data = bytes(range(200))
    assert AdditiveChecksum().calculate(data) == SimpleSumChecksum().calculate(data)
    assert Additive16Checksum().calculate(data) == SimpleSum16Checksum().calculate(data)


def test_end_offset_zero_means_whole_data():
    data = bytes([5, 6, 7])
    algorithm = SimpleSumChecksum()
    assert algorithm.calculate(data, 0, 0) == algorithm.calculate(data, 0, 3)
    assert algorithm.calculate(data, 1) == 13


def test_start_offset_limits_range():
    data = bytes([1, 2, 3, 4])
    assert calculate_checksum(ChecksumType.XOR, data, 2) == 3 ^ 4


def test_names_follow_type_order():
    names = available_algorithms()
    assert len(names) == len(ChecksumType)
    for checksum_type, name in zip(ChecksumType, names):
        algorithm = create_algorithm(checksum_type)
        assert algorithm.name == name
        assert algorithm.type is checksum_type


def test_create_algorithm_rejects_unknown_type():
    with pytest.raises(ValueError):
        create_algorithm("not-a-type")