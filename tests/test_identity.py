"""Tests for instance naming from (device, inode)."""

from __future__ import annotations

import itertools

import pytest

from winepaths.identity import NATIVE_WORD_BITS, instance_name, server_dir_name


class TestInstanceName:
    def test_compact_single_groups(self):
        assert instance_name(0x801, 0x1234) == "801-1234"

    def test_zero(self):
        assert instance_name(0, 0) == "0-0"

    def test_pure(self):
        assert instance_name(0xFD01, 987654) == instance_name(0xFD01, 987654)

    def test_wide_value_split_into_high_and_padded_low(self):
        assert instance_name(0x1_0000_0002, 5, word_bits=32) == "100000002-5"

    def test_wide_inode(self):
        assert instance_name(3, 0xABC_0000_00FF, word_bits=32) == "3-abc000000ff"

    def test_split_is_lossless(self):
        value = 0xDEAD_0000_BEEF
        dev, _ = instance_name(value, 1, word_bits=32).split("-")
        assert int(dev, 16) == value

    def test_value_at_word_boundary_not_split(self):
        assert instance_name(0xFFFF_FFFF, 1, word_bits=32) == "ffffffff-1"

    def test_native_word_default(self):
        limit = (1 << NATIVE_WORD_BITS) - 1
        assert instance_name(limit, 1) == f"{limit:x}-1"

    def test_distinct_pairs_never_collide(self):
        values = [0, 1, 0xF, 0x10, 0xFFFF_FFFF, 0x1_0000_0000, 0x1_0000_0001, 0x10_0000_0000]
        pairs = list(itertools.product(values, repeat=2))
        names = {instance_name(d, i, word_bits=32) for d, i in pairs}
        assert len(names) == len(pairs)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            instance_name(-1, 1)


def test_server_dir_name_prefix():
    assert server_dir_name(0x801, 0x2A) == "server-801-2a"
