import pytest

from subcode_tool.parity import P_CODE, Q_CODE, BlockCode

DATA = bytes((i * 7 + 3) & 0x3F for i in range(20))


def test_code_parameters() -> None:
    assert (P_CODE.block_size, P_CODE.data_size, P_CODE.max_errors) == (24, 20, 2)
    assert (Q_CODE.block_size, Q_CODE.data_size, Q_CODE.max_errors) == (4, 2, 1)


def test_zero_block_is_a_codeword() -> None:
    assert P_CODE.is_correct(bytes(24))
    assert Q_CODE.is_correct(bytes(4))


def test_valid_codeword_needs_no_correction() -> None:
    block = bytearray(P_CODE.encode(DATA))
    assert len(block) == 24
    assert P_CODE.is_correct(block)
    before = bytes(block)
    assert P_CODE.correct_errors(block) == 0
    assert bytes(block) == before


def test_encode_is_systematic() -> None:
    block = bytearray(P_CODE.encode(DATA))
    assert bytes(block[:20]) == DATA
    assert all(b < 64 for b in block)
    P_CODE.correct_errors(block)
    assert bytes(block[:20]) == DATA


@pytest.mark.parametrize("position", range(24))
def test_single_symbol_error_recovered(position: int) -> None:
    original = P_CODE.encode(DATA)
    block = bytearray(original)
    block[position] ^= 0x15
    assert not P_CODE.is_correct(block)
    assert P_CODE.correct_errors(block) == 1
    assert bytes(block) == original


def test_two_symbol_errors_recovered() -> None:
    original = P_CODE.encode(DATA)
    block = bytearray(original)
    block[2] ^= 0x01
    block[21] ^= 0x3F
    assert P_CODE.correct_errors(block) == 2
    assert bytes(block) == original


def test_q_code_single_error() -> None:
    original = Q_CODE.encode(bytes([0x09, 0x06]))
    block = bytearray(original)
    block[0] = 0x0A
    assert not Q_CODE.is_correct(block)
    assert Q_CODE.correct_errors(block) == 1
    assert bytes(block) == original


def test_sizes_are_enforced() -> None:
    with pytest.raises(ValueError):
        P_CODE.is_correct(bytes(23))
    with pytest.raises(ValueError):
        Q_CODE.encode(bytes(3))
    with pytest.raises(ValueError):
        BlockCode("bad", block_size=4, data_size=4)
