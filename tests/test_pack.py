import pytest

from conftest import make_pack
from subcode_tool.pack import (
    PackCategory,
    PackCorrection,
    classify_pack,
    correct_pack,
    expected_q_parity,
)
from subcode_tool.parity import P_CODE, UncorrectableBlock


class _BrokenCode:
    """Stand-in P code that always reports an unfixable block."""

    data_size = 20

    def is_correct(self, block: bytes) -> bool:
        return False

    def correct_errors(self, block: bytearray) -> int:
        raise UncorrectableBlock("too many errors")


def test_clean_pack(cdg_pack: bytes) -> None:
    pack = bytearray(cdg_pack)
    correction = correct_pack(pack)
    assert correction == PackCorrection()
    assert correction.clean
    assert bytes(pack) == cdg_pack
    assert classify_pack(pack, correction) is PackCategory.CDG


def test_p_error_is_corrected_then_idempotent(cdg_pack: bytes) -> None:
    pack = bytearray(cdg_pack)
    pack[7] ^= 0x22
    correction = correct_pack(pack)
    assert correction.p_corrected
    assert not correction.p_uncorrected
    assert not correction.q_error
    assert correction.corrected_symbols == 1
    assert bytes(pack) == cdg_pack

    again = correct_pack(pack)
    assert (again.p_corrected, again.p_uncorrected, again.q_error) == (False, False, False)
    assert bytes(pack) == cdg_pack


def test_corrupt_mode_byte_restored_by_p(cdg_pack: bytes) -> None:
    pack = bytearray(cdg_pack)
    pack[0] = 0x38
    correction = correct_pack(pack)
    assert correction.p_corrected
    assert not correction.q_error
    assert classify_pack(pack, correction) is PackCategory.CDG


def test_q_error_is_reported_not_corrected() -> None:
    # P parity is valid over a head whose Q parity is wrong
    pack = bytearray(P_CODE.encode(bytes([0x09, 0x01, 0x00, 0x00]) + bytes(16)))
    before = bytes(pack)
    correction = correct_pack(pack)
    assert correction.q_error
    assert not correction.p_corrected
    assert not correction.p_uncorrected
    assert bytes(pack) == before
    assert classify_pack(pack, correction) is PackCategory.OTHER


def test_uncorrectable_pack_left_untouched(cdg_pack: bytes) -> None:
    pack = bytearray(cdg_pack)
    correction = correct_pack(pack, p_code=_BrokenCode())
    assert correction.p_uncorrected
    assert not correction.p_corrected
    assert bytes(pack) == cdg_pack


def test_pack_size_enforced() -> None:
    with pytest.raises(ValueError):
        correct_pack(bytearray(23))


@pytest.mark.parametrize(
    ("mode", "category"),
    [
        (0x00, PackCategory.ZERO),
        (0x03, PackCategory.ZERO),
        (0x08, PackCategory.LINE_GRAPHICS),
        (0x09, PackCategory.CDG),
        (0x0A, PackCategory.CDEG),
        (0x0B, PackCategory.OTHER_GRAPHICS),
        (0x0F, PackCategory.OTHER_GRAPHICS),
        (0x10, PackCategory.OTHER),
        (0x38, PackCategory.OTHER),
    ],
)
def test_classification(mode: int, category: PackCategory) -> None:
    pack = bytes([mode]) + bytes(23)
    assert classify_pack(pack, PackCorrection()) is category


def test_q_error_overrides_mode() -> None:
    pack = bytes([0x09]) + bytes(23)
    assert classify_pack(pack, PackCorrection(q_error=True)) is PackCategory.OTHER


def test_expected_q_parity_matches_encoder() -> None:
    pack = make_pack(0x09, 0x26)
    assert expected_q_parity(pack) == pack[2:4]
    assert str(PackCategory.CDG) == "CD+G"
