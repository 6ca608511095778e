from src.toy16.utils import u8, u16, is_unsigned_nbit, to_bin16, to_hex16

def test_masks_and_formats():
    assert u8(256) == 0 and u8(-1) == 255
    assert u16(0x1_0001) == 1
    assert to_hex16(0x2012) == "0x2012"
    assert to_hex16(0xA, prefix=False) == "000a"
    assert to_bin16(1) == "0" * 15 + "1"

def test_nbit_checks():
    assert is_unsigned_nbit(255, 8)
    assert not is_unsigned_nbit(256, 8)
    assert not is_unsigned_nbit(-1, 8)
