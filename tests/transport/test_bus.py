# tests/transport/test_bus.py
"""
ls8emu.transport.busモジュールの単体テスト。
"""
import pytest
from ls8emu.transport.bus import Bus, RAM, BusAccessType, ADDRESS_SPACE_SIZE

# @intent:test_suite 256バイト固定のRAMと、アクセスを記録するバスの動作を検証します。

class TestRAM:
    def test_ram_is_zeroed_256_bytes(self):
        ram = RAM()
        assert ram.dump() == bytes(ADDRESS_SPACE_SIZE)

    def test_ram_read_write_at_both_ends(self):
        ram = RAM()
        ram.write(0x00, 0x12)
        ram.write(0xFF, 0x78)
        assert ram.read(0x00) == 0x12
        assert ram.read(0xFF) == 0x78
        assert ram.dump(0xFE, 2) == bytes([0x00, 0x78])

    # @intent:test_case_oob 8ビット空間外のアドレスへのアクセス時にIndexErrorが発生することを検証します。
    @pytest.mark.parametrize("address", [-1, 0x100])
    def test_ram_address_outside_space(self, address):
        ram = RAM()
        with pytest.raises(IndexError, match="outside the 8-bit address space"):
            ram.read(address)
        with pytest.raises(IndexError, match="outside the 8-bit address space"):
            ram.write(address, 0x00)

    def test_ram_write_invalid_data(self):
        ram = RAM()
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            ram.write(0, 0x100)

class TestBus:
    @pytest.fixture
    def bus(self):
        return Bus()

    def test_read_write_are_logged(self, bus):
        bus.write(0x10, 0xAB)
        assert bus.read(0x10) == 0xAB
        log = bus.get_and_clear_activity_log()
        assert [(a.address, a.data, a.access_type) for a in log] == [
            (0x10, 0xAB, BusAccessType.WRITE),
            (0x10, 0xAB, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    def test_peek_is_not_logged(self, bus):
        bus.write(0x20, 0x01)
        bus.get_and_clear_activity_log()
        assert bus.peek(0x20) == 0x01
        assert bus.get_and_clear_activity_log() == []

    def test_failed_access_is_not_logged(self, bus):
        with pytest.raises(IndexError):
            bus.read(0x100)
        assert bus.get_and_clear_activity_log() == []

    def test_bus_uses_given_ram(self):
        ram = RAM()
        ram.write(0x42, 0x99)
        bus = Bus(ram)
        assert bus.ram is ram
        assert bus.read(0x42) == 0x99
