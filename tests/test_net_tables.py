from ipaddress import IPv4Address

import pytest

from procnetparse.errors import InternalError
from procnetparse.net_tables import (
    ArpFlags,
    ArpHardware,
    parse_arp_entries,
    parse_device_status,
    parse_interface_device_status,
    parse_route_entries,
)

ARP_HEADER = "IP address       HW type     Flags       HW address            Mask     Device"

ARP_SAMPLE = "\n".join(
    [
        ARP_HEADER,
        "10.0.0.1         0x1         0x2         02:00:00:00:00:01     *        eth0",
        "10.0.0.2         0x1         0x0         00:00:00:00:00:00     *        eth0",
        "10.0.0.3         0x20        0x6         02:00:00:00:00:02     *        ib0",
    ]
)

DEV_HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|"
    "bytes    packets errs drop fifo colls carrier compressed\n"
)

DEV_SAMPLE = (
    DEV_HEADER
    + "    lo: 1 2 3 4 5 6 7 8 9 10 11 12 13 14 15 16\n"
    + "  eth0: 100 200 0 0 0 0 0 0 300 400 0 0 0 0 0 0\n"
)

ROUTE_HEADER = "Iface\tDestination\tGateway \tFlags\tRefCnt\tUse\tMetric\tMask\t\tMTU\tWindow\tIRTT"
ROUTE_SAMPLE = "\n".join(
    [
        ROUTE_HEADER,
        "eth0\t00000000\t0101A8C0\t0003\t0\t0\t100\t00000000\t0\t0\t0",
        "eth0\t0001A8C0\t00000000\t0001\t2\t5\t100\t00FFFFFF\t1500\t64\t7",
    ]
)


def test_arp_basic_entry():
    entries = parse_arp_entries(ARP_SAMPLE)
    assert len(entries) == 3
    first = entries[0]
    assert first.ip_address == IPv4Address("10.0.0.1")
    assert first.hw_type == ArpHardware.ETHER
    assert first.flags == ArpFlags.COM
    assert first.hw_address == bytes.fromhex("020000000001")
    assert first.device == "eth0"


def test_arp_zero_mac_is_none():
    entries = parse_arp_entries(ARP_SAMPLE)
    assert entries[1].hw_address is None
    assert entries[1].flags == ArpFlags(0)


def test_arp_infiniband_and_combined_flags():
    entry = parse_arp_entries(ARP_SAMPLE)[2]
    assert entry.hw_type == ArpHardware.INFINIBAND
    assert entry.flags == ArpFlags.COM | ArpFlags.PERM
    assert entry.device == "ib0"


def test_arp_unknown_flag_bits_are_dropped():
    text = ARP_HEADER + "\n10.0.0.1 0x1 0x82 02:00:00:00:00:01 * eth0\n"
    (entry,) = parse_arp_entries(text)
    assert entry.flags == ArpFlags.COM


def test_arp_short_mac_is_none():
    text = ARP_HEADER + "\n10.0.0.1 0x1 0x2 02:00:00:00:01 * eth0\n"
    (entry,) = parse_arp_entries(text)
    assert entry.hw_address is None


def test_arp_bad_mac_octet_raises():
    text = ARP_HEADER + "\n10.0.0.1 0x1 0x2 02:00:00:00:00:zz * eth0\n"
    with pytest.raises(InternalError):
        parse_arp_entries(text)


def test_arp_missing_device_raises():
    text = ARP_HEADER + "\n10.0.0.1 0x1 0x2 02:00:00:00:00:01 *\n"
    with pytest.raises(InternalError):
        parse_arp_entries(text)


def test_arp_bad_ip_raises():
    text = ARP_HEADER + "\nnot-an-ip 0x1 0x2 02:00:00:00:00:01 * eth0\n"
    with pytest.raises(InternalError):
        parse_arp_entries(text)


def test_arp_header_only_gives_empty_list():
    assert parse_arp_entries([ARP_HEADER + "\n"]) == []


def test_device_status_line():
    status = parse_device_status("    lo: 1 2 3 4 5 6 7 8 9 10 11 12 13 14 15 16")
    assert status.name == "lo"
    assert status.recv_bytes == 1
    assert status.recv_multicast == 8
    assert status.sent_bytes == 9
    assert status.sent_compressed == 16


def test_device_status_missing_field_raises():
    with pytest.raises(InternalError):
        parse_device_status("eth0: 1 2 3")


def test_device_status_bad_number_raises():
    with pytest.raises(InternalError):
        parse_device_status("eth0: 1 2 3 4 5 6 7 8 9 10 11 12 13 14 15 x")


def test_interface_device_status_map():
    devices = parse_interface_device_status(DEV_SAMPLE)
    assert set(devices) == {"lo", "eth0"}
    eth0 = devices["eth0"]
    assert eth0.recv_bytes == 100
    assert eth0.recv_packets == 200
    assert eth0.sent_bytes == 300
    assert eth0.sent_packets == 400
    assert all(name == status.name for name, status in devices.items())


def test_interface_device_status_from_lines():
    devices = parse_interface_device_status(DEV_SAMPLE.splitlines(keepends=True))
    assert devices["lo"].sent_colls == 14


def test_route_little_endian():
    routes = parse_route_entries(ROUTE_SAMPLE, little_endian=True)
    assert len(routes) == 2
    default = routes[0]
    assert default.iface == "eth0"
    assert default.destination == IPv4Address("0.0.0.0")
    assert default.gateway == IPv4Address("192.168.1.1")
    assert default.flags == 0x0003
    assert default.metrics == 100
    local = routes[1]
    assert local.refcnt == 2
    assert local.in_use == 5
    assert local.mtu == 1500
    assert local.window == 64
    assert local.irtt == 7


def test_route_byte_order_is_reversed_between_endiannesses():
    little = parse_route_entries(ROUTE_SAMPLE, little_endian=True)
    big = parse_route_entries(ROUTE_SAMPLE, little_endian=False)
    for le, be in zip(little, big):
        assert le.gateway.packed == be.gateway.packed[::-1]
        assert le.mask.packed == be.mask.packed[::-1]
        assert le.destination.packed == be.destination.packed[::-1]
    assert big[0].gateway.packed == bytes.fromhex("0101A8C0")


def test_route_missing_field_raises():
    text = ROUTE_HEADER + "\neth0\t00000000\t0101A8C0\t0003\t0\t0\t100\n"
    with pytest.raises(InternalError):
        parse_route_entries(text, little_endian=True)


def test_route_bad_hex_raises():
    text = ROUTE_HEADER + "\neth0\tXYZ\t0101A8C0\t0003\t0\t0\t100\t00000000\t0\t0\t0\n"
    with pytest.raises(InternalError):
        parse_route_entries(text, little_endian=True)