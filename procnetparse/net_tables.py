"""ARP, device and route tables from ``/proc/net/{arp,dev,route}``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, fields
from enum import IntFlag
from functools import reduce
from ipaddress import IPv4Address
from itertools import islice
from operator import or_

from .errors import InternalError

Source = str | Iterable[str]

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DEC_DIGITS = frozenset("0123456789")


class ArpHardware(IntFlag):
    """Hardware type of an ARP table entry."""

    NETROM = 0
    ETHER = 1
    EETHER = 2
    AX25 = 3
    PRONET = 4
    CHAOS = 5
    IEEE802 = 6
    ARCNET = 7
    APPLETLK = 8
    DLCI = 15
    ATM = 19
    METRICOM = 23
    IEEE1394 = 24
    EUI64 = 27
    INFINIBAND = 32


class ArpFlags(IntFlag):
    """Kernel flags of an ARP table entry."""

    COM = 0x02
    PERM = 0x04
    PUBL = 0x08
    USETRAILERS = 0x10
    NETMASK = 0x20
    DONTPUB = 0x40


def _mask(flag_type: type[IntFlag]) -> int:
    return reduce(or_, (int(member) for member in flag_type.__members__.values()), 0)


_HW_MASK = _mask(ArpHardware)
_FLAGS_MASK = _mask(ArpFlags)


@dataclass(frozen=True)
class ArpEntry:
    """An entry in the ARP table; ``hw_address`` is None when unknown or all zero."""

    ip_address: IPv4Address
    hw_type: ArpHardware
    flags: ArpFlags
    hw_address: bytes | None
    device: str


@dataclass(frozen=True)
class DeviceStatus:
    """Receive and transmit counters for one network interface."""

    name: str
    recv_bytes: int
    recv_packets: int
    recv_errs: int
    recv_drop: int
    recv_fifo: int
    recv_frame: int
    recv_compressed: int
    recv_multicast: int
    sent_bytes: int
    sent_packets: int
    sent_errs: int
    sent_drop: int
    sent_fifo: int
    sent_colls: int
    sent_carrier: int
    sent_compressed: int


@dataclass(frozen=True)
class RouteEntry:
    """An entry in the IPv4 route table."""

    iface: str
    destination: IPv4Address
    gateway: IPv4Address
    flags: int
    refcnt: int
    in_use: int
    metrics: int
    mask: IPv4Address
    mtu: int
    window: int
    irtt: int


def _uint(text: str, bits: int, field: str, base: int = 10) -> int:
    digits = text[1:] if text.startswith("+") else text
    allowed = _HEX_DIGITS if base == 16 else _DEC_DIGITS
    if not digits or not set(digits) <= allowed:
        raise InternalError(f"unable to parse {field} from {text!r}")
    value = int(digits, base)
    if value >= 1 << bits:
        raise InternalError(f"{field} {text!r} is out of range")
    return value


def _lines(source: Source) -> Iterator[str]:
    if isinstance(source, str):
        yield from source.splitlines()
    else:
        for line in source:
            yield line.rstrip("\r\n")


def _take(fields_iter: Iterator[str], field: str) -> str:
    try:
        return next(fields_iter)
    except StopIteration:
        raise InternalError(f"missing field {field}") from None


def _strip_hex_prefix(text: str, field: str) -> str:
    if len(text) < 2:
        raise InternalError(f"unable to parse {field} from {text!r}")
    return text[2:]


def _parse_mac(text: str) -> bytes | None:
    parts = text.split(":")
    if len(parts) != 6:
        return None
    octets = bytes(_uint(part, 8, "hw_address", 16) for part in parts)
    if not any(octets):
        return None
    return octets


def parse_arp_entries(source: Source) -> list[ArpEntry]:
    """Parse ``/proc/net/arp``; the first line is a header."""
    entries = []
    for line in islice(_lines(source), 1, None):
        parts = iter(line.split())
        ip_text = _take(parts, "arp::ip_address")
        try:
            ip_address = IPv4Address(ip_text)
        except ValueError:
            raise InternalError(f"unable to parse IPv4 address {ip_text!r}") from None
        hw_text = _strip_hex_prefix(_take(parts, "arp::hw_type"), "hw_type")
        hw_type = ArpHardware(_uint(hw_text, 32, "hw_type", 16) & _HW_MASK)
        flags_text = _strip_hex_prefix(_take(parts, "arp::flags"), "flags")
        flags = ArpFlags(_uint(flags_text, 32, "flags", 16) & _FLAGS_MASK)
        hw_address = _parse_mac(_take(parts, "arp::hw_address"))
        _take(parts, "arp::mask")  # always "*"
        device = _take(parts, "arp::device")
        entries.append(
            ArpEntry(
                ip_address=ip_address,
                hw_type=hw_type,
                flags=flags,
                hw_address=hw_address,
                device=device,
            )
        )
    return entries


_COUNTER_FIELDS = tuple(f.name for f in fields(DeviceStatus) if f.name != "name")


def parse_device_status(line: str) -> DeviceStatus:
    """Parse one interface line of ``/proc/net/dev``."""
    parts = iter(line.split())
    name = _take(parts, "name")
    counters = {
        field: _uint(_take(parts, field), 64, field) for field in _COUNTER_FIELDS
    }
    return DeviceStatus(name=name.rstrip(":"), **counters)


def parse_interface_device_status(source: Source) -> dict[str, DeviceStatus]:
    """Parse ``/proc/net/dev`` into a mapping of interface name to status."""
    devices = {}
    for line in islice(_lines(source), 2, None):
        status = parse_device_status(line)
        devices[status.name] = status
    return devices


def _route_address(text: str, field: str, little_endian: bool) -> IPv4Address:
    value = _uint(text, 32, field, 16)
    return IPv4Address(value.to_bytes(4, "little" if little_endian else "big"))


def parse_route_entries(source: Source, little_endian: bool) -> list[RouteEntry]:
    """Parse ``/proc/net/route``; addresses are in the host byte order ``little_endian`` gives."""
    entries = []
    for line in islice(_lines(source), 1, None):
        parts = iter(line.split())
        iface = _take(parts, "route::iface")
        destination = _route_address(
            _take(parts, "route::destination"), "destination", little_endian
        )
        gateway = _route_address(_take(parts, "route::gateway"), "gateway", little_endian)
        flags = _uint(_take(parts, "route::flags"), 16, "flags", 16)
        refcnt = _uint(_take(parts, "route::refcnt"), 16, "refcnt")
        in_use = _uint(_take(parts, "route::use"), 16, "in_use")
        metrics = _uint(_take(parts, "route::metric"), 32, "metrics")
        mask = _route_address(_take(parts, "route::mask"), "mask", little_endian)
        mtu = _uint(_take(parts, "route::mtu"), 32, "mtu")
        window = _uint(_take(parts, "route::window"), 32, "window")
        irtt = _uint(_take(parts, "route::irtt"), 32, "irtt")
        entries.append(
            RouteEntry(
                iface=iface,
                destination=destination,
                gateway=gateway,
                flags=flags,
                refcnt=refcnt,
                in_use=in_use,
                metrics=metrics,
                mask=mask,
                mtu=mtu,
                window=window,
                irtt=irtt,
            )
        )
    return entries