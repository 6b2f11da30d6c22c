"""Socket tables from ``/proc/net/{tcp,tcp6,udp,udp6,unix}``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from ipaddress import IPv4Address, IPv6Address
from itertools import islice

from .errors import InternalError

Source = str | Iterable[str]

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DEC_DIGITS = frozenset("0123456789")


class TcpState(IntEnum):
    """State of a TCP socket as reported by the kernel."""

    ESTABLISHED = 0x01
    SYN_SENT = 0x02
    SYN_RECV = 0x03
    FIN_WAIT1 = 0x04
    FIN_WAIT2 = 0x05
    TIME_WAIT = 0x06
    CLOSE = 0x07
    CLOSE_WAIT = 0x08
    LAST_ACK = 0x09
    LISTEN = 0x0A
    CLOSING = 0x0B
    NEW_SYN_RECV = 0x0C


class UdpState(IntEnum):
    """State of a UDP socket."""

    ESTABLISHED = 0x01
    CLOSE = 0x07


class UnixState(IntEnum):
    """State of a Unix domain socket."""

    UNCONNECTED = 0x01
    CONNECTING = 0x02
    CONNECTED = 0x03
    DISCONNECTING = 0x04


@dataclass(frozen=True)
class SocketAddress:
    """An IPv4 or IPv6 address together with a port."""

    ip: IPv4Address | IPv6Address
    port: int

    def __str__(self) -> str:
        if isinstance(self.ip, IPv6Address):
            return f"[{self.ip}]:{self.port}"
        return f"{self.ip}:{self.port}"


@dataclass(frozen=True)
class TcpNetEntry:
    """An entry in the TCP socket table."""

    local_address: SocketAddress
    remote_address: SocketAddress
    state: TcpState
    rx_queue: int
    tx_queue: int
    uid: int
    inode: int


@dataclass(frozen=True)
class UdpNetEntry:
    """An entry in the UDP socket table."""

    local_address: SocketAddress
    remote_address: SocketAddress
    state: UdpState
    rx_queue: int
    tx_queue: int
    uid: int
    inode: int


@dataclass(frozen=True)
class UnixNetEntry:
    """An entry in the Unix socket table.

    ``socket_type`` is one of the ``SOCK_*`` constants; ``path`` is the bound
    name, if any, with abstract names starting with ``@``.
    """

    ref_count: int
    socket_type: int
    state: UnixState
    inode: int
    path: str | None


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


def _take(fields: Iterator[str], field: str) -> str:
    try:
        return next(fields)
    except StopIteration:
        raise InternalError(f"missing field {field}") from None


def _state(enum: type[IntEnum], text: str, field: str) -> IntEnum:
    value = _uint(text, 8, field, 16)
    try:
        return enum(value)
    except ValueError:
        raise InternalError(f"unknown {field} value {value:#x}") from None


def parse_address_port(text: str, little_endian: bool) -> SocketAddress:
    """Parse an address such as ``0100007F:1234`` (IPv4) or its 32 hex digit IPv6 form.

    The address is stored as 32-bit words in the host's byte order, which
    ``little_endian`` describes.
    """
    parts = iter(text.split(":"))
    ip_part = _take(parts, "ip_part")
    port = _uint(_take(parts, "port"), 16, "port", 16)

    if len(ip_part) not in (8, 32):
        raise InternalError(f"Unable to parse {text!r} as an address:port")
    try:
        raw = bytes.fromhex(ip_part)
    except ValueError:
        raise InternalError(f"Unable to decode {ip_part!r} as hex") from None
    if len(raw) * 2 != len(ip_part):
        raise InternalError(f"Unable to decode {ip_part!r} as hex")

    words = (raw[start:start + 4] for start in range(0, len(raw), 4))
    packed = b"".join(word[::-1] if little_endian else word for word in words)
    ip: IPv4Address | IPv6Address
    ip = IPv4Address(packed) if len(packed) == 4 else IPv6Address(packed)
    return SocketAddress(ip, port)


def _parse_inet_line(line: str, little_endian: bool, proto: str):
    fields = iter(line.split())
    next(fields, None)
    local = _take(fields, f"{proto}::local_address")
    remote = _take(fields, f"{proto}::rem_address")
    state = _take(fields, f"{proto}::st")
    queues = iter(_take(fields, f"{proto}::tx_queue:rx_queue").split(":", 1))
    tx_queue = _uint(_take(queues, f"{proto}::tx_queue"), 32, "tx_queue", 16)
    rx_queue = _uint(_take(queues, f"{proto}::rx_queue"), 32, "rx_queue", 16)
    next(fields, None)  # tr and tm->when
    next(fields, None)  # retrnsmt
    uid = _uint(_take(fields, f"{proto}::uid"), 32, "uid")
    next(fields, None)  # timeout
    inode = _take(fields, f"{proto}::inode")
    return (
        parse_address_port(local, little_endian),
        parse_address_port(remote, little_endian),
        state,
        rx_queue,
        tx_queue,
        uid,
        _uint(inode, 64, "inode"),
    )


def parse_tcp_entries(source: Source, little_endian: bool) -> list[TcpNetEntry]:
    """Parse ``/proc/net/tcp`` or ``/proc/net/tcp6``; the first line is a header."""
    entries = []
    for line in islice(_lines(source), 1, None):
        local, remote, state, rx_queue, tx_queue, uid, inode = _parse_inet_line(
            line, little_endian, "tcp"
        )
        entries.append(
            TcpNetEntry(
                local_address=local,
                remote_address=remote,
                state=_state(TcpState, state, "tcp state"),
                rx_queue=rx_queue,
                tx_queue=tx_queue,
                uid=uid,
                inode=inode,
            )
        )
    return entries


def parse_udp_entries(source: Source, little_endian: bool) -> list[UdpNetEntry]:
    """Parse ``/proc/net/udp`` or ``/proc/net/udp6``; the first line is a header."""
    entries = []
    for line in islice(_lines(source), 1, None):
        local, remote, state, rx_queue, tx_queue, uid, inode = _parse_inet_line(
            line, little_endian, "udp"
        )
        entries.append(
            UdpNetEntry(
                local_address=local,
                remote_address=remote,
                state=_state(UdpState, state, "udp state"),
                rx_queue=rx_queue,
                tx_queue=tx_queue,
                uid=uid,
                inode=inode,
            )
        )
    return entries


def parse_unix_entries(source: Source) -> list[UnixNetEntry]:
    """Parse ``/proc/net/unix``; the first line is a header."""
    entries = []
    for line in islice(_lines(source), 1, None):
        fields = iter(line.split())
        next(fields, None)  # table slot
        ref_count = _uint(_take(fields, "unix::ref_count"), 32, "ref_count", 16)
        next(fields, None)  # protocol, always zero
        next(fields, None)  # internal kernel flags
        socket_type = _uint(_take(fields, "unix::type"), 16, "socket_type", 16)
        state = _take(fields, "unix::st")
        inode = _uint(_take(fields, "unix::inode"), 64, "inode")
        path = next(fields, None)
        entries.append(
            UnixNetEntry(
                ref_count=ref_count,
                socket_type=socket_type,
                state=_state(UnixState, state, "unix state"),
                inode=inode,
                path=path,
            )
        )
    return entries