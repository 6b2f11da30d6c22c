"""IPv4 SNMP counters from ``/proc/net/snmp``."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Any

from .errors import InternalError

Source = str | Iterable[str]
_Parser = Callable[[str, str], Any]


class IpForwarding(IntEnum):
    """Whether this host acts as an IP gateway."""

    FORWARDING = 1
    NOT_FORWARDING = 2


class TcpRtoAlgorithm(IntEnum):
    """Algorithm used to compute the TCP retransmission timeout."""

    OTHER = 1
    CONSTANT = 2
    RSRE = 3
    VANJ = 4


def _digits(text: str, key: str) -> str:
    if not text or not (text.isascii() and text.isdigit()):
        raise InternalError(f"unable to parse {key} from {text!r}")
    return text


def _unsigned(bits: int) -> _Parser:
    limit = 1 << bits

    def parse(text: str, key: str) -> int:
        value = int(_digits(text[1:] if text.startswith("+") else text, key))
        if value >= limit:
            raise InternalError(f"{key} {text!r} is out of range")
        return value

    return parse


def _signed64(text: str, key: str) -> int:
    negative = text.startswith("-")
    body = text[1:] if text[:1] in ("+", "-") else text
    value = int(_digits(body, key))
    if negative:
        value = -value
    if not -(1 << 63) <= value < (1 << 63):
        raise InternalError(f"{key} {text!r} is out of range")
    return value


def _enum(enum: type[IntEnum]) -> _Parser:
    to_u8 = _unsigned(8)

    def parse(text: str, key: str) -> IntEnum:
        value = to_u8(text, key)
        try:
            return enum(value)
        except ValueError:
            raise InternalError(f"unknown {key} value {value}") from None

    return parse


_U32 = _unsigned(32)
_U64 = _unsigned(64)


def _counter(key: str, parse: _Parser = _U64) -> Any:
    return field(metadata={"key": key, "parse": parse})


@dataclass(frozen=True)
class Snmp:
    """IP, ICMP, TCP, UDP and UDP-Lite counters kept for an SNMP agent."""

    ip_forwarding: IpForwarding = _counter("Ip:Forwarding", _enum(IpForwarding))
    ip_default_ttl: int = _counter("Ip:DefaultTTL", _U32)
    ip_in_receives: int = _counter("Ip:InReceives")
    ip_in_hdr_errors: int = _counter("Ip:InHdrErrors")
    ip_in_addr_errors: int = _counter("Ip:InAddrErrors")
    ip_forw_datagrams: int = _counter("Ip:ForwDatagrams")
    ip_in_unknown_protos: int = _counter("Ip:InUnknownProtos")
    ip_in_discards: int = _counter("Ip:InDiscards")
    ip_in_delivers: int = _counter("Ip:InDelivers")
    ip_out_requests: int = _counter("Ip:OutRequests")
    ip_out_discards: int = _counter("Ip:OutDiscards")
    ip_out_no_routes: int = _counter("Ip:OutNoRoutes")
    ip_reasm_timeout: int = _counter("Ip:ReasmTimeout")
    ip_reasm_reqds: int = _counter("Ip:ReasmReqds")
    ip_reasm_oks: int = _counter("Ip:ReasmOKs")
    ip_reasm_fails: int = _counter("Ip:ReasmFails")
    ip_frag_oks: int = _counter("Ip:FragOKs")
    ip_frag_fails: int = _counter("Ip:FragFails")
    ip_frag_creates: int = _counter("Ip:FragCreates")

    icmp_in_msgs: int = _counter("Icmp:InMsgs")
    icmp_in_errors: int = _counter("Icmp:InErrors")
    icmp_in_csum_errors: int = _counter("Icmp:InCsumErrors")
    icmp_in_dest_unreachs: int = _counter("Icmp:InDestUnreachs")
    icmp_in_time_excds: int = _counter("Icmp:InTimeExcds")
    icmp_in_parm_probs: int = _counter("Icmp:InParmProbs")
    icmp_in_src_quenchs: int = _counter("Icmp:InSrcQuenchs")
    icmp_in_redirects: int = _counter("Icmp:InRedirects")
    icmp_in_echos: int = _counter("Icmp:InEchos")
    icmp_in_echo_reps: int = _counter("Icmp:InEchoReps")
    icmp_in_timestamps: int = _counter("Icmp:InTimestamps")
    icmp_in_timestamp_reps: int = _counter("Icmp:InTimestampReps")
    icmp_in_addr_masks: int = _counter("Icmp:InAddrMasks")
    icmp_in_addr_mask_reps: int = _counter("Icmp:InAddrMaskReps")
    icmp_out_msgs: int = _counter("Icmp:OutMsgs")
    icmp_out_errors: int = _counter("Icmp:OutErrors")
    icmp_out_dest_unreachs: int = _counter("Icmp:OutDestUnreachs")
    icmp_out_time_excds: int = _counter("Icmp:OutTimeExcds")
    icmp_out_parm_probs: int = _counter("Icmp:OutParmProbs")
    icmp_out_src_quenchs: int = _counter("Icmp:OutSrcQuenchs")
    icmp_out_redirects: int = _counter("Icmp:OutRedirects")
    icmp_out_echos: int = _counter("Icmp:OutEchos")
    icmp_out_echo_reps: int = _counter("Icmp:OutEchoReps")
    icmp_out_timestamps: int = _counter("Icmp:OutTimestamps")
    icmp_out_timestamp_reps: int = _counter("Icmp:OutTimestampReps")
    icmp_out_addr_masks: int = _counter("Icmp:OutAddrMasks")
    icmp_out_addr_mask_reps: int = _counter("Icmp:OutAddrMaskReps")

    tcp_rto_algorithm: TcpRtoAlgorithm = _counter(
        "Tcp:RtoAlgorithm", _enum(TcpRtoAlgorithm)
    )
    tcp_rto_min: int = _counter("Tcp:RtoMin")
    tcp_rto_max: int = _counter("Tcp:RtoMax")
    tcp_max_conn: int = _counter("Tcp:MaxConn", _signed64)
    tcp_active_opens: int = _counter("Tcp:ActiveOpens")
    tcp_passive_opens: int = _counter("Tcp:PassiveOpens")
    tcp_attempt_fails: int = _counter("Tcp:AttemptFails")
    tcp_estab_resets: int = _counter("Tcp:EstabResets")
    tcp_curr_estab: int = _counter("Tcp:CurrEstab")
    tcp_in_segs: int = _counter("Tcp:InSegs")
    tcp_out_segs: int = _counter("Tcp:OutSegs")
    tcp_retrans_segs: int = _counter("Tcp:RetransSegs")
    tcp_in_errs: int = _counter("Tcp:InErrs")
    tcp_out_rsts: int = _counter("Tcp:OutRsts")
    tcp_in_csum_errors: int = _counter("Tcp:InCsumErrors")

    udp_in_datagrams: int = _counter("Udp:InDatagrams")
    udp_no_ports: int = _counter("Udp:NoPorts")
    udp_in_errors: int = _counter("Udp:InErrors")
    udp_out_datagrams: int = _counter("Udp:OutDatagrams")
    udp_rcvbuf_errors: int = _counter("Udp:RcvbufErrors")
    udp_sndbuf_errors: int = _counter("Udp:SndbufErrors")
    udp_in_csum_errors: int = _counter("Udp:InCsumErrors")
    udp_ignored_multi: int = _counter("Udp:IgnoredMulti")

    udp_lite_in_datagrams: int = _counter("UdpLite:InDatagrams")
    udp_lite_no_ports: int = _counter("UdpLite:NoPorts")
    udp_lite_in_errors: int = _counter("UdpLite:InErrors")
    udp_lite_out_datagrams: int = _counter("UdpLite:OutDatagrams")
    udp_lite_rcvbuf_errors: int = _counter("UdpLite:RcvbufErrors")
    udp_lite_sndbuf_errors: int = _counter("UdpLite:SndbufErrors")
    udp_lite_in_csum_errors: int = _counter("UdpLite:InCsumErrors")
    udp_lite_ignored_multi: int = _counter("UdpLite:IgnoredMulti")


def _lines(source: Source) -> Iterator[str]:
    if isinstance(source, str):
        yield from source.splitlines()
    else:
        for line in source:
            yield line.rstrip("\r\n")


def _section(header: str, data: str) -> dict[str, str] | None:
    """Pair a header line with its data line; None if the pair is malformed."""
    names = header.split()
    values = data.split()
    if not names or not values:
        return None
    prefix, *names = names
    values = values[1:]
    if len(values) < len(names):
        return None
    return {f"{prefix}{name}": value for name, value in zip(names, values)}


def parse_snmp(source: Source) -> Snmp:
    """Parse ``/proc/net/snmp``: pairs of a header line and a data line per protocol.

    Malformed sections are skipped; a missing or unreadable required counter
    raises :class:`InternalError`.
    """
    table: dict[str, str] = {}
    lines = _lines(source)
    for header in lines:
        section = _section(header, next(lines, ""))
        if section is not None:
            table.update(section)

    values = {}
    for spec in fields(Snmp):
        key = spec.metadata["key"]
        try:
            text = table[key]
        except KeyError:
            raise InternalError(f"missing {key}") from None
        values[spec.name] = spec.metadata["parse"](text, key)
    return Snmp(**values)