"""IPv6 SNMP counters from ``/proc/net/snmp6``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, fields
from typing import Any

from .errors import InternalError

Source = str | Iterable[str]

_SKIPPED_PREFIXES = ("Icmp6InType", "Icmp6OutType")
_U64_LIMIT = 1 << 64


def _counter(key: str) -> Any:
    return field(metadata={"key": key})


@dataclass(frozen=True)
class Snmp6:
    """IPv6, ICMPv6, UDP and UDP-Lite counters kept for an SNMP agent."""

    ip_in_receives: int = _counter("Ip6InReceives")
    ip_in_hdr_errors: int = _counter("Ip6InHdrErrors")
    ip_in_too_big_errors: int = _counter("Ip6InTooBigErrors")
    ip_in_no_routes: int = _counter("Ip6InNoRoutes")
    ip_in_addr_errors: int = _counter("Ip6InAddrErrors")
    ip_in_unknown_protos: int = _counter("Ip6InUnknownProtos")
    ip_in_truncated_pkts: int = _counter("Ip6InTruncatedPkts")
    ip_in_discards: int = _counter("Ip6InDiscards")
    ip_in_delivers: int = _counter("Ip6InDelivers")
    ip_out_forw_datagrams: int = _counter("Ip6OutForwDatagrams")
    ip_out_requests: int = _counter("Ip6OutRequests")
    ip_out_discards: int = _counter("Ip6OutDiscards")
    ip_out_no_routes: int = _counter("Ip6OutNoRoutes")
    ip_reasm_timeout: int = _counter("Ip6ReasmTimeout")
    ip_reasm_reqds: int = _counter("Ip6ReasmReqds")
    ip_reasm_oks: int = _counter("Ip6ReasmOKs")
    ip_reasm_fails: int = _counter("Ip6ReasmFails")
    ip_frag_oks: int = _counter("Ip6FragOKs")
    ip_frag_fails: int = _counter("Ip6FragFails")
    ip_frag_creates: int = _counter("Ip6FragCreates")
    ip_in_mcast_pkts: int = _counter("Ip6InMcastPkts")
    ip_out_mcast_pkts: int = _counter("Ip6OutMcastPkts")
    ip_in_octets: int = _counter("Ip6InOctets")
    ip_out_octets: int = _counter("Ip6OutOctets")
    ip_in_mcast_octets: int = _counter("Ip6InMcastOctets")
    ip_out_mcast_octets: int = _counter("Ip6OutMcastOctets")
    ip_in_bcast_octets: int = _counter("Ip6InBcastOctets")
    ip_out_bcast_octets: int = _counter("Ip6OutBcastOctets")
    ip_in_no_ect_pkts: int = _counter("Ip6InNoECTPkts")
    ip_in_ect1_pkts: int = _counter("Ip6InECT1Pkts")
    ip_in_ect0_pkts: int = _counter("Ip6InECT0Pkts")
    ip_in_ce_pkts: int = _counter("Ip6InCEPkts")

    icmp_in_msgs: int = _counter("Icmp6InMsgs")
    icmp_in_errors: int = _counter("Icmp6InErrors")
    icmp_out_msgs: int = _counter("Icmp6OutMsgs")
    icmp_out_errors: int = _counter("Icmp6OutErrors")
    icmp_in_csum_errors: int = _counter("Icmp6InCsumErrors")
    icmp_in_dest_unreachs: int = _counter("Icmp6InDestUnreachs")
    icmp_in_pkt_too_bigs: int = _counter("Icmp6InPktTooBigs")
    icmp_in_time_excds: int = _counter("Icmp6InTimeExcds")
    icmp_in_parm_problem: int = _counter("Icmp6InParmProblems")
    icmp_in_echos: int = _counter("Icmp6InEchos")
    icmp_in_echo_replies: int = _counter("Icmp6InEchoReplies")
    icmp_in_group_memb_queries: int = _counter("Icmp6InGroupMembQueries")
    icmp_in_group_memb_responses: int = _counter("Icmp6InGroupMembResponses")
    icmp_in_group_memb_reductions: int = _counter("Icmp6InGroupMembReductions")
    icmp_in_router_solicits: int = _counter("Icmp6InRouterSolicits")
    icmp_in_router_advertisements: int = _counter("Icmp6InRouterAdvertisements")
    icmp_in_neighbor_solicits: int = _counter("Icmp6InNeighborSolicits")
    icmp_in_neighbor_advertisements: int = _counter("Icmp6InNeighborAdvertisements")
    icmp_in_redirects: int = _counter("Icmp6InRedirects")
    icmp_in_mldv2_reports: int = _counter("Icmp6InMLDv2Reports")
    icmp_out_dest_unreachs: int = _counter("Icmp6OutDestUnreachs")
    icmp_out_pkt_too_bigs: int = _counter("Icmp6OutPktTooBigs")
    icmp_out_time_excds: int = _counter("Icmp6OutTimeExcds")
    icmp_out_parm_problems: int = _counter("Icmp6OutParmProblems")
    icmp_out_echos: int = _counter("Icmp6OutEchos")
    icmp_out_echo_replies: int = _counter("Icmp6OutEchoReplies")
    icmp_out_group_memb_queries: int = _counter("Icmp6OutGroupMembQueries")
    icmp_out_group_memb_responses: int = _counter("Icmp6OutGroupMembResponses")
    icmp_out_group_memb_reductions: int = _counter("Icmp6OutGroupMembReductions")
    icmp_out_router_solicits: int = _counter("Icmp6OutRouterSolicits")
    icmp_out_router_advertisements: int = _counter("Icmp6OutRouterAdvertisements")
    icmp_out_neighbor_solicits: int = _counter("Icmp6OutNeighborSolicits")
    icmp_out_neighbor_advertisements: int = _counter("Icmp6OutNeighborAdvertisements")
    icmp_out_redirects: int = _counter("Icmp6OutRedirects")
    icmp_out_mldv2_reports: int = _counter("Icmp6OutMLDv2Reports")

    udp_in_datagrams: int = _counter("Udp6InDatagrams")
    udp_no_ports: int = _counter("Udp6NoPorts")
    udp_in_errors: int = _counter("Udp6InErrors")
    udp_out_datagrams: int = _counter("Udp6OutDatagrams")
    udp_rcvbuf_errors: int = _counter("Udp6RcvbufErrors")
    udp_sndbuf_errors: int = _counter("Udp6SndbufErrors")
    udp_in_csum_errors: int = _counter("Udp6InCsumErrors")
    udp_ignored_multi: int = _counter("Udp6IgnoredMulti")

    udp_lite_in_datagrams: int = _counter("UdpLite6InDatagrams")
    udp_lite_no_ports: int = _counter("UdpLite6NoPorts")
    udp_lite_in_errors: int = _counter("UdpLite6InErrors")
    udp_lite_out_datagrams: int = _counter("UdpLite6OutDatagrams")
    udp_lite_rcvbuf_errors: int = _counter("UdpLite6RcvbufErrors")
    udp_lite_sndbuf_errors: int = _counter("UdpLite6SndbufErrors")
    udp_lite_in_csum_errors: int = _counter("UdpLite6InCsumErrors")


def _lines(source: Source) -> Iterator[str]:
    if isinstance(source, str):
        yield from source.splitlines()
    else:
        for line in source:
            yield line.rstrip("\r\n")


def _u64(text: str, key: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise InternalError(f"unable to parse {key} from {text!r}")
    value = int(digits)
    if value >= _U64_LIMIT:
        raise InternalError(f"{key} {text!r} is out of range")
    return value


def parse_snmp6(source: Source) -> Snmp6:
    """Parse ``/proc/net/snmp6``: one ``name value`` pair per line.

    Empty lines and the per-type ICMPv6 counters are ignored; a missing
    required counter or an unreadable value raises :class:`InternalError`.
    """
    table: dict[str, int] = {}
    for line in _lines(source):
        if not line:
            continue
        parts = iter(line.split())
        name = next(parts, None)
        if name is None:
            raise InternalError("no field")
        if name.startswith(_SKIPPED_PREFIXES):
            continue
        value = next(parts, None)
        if value is None:
            raise InternalError(f"no value for {name}")
        table[name] = _u64(value, name)

    values = {}
    for spec in fields(Snmp6):
        key = spec.metadata["key"]
        try:
            values[spec.name] = table[key]
        except KeyError:
            raise InternalError(f"missing {key}") from None
    return Snmp6(**values)