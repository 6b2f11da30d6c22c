# procnetparse

Parsers for the text tables that Linux exposes under `/proc`. It covers the
networking tables in `/proc/net`, the block device list in `/proc/partitions`,
and the pressure stall information in `/proc/pressure`.

Each parser takes either the whole text as one string or any iterable of lines,
such as an open file. That means they work on saved samples just as well as on
a live system.

## Installation

```
pip install procnetparse
```

It needs Python 3.10 or newer and nothing outside the standard library.

## Modules

| Module | Reads | Entry points |
| --- | --- | --- |
| `procnetparse.net_sockets` | `/proc/net/tcp`, `tcp6`, `udp`, `udp6`, `unix` | `parse_tcp_entries`, `parse_udp_entries`, `parse_unix_entries`, `parse_address_port` |
| `procnetparse.net_tables` | `/proc/net/arp`, `/proc/net/dev`, `/proc/net/route` | `parse_arp_entries`, `parse_interface_device_status`, `parse_device_status`, `parse_route_entries` |
| `procnetparse.snmp` | `/proc/net/snmp` | `parse_snmp` |
| `procnetparse.snmp6` | `/proc/net/snmp6` | `parse_snmp6` |
| `procnetparse.partitions` | `/proc/partitions` | `parse_partitions` |
| `procnetparse.pressure` | `/proc/pressure/cpu`, `memory`, `io` | `parse_cpu_pressure`, `parse_memory_pressure`, `parse_io_pressure`, `get_pressure`, `parse_pressure_record` |

### What each parser returns

- `net_sockets` returns lists of `TcpNetEntry`, `UdpNetEntry` and `UnixNetEntry`.
  - Addresses are `SocketAddress` values, holding an `ipaddress` address and a port.
  - States are the enums `TcpState`, `UdpState` and `UnixState`.
- `net_tables` returns the following:
  - a list of `ArpEntry`, with `ArpHardware` and `ArpFlags` flags, and `hw_address` as 6 bytes or `None` when all zero;
  - a dict that maps each interface name to its `DeviceStatus`;
  - a list of `RouteEntry`.
- `snmp` returns a `Snmp` dataclass with the `IpForwarding` and `TcpRtoAlgorithm` enums. `snmp6` returns a `Snmp6` dataclass.
- `partitions` returns a list of `PartitionEntry`.
- `pressure` returns `CpuPressure`, `MemoryPressure` and `IoPressure`. Each holds a `some` record and a `full` record, and each record is a `PressureRecord`.

The socket and route tables store addresses in the host's byte order. Pass
`little_endian` to say which order the text was written in. On the machine that
produced the text, this is `sys.byteorder == "little"`.

## Examples

TCP sockets:

```python
import sys
from procnetparse.net_sockets import parse_tcp_entries

with open("/proc/net/tcp") as f:
    for entry in parse_tcp_entries(f, sys.byteorder == "little"):
        print(entry.local_address, entry.remote_address, entry.state.name)
```

A single address from a socket table:

```python
from procnetparse.net_sockets import parse_address_port

addr = parse_address_port("0100007F:1234", little_endian=True)
print(addr.ip, addr.port)  # 127.0.0.1 4660
```

Interface counters:

```python
from procnetparse.net_tables import parse_interface_device_status

with open("/proc/net/dev") as f:
    devices = parse_interface_device_status(f)
print(devices["lo"].recv_bytes)
```

SNMP counters:

```python
from procnetparse.snmp import parse_snmp, TcpRtoAlgorithm

with open("/proc/net/snmp") as f:
    snmp = parse_snmp(f)
print(snmp.tcp_curr_estab, snmp.tcp_rto_algorithm is TcpRtoAlgorithm.OTHER)
```

Pressure stall information:

```python
from procnetparse.pressure import parse_pressure_record, parse_memory_pressure

record = parse_pressure_record("full avg10=2.10 avg60=0.12 avg300=0.00 total=391926")
print(record.avg10, record.total)

with open("/proc/pressure/memory") as f:
    memory = parse_memory_pressure(f)
print(memory.some.avg60, memory.full.total)
```

Partitions:

```python
from procnetparse.partitions import parse_partitions

with open("/proc/partitions") as f:
    for part in parse_partitions(f):
        print(part.major, part.minor, part.blocks, part.name)
```

## Errors

Malformed or incomplete input raises an error from `procnetparse.errors`:

- `ProcError` is the base class of all of them.
- The pressure parsers raise `IncompleteError` when a record is missing a field or a field cannot be read.
- The other parsers raise `InternalError` when the text does not have the expected shape. This covers a missing field, a value that is not a number or is out of range, and an unknown state.

```python
from procnetparse.errors import ProcError
from procnetparse.pressure import parse_pressure_record

try:
    parse_pressure_record("some avg10=2.10 avg300=0.00 total=391926")
except ProcError as exc:
    print("bad record:", exc)
```

## What it does not do

The package only parses text that you give it:

- It does not find or open files under `/proc` itself.
- It has no command-line tool.
- It does not detect the host byte order.
- It does not cover `/proc` files other than those listed above, such as process information or CPU information.

## Running the tests

```
pip install -e ".[test]"
pytest
```