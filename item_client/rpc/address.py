"""Target address parsing."""

import ipaddress
import re
from dataclasses import dataclass

from item_client.core.exceptions import InvalidAddressError

_HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


@dataclass(frozen=True)
class Address:
    """A parsed ``host:port`` pair."""

    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @property
    def base_url(self) -> str:
        return f"http://{self}"


def _is_valid_host(host: str) -> bool:
    """True for an IP literal or an RFC 1123 hostname."""
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    if len(host) > 253:
        return False
    return all(_HOSTNAME_LABEL.match(label) for label in host.split("."))


def parse_address(value: str) -> Address:
    """
    Parse ``host:port`` into an Address.

    Accepts IPv4 literals, hostnames and bracketed IPv6 literals
    (``[::1]:10818``).

    Raises:
        InvalidAddressError: If the host is missing or not a valid IP or
            hostname, or the port is not an integer in 1..65535.
    """
    text = value.strip()

    if text.startswith("["):
        host, sep, rest = text[1:].partition("]")
        if not sep or not rest.startswith(":"):
            raise InvalidAddressError(value, "expected [host]:port")
        port_text = rest[1:]
        if ":" not in host:
            raise InvalidAddressError(value, "only IPv6 hosts may be bracketed")
    else:
        host, sep, port_text = text.rpartition(":")
        if not sep:
            raise InvalidAddressError(value, "missing port")
        if ":" in host:
            raise InvalidAddressError(value, "IPv6 hosts must be bracketed")

    if not host:
        raise InvalidAddressError(value, "missing host")
    if not _is_valid_host(host):
        raise InvalidAddressError(value, f"host {host!r} is not an IP address or hostname")
    if not (port_text.isascii() and port_text.isdigit()):
        raise InvalidAddressError(value, f"port {port_text!r} is not a number")

    port = int(port_text)
    if not 0 < port < 65536:
        raise InvalidAddressError(value, f"port {port} out of range")

    return Address(host=host, port=port)
