"""Ban type restricting IPv4/IPv6 addresses and networks."""

import ipaddress
import logging
from typing import Any, Iterable, List, Mapping, Optional

from openban.types.base import StoredBanType
from openban.types.registry import register_ban_type

logger = logging.getLogger(__name__)


@register_ban_type("ip")
class IpBanType(StoredBanType):
    """
    Bans and excludes IP addresses or CIDR networks.

    Items are stored as normalized networks, so "10.0.0.1" is kept as
    "10.0.0.1/32". A subject matches when its address lies inside a
    stored network of the same IP version.
    """

    type_name = "ip"

    def prepare_items(self, items: Iterable[Any]) -> List[str]:
        prepared: List[str] = []
        for item in items:
            try:
                network = ipaddress.ip_network(str(item).strip(), strict=False)
            except ValueError as e:
                raise ValueError(f"Invalid IP address or network: {item!r}") from e
            key = str(network)
            if key not in prepared:
                prepared.append(key)
        return prepared

    def get_subject(self, user_row: Mapping[str, Any]) -> Optional[Any]:
        ip = user_row.get("user_ip") or user_row.get("session_ip")
        if not ip:
            return None
        try:
            return ipaddress.ip_address(str(ip).strip())
        except ValueError:
            logger.debug(f"Ignoring unparsable subject IP: {ip!r}")
            return None

    def matches(self, item: str, subject: Any) -> bool:
        network = ipaddress.ip_network(item)
        return network.version == subject.version and subject in network

    def is_exclude_possible(self) -> bool:
        return True
