"""Builders for Ethernet, IPv4, TCP, UDP, ICMP, ARP and DHCP packets."""

__version__ = "0.1.2"

__all__ = ["__version__"]