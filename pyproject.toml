[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pktgen"
version = "0.1.2"
description = "A modular network packet builder library"
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "packet", "ethernet", "ipv4", "tcp", "udp", "arp", "dhcp", "icmp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["pktgen"]

[tool.pytest.ini_options]
addopts = "-ra"
